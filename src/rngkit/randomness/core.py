"""
=========================
Core Randomness Functions
=========================

This module provides :class:`RandomBase`, a set of range-correct and
type-correct sampling primitives over numpy generators, and the two
concrete utilities built from it.

Interval conventions
--------------------
The sampling ranges are deliberately not uniform across the float
operations:

=================================  ===============
operation                          range
=================================  ===============
``uniformf()``                     ``(0, 1]``
``uniformf(to)``                   ``[0, to]``
``uniformf(from_, to)``            ``[from_, to)``
``probabilityf()``                 ``[0, 1]``
``uniform(from_, to)``             ``[from_, to]``
``probability()``                  ``[0, 100]``
=================================  ===============

The closed float ranges are produced by moving the upper bound to the next
representable value above it before a half-open draw.

"""
from __future__ import annotations

from collections.abc import Iterable, MutableSequence, Sequence, Sized
from itertools import islice
from typing import Any, TypeVar

import numpy as np
import numpy.typing as npt

from rngkit.randomness.exceptions import RandomnessError
from rngkit.randomness.traits import FastRandomTraits, GeneratorTraits, ServerRandomTraits

T = TypeVar("T")

DEFAULT_INTEGER = np.int64
DEFAULT_FLOAT = np.float64

_MISSING = object()


def _integer_dtype(dtype: npt.DTypeLike) -> np.dtype[Any]:
    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.integer):
        raise TypeError(f"Integral dtype required, got {dtype}.")
    return dtype


def _float_dtype(dtype: npt.DTypeLike) -> np.dtype[Any]:
    dtype = np.dtype(dtype)
    # Generator.random only produces single and double precision.
    if dtype not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise TypeError(f"Floating point dtype required (float32 or float64), got {dtype}.")
    return dtype


def _check_finite(*values: Any) -> None:
    if not np.all(np.isfinite(values)):
        raise RandomnessError(f"Bounds must be finite. Got {values}.")


def _check_ordered(low: Any, high: Any) -> None:
    if low > high:
        raise RandomnessError(f"Lower bound {low} is greater than upper bound {high}.")


def _next_up(value: Any, dtype: np.dtype[Any]) -> Any:
    return np.nextafter(dtype.type(value), np.finfo(dtype).max)


def _half_open(
    low: Any, high: Any, dtype: np.dtype[Any], generator: np.random.Generator
) -> Any:
    """Draws uniformly from ``[low, high)`` in the given float dtype."""
    low = dtype.type(low)
    high = dtype.type(high)
    if not high > low:
        return low
    u = dtype.type(generator.random(dtype=dtype))
    # Interpolate rather than scale the span, which overflows for bounds
    # of opposite sign near the dtype limits.
    value = low * (dtype.type(1) - u) + high * u
    # Rounding can land on either bound.
    if value >= high:
        value = np.nextafter(high, low)
    elif value < low:
        value = low
    return dtype.type(value)


class RandomBase:
    """Sampling and selection primitives parameterized by generator traits.

    Every operation is a classmethod taking an optional keyword-only
    ``generator``. When omitted, the shared instance of :attr:`traits` is
    used and advanced. Concrete utilities subclass this and bind
    :attr:`traits`::

        class Random(RandomBase):
            traits = FastRandomTraits

    Integer operations reject float dtypes and float operations reject
    integer dtypes with a :class:`TypeError` before anything is drawn.
    """

    traits: type[GeneratorTraits]
    """The traits supplying the default generator."""

    @classmethod
    def _generator(cls, generator: np.random.Generator | None) -> np.random.Generator:
        return generator if generator is not None else cls.traits.generator()

    @classmethod
    def spawn(cls, n: int) -> list[np.random.Generator]:
        """Returns ``n`` independent generators derived from the shared one.

        Hand one to each thread or worker instead of sharing the default
        instance.
        """
        seed_sequence = cls.traits.generator().bit_generator.seed_seq
        return [cls.traits.make_generator(child) for child in seed_sequence.spawn(n)]

    ############
    # Integers #
    ############

    @classmethod
    def uniform(
        cls,
        from_: Any = None,
        to: Any = None,
        *,
        dtype: npt.DTypeLike = DEFAULT_INTEGER,
        generator: np.random.Generator | None = None,
    ) -> Any:
        """Draws an integer uniformly from a closed interval.

        Called with no bounds, draws from the full range of ``dtype``. Called
        with a single bound, draws from ``[0, bound]``. Called with two
        bounds, draws from ``[from_, to]``.

        Parameters
        ----------
        from_
            The lower bound, or the upper bound when it is the only one given.
        to
            The upper bound.
        dtype
            An integer dtype for the result.
        generator
            The generator to draw from.

        Returns
        -------
            A scalar of ``dtype``.

        Raises
        ------
        TypeError
            If ``dtype`` is not an integer dtype.
        RandomnessError
            If the lower bound is greater than the upper bound.
        """
        dtype = _integer_dtype(dtype)
        info = np.iinfo(dtype)
        if from_ is None:
            low, high = info.min, info.max
        elif to is None:
            low, high = 0, from_
        else:
            low, high = from_, to
        _check_ordered(low, high)
        if low < info.min or high > info.max:
            raise RandomnessError(f"Bounds [{low}, {high}] do not fit in {dtype}.")
        value = cls._generator(generator).integers(low, high, dtype=dtype, endpoint=True)
        return dtype.type(value)

    @classmethod
    def probability(
        cls,
        *,
        dtype: npt.DTypeLike = DEFAULT_INTEGER,
        generator: np.random.Generator | None = None,
    ) -> Any:
        """Draws a percentage uniformly from ``[0, 100]``."""
        return cls.uniform(0, 100, dtype=dtype, generator=generator)

    @classmethod
    def yes_no(cls, *, generator: np.random.Generator | None = None) -> bool:
        """Returns ``True`` or ``False`` with equal probability."""
        return bool(cls.uniform(0, 1, dtype=np.int32, generator=generator))

    ##########
    # Floats #
    ##########

    @classmethod
    def uniformf(
        cls,
        from_: Any = None,
        to: Any = None,
        *,
        dtype: npt.DTypeLike = DEFAULT_FLOAT,
        generator: np.random.Generator | None = None,
    ) -> Any:
        """Draws a float uniformly.

        ============================  ================
        call                          range
        ============================  ================
        ``uniformf()``                ``(0, 1]``
        ``uniformf(to)``              ``[0, to]``
        ``uniformf(from_, to)``       ``[from_, to)``
        ============================  ================

        The two-bound form is half-open while the one-bound form is closed.
        Callers must not rely on 0 from the no-bound form.

        Parameters
        ----------
        from_
            The lower bound, or the upper bound when it is the only one given.
        to
            The upper bound.
        dtype
            ``float32`` or ``float64``.
        generator
            The generator to draw from.

        Returns
        -------
            A scalar of ``dtype``.

        Raises
        ------
        TypeError
            If ``dtype`` is not a supported float dtype.
        RandomnessError
            If a bound is not finite or the bounds are inverted.
        """
        dtype = _float_dtype(dtype)
        generator = cls._generator(generator)
        if from_ is None:
            return dtype.type(1 - dtype.type(generator.random(dtype=dtype)))
        if to is None:
            _check_finite(from_)
            _check_ordered(0, from_)
            return _half_open(0, _next_up(from_, dtype), dtype, generator)
        _check_finite(from_, to)
        _check_ordered(from_, to)
        return _half_open(from_, to, dtype, generator)

    @classmethod
    def probabilityf(
        cls,
        *,
        dtype: npt.DTypeLike = DEFAULT_FLOAT,
        generator: np.random.Generator | None = None,
    ) -> Any:
        """Draws a probability uniformly from ``[0, 1]``."""
        dtype = _float_dtype(dtype)
        return _half_open(0, _next_up(1, dtype), dtype, cls._generator(generator))

    @classmethod
    def normalf(
        cls,
        mean: Any,
        stddev: Any,
        *,
        dtype: npt.DTypeLike = DEFAULT_FLOAT,
        generator: np.random.Generator | None = None,
    ) -> Any:
        """Draws from a normal distribution.

        Raises
        ------
        RandomnessError
            If ``stddev`` is not strictly positive or either parameter is not
            finite.
        """
        dtype = _float_dtype(dtype)
        _check_finite(mean, stddev)
        if stddev <= 0:
            raise RandomnessError(f"Standard deviation must be positive. Got {stddev}.")
        z = cls._generator(generator).standard_normal(dtype=dtype)
        return dtype.type(dtype.type(mean) + dtype.type(stddev) * z)

    @classmethod
    def triangularf(
        cls,
        a: Any,
        b: Any,
        c: Any,
        *,
        dtype: npt.DTypeLike = DEFAULT_FLOAT,
        generator: np.random.Generator | None = None,
    ) -> Any:
        """Draws from a triangular distribution by inverting its CDF.

        See
        https://en.wikipedia.org/wiki/Triangular_distribution#Generating_triangular-distributed_random_variates

        Parameters
        ----------
        a
            The lower limit.
        b
            The upper limit.
        c
            The mode, with ``a <= c <= b``.
        dtype
            ``float32`` or ``float64``.
        generator
            The generator to draw from.

        Returns
        -------
            A scalar of ``dtype`` in ``[a, b]``.

        Raises
        ------
        RandomnessError
            If the parameters are not finite or not ordered ``a <= c <= b``.
        """
        dtype = _float_dtype(dtype)
        _check_finite(a, b, c)
        if not a <= c <= b:
            raise RandomnessError(
                f"Triangular parameters must satisfy a <= c <= b. Got {a, b, c}."
            )
        a, b, c = dtype.type(a), dtype.type(b), dtype.type(c)
        if a == b:
            return a

        u = cls.uniformf(dtype=dtype, generator=generator)
        f = (c - a) / (b - a)
        if u < f:
            value = a + np.sqrt(u * (b - a) * (c - a))
        else:
            value = b - np.sqrt((1 - u) * (b - a) * (b - c))
        return dtype.type(np.clip(value, a, b))

    ###############
    # Collections #
    ###############

    @classmethod
    def uniform_from(
        cls,
        collection: Sequence[T] | Iterable[T],
        *,
        generator: np.random.Generator | None = None,
    ) -> T:
        """Picks an element of a non-empty collection with equal probability.

        Parameters
        ----------
        collection
            Any sized, ordered iterable: a list, tuple, string, range, deque,
            1-d numpy array or dict view.
        generator
            The generator to draw from.

        Returns
        -------
            The chosen element.

        Raises
        ------
        RandomnessError
            If the collection is empty.
        """
        size = _size(collection)
        if size == 0:
            raise RandomnessError("Cannot pick from an empty collection.")
        offset = cls.uniform(size - 1, dtype=DEFAULT_INTEGER, generator=generator)
        return _advance(collection, int(offset))

    @classmethod
    def weighted_from(
        cls,
        weights: Sequence[float] | npt.ArrayLike,
        collection: Sequence[T] | Iterable[T],
        *,
        generator: np.random.Generator | None = None,
    ) -> T:
        """Picks an element with probability proportional to its weight.

        ``weights`` runs parallel to ``collection``. Keeping the two aligned
        is the caller's responsibility; a draw landing past the end of the
        collection is an error.

        Parameters
        ----------
        weights
            Non-negative relative weights, at least one of them positive.
        collection
            Any sized, ordered iterable.
        generator
            The generator to draw from.

        Returns
        -------
            The chosen element.

        Raises
        ------
        RandomnessError
            If the weights are empty, negative, non-finite or all zero, or
            if the chosen index falls outside the collection.
        """
        offset = cls._weighted_index(weights, generator)
        if offset >= _size(collection):
            raise RandomnessError(
                f"Weighted draw picked index {offset} from a collection "
                f"of size {_size(collection)}."
            )
        return _advance(collection, offset)

    @classmethod
    def _weighted_index(
        cls, weights: Sequence[float] | npt.ArrayLike, generator: np.random.Generator | None
    ) -> int:
        p = np.asarray(weights, dtype=np.float64)
        if p.ndim != 1 or p.size == 0:
            raise RandomnessError(f"Weights must be a non-empty 1-d sequence. Weights: {p}.")
        if not np.all(np.isfinite(p)) or np.any(p < 0):
            raise RandomnessError(f"Weights must be finite and non-negative. Weights: {p}.")

        p_bins = np.cumsum(p)
        total = p_bins[-1]
        if total <= 0:
            raise RandomnessError(f"At least one weight must be positive. Weights: {p}.")

        # The draw lies in (0, total] so zero-weight bins are never selected.
        draw = cls.uniformf(generator=generator) * total
        return int((draw > p_bins).sum())

    @classmethod
    def shuffle(
        cls,
        sequence: MutableSequence[Any] | np.ndarray,
        first: int = 0,
        last: int | None = None,
        *,
        generator: np.random.Generator | None = None,
    ) -> None:
        """Shuffles ``sequence[first:last]`` in place.

        Uses the Fisher-Yates algorithm, so every permutation of the range is
        equally likely.
        """
        generator = cls._generator(generator)
        first, last, _ = slice(first, last).indices(len(sequence))
        if isinstance(sequence, np.ndarray):
            # Shuffles along the first axis through the slice view.
            generator.shuffle(sequence[first:last])
            return
        for i in range(last - 1, first, -1):
            j = int(generator.integers(first, i, endpoint=True))
            sequence[i], sequence[j] = sequence[j], sequence[i]


def _size(collection: Any) -> int:
    if not isinstance(collection, Sized):
        raise TypeError(f"Collection of type {type(collection).__name__} has no size.")
    return len(collection)


def _advance(collection: Iterable[T], offset: int) -> T:
    element = next(islice(collection, offset, None), _MISSING)
    if element is _MISSING:
        raise RandomnessError(f"Offset {offset} is past the end of the collection.")
    return element  # type: ignore [return-value]


class Random(RandomBase):
    """Utilities over the fast, entropy-seeded shared generator."""

    traits = FastRandomTraits


class ServerRandom(RandomBase):
    """Utilities over the explicitly seeded server generator."""

    traits = ServerRandomTraits
