"""
================
Generator Traits
================

Traits bind a numpy bit generator type to a lazily created, process-wide
shared :class:`numpy.random.Generator`. The sampling utilities in
:mod:`rngkit.randomness.core` draw from a traits' shared instance unless
an explicit generator is passed to them.

The shared instances carry no lock. Callers drawing from several threads
should either lock around the calls or hand each thread its own generator
(see :meth:`GeneratorTraits.make_generator` and
:meth:`rngkit.randomness.core.RandomBase.spawn`).

"""
from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import numpy as np
from loguru import logger

from rngkit.randomness.exceptions import UnseededGeneratorError

if TYPE_CHECKING:
    from layered_config_tree import LayeredConfigTree

Seed = int | np.random.SeedSequence


def get_hash(key: str) -> int:
    """Gets a hash of the provided key.

    Parameters
    ----------
    key
        A string used to create a seed for a random number generator.

    Returns
    -------
        A hash of the provided key, small enough to seed a 64-bit generator.
    """
    max_allowable_seed = 18446744073709551615  # 2**64 - 1
    return int(hashlib.sha1(key.encode("utf8")).hexdigest(), 16) % max_allowable_seed


class GeneratorTraits(ABC):
    """Binds a bit generator type to a shared generator instance.

    Subclasses name the bit generator in ``generator_type`` and decide how
    the shared instance comes to life in :meth:`_create_generator`.
    """

    generator_type: type[np.random.BitGenerator]
    """The numpy bit generator backing every generator these traits build."""

    _generator: np.random.Generator | None = None

    @classmethod
    def generator(cls) -> np.random.Generator:
        """Returns the shared generator, creating it on first access."""
        # Look up on the class itself so subclasses never share an instance.
        generator = cls.__dict__.get("_generator")
        if generator is None:
            generator = cls._create_generator()
            cls._generator = generator
        return generator

    @classmethod
    def make_generator(cls, seed: Seed | None = None) -> np.random.Generator:
        """Builds a new, independent generator of this traits' type.

        Parameters
        ----------
        seed
            An integer or seed sequence. ``None`` pulls fresh entropy from
            the operating system.

        Returns
        -------
            A generator that shares no state with the traits' shared instance.
        """
        if not isinstance(seed, np.random.SeedSequence):
            seed = np.random.SeedSequence(seed)
        return np.random.Generator(cls.generator_type(seed))

    @classmethod
    def reset(cls) -> None:
        """Discards the shared generator. The next access creates a new one."""
        cls._generator = None

    @classmethod
    @abstractmethod
    def _create_generator(cls) -> np.random.Generator:
        pass


class FastRandomTraits(GeneratorTraits):
    """A 32-bit Mersenne Twister seeded once from system entropy."""

    generator_type = np.random.MT19937

    @classmethod
    def _create_generator(cls) -> np.random.Generator:
        seed_sequence = np.random.SeedSequence()
        logger.bind(traits=cls.__name__).debug(
            "Seeding shared {} generator from system entropy.", cls.generator_type.__name__
        )
        return cls.make_generator(seed_sequence)


class ServerRandomTraits(GeneratorTraits):
    """A 64-bit PCG generator which must be seeded explicitly.

    Server side randomness is never auto-seeded. Drawing from the shared
    generator before :meth:`seed` or :meth:`seed_from_configuration` has
    been called is a programming error.
    """

    generator_type = np.random.PCG64

    @classmethod
    def _create_generator(cls) -> np.random.Generator:
        raise UnseededGeneratorError(
            f"Use a server seed: call {cls.__name__}.seed(...) before drawing."
        )

    @classmethod
    def seed(cls, seed: Seed | None) -> np.random.Generator:
        """Installs a shared generator built from ``seed``.

        Parameters
        ----------
        seed
            An integer or seed sequence. Reseeding replaces the shared
            instance. ``None`` is rejected rather than drawing from entropy.

        Returns
        -------
            The new shared generator.
        """
        if seed is None:
            raise UnseededGeneratorError(f"{cls.__name__} requires an explicit seed.")
        cls._generator = cls.make_generator(seed)
        logger.bind(traits=cls.__name__).debug(
            "Seeded shared {} generator.", cls.generator_type.__name__
        )
        return cls._generator

    @classmethod
    def seed_from_configuration(cls, configuration: LayeredConfigTree) -> np.random.Generator:
        """Seeds the shared generator from the ``randomness`` configuration block.

        The seed is the hash of ``server_seed`` followed by
        ``additional_seed`` (when set).

        Parameters
        ----------
        configuration
            A configuration tree holding a ``randomness`` block, as built by
            :func:`rngkit.configuration.build_randomness_configuration`.

        Returns
        -------
            The new shared generator.

        Raises
        ------
        UnseededGeneratorError
            If no ``server_seed`` is configured.
        """
        randomness: Any = configuration.randomness
        if randomness.server_seed is None:
            raise UnseededGeneratorError(
                "No randomness.server_seed configured for the server generator."
            )
        key = str(randomness.server_seed)
        if randomness.additional_seed is not None:
            key += str(randomness.additional_seed)
        return cls.seed(get_hash(key))
