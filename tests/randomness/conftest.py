from __future__ import annotations

from typing import Any

import numpy as np
import numpy.typing as npt
import pytest


class BoundaryDraws:
    """Stands in for a generator whose unit draws are pinned to one end of [0, 1)."""

    def __init__(self, high: bool):
        self.high = high

    def random(self, dtype: npt.DTypeLike = np.float64) -> Any:
        dtype = np.dtype(dtype)
        if self.high:
            return np.nextafter(dtype.type(1), dtype.type(0))
        return dtype.type(0)


@pytest.fixture
def highest_draw() -> BoundaryDraws:
    return BoundaryDraws(high=True)


@pytest.fixture
def lowest_draw() -> BoundaryDraws:
    return BoundaryDraws(high=False)


@pytest.fixture(params=[np.float32, np.float64])
def float_dtype(request: pytest.FixtureRequest) -> type[np.floating[Any]]:
    return request.param  # type: ignore [no-any-return]


@pytest.fixture(params=[np.int8, np.uint8, np.int16, np.int32, np.int64, np.uint64])
def integer_dtype(request: pytest.FixtureRequest) -> type[np.integer[Any]]:
    return request.param  # type: ignore [no-any-return]


@pytest.fixture(params=[["a", "small", "bird", "sang"]])
def choices(request: pytest.FixtureRequest) -> list[str]:
    return request.param  # type: ignore [no-any-return]
