"""Numerical utilities."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from stlkit.errors import InvalidInputError

__all__ = [
    "moving_average",
    "smallest_odd_at_least",
    "tricube",
]


def moving_average(values: ArrayLike, window: int) -> NDArray[np.float64]:
    """Computes a trailing moving average.

    The first output is the mean of the first ``window`` values; each
    following output drops the oldest value and adds the next one.

    Args:
        values: 1D array-like input.
        window: Number of values averaged per output.

    Returns:
        Array of length ``len(values) - window + 1``.

    Raises:
        InvalidInputError: If ``window`` is not in ``[1, len(values)]``.

    Example:
        >>> moving_average([1, 2, 3, 4, 5], 3)
        array([2., 3., 4.])
    """
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise InvalidInputError(f"values must be 1D; got ndim={arr.ndim}.")
    if window < 1 or window > arr.size:
        raise InvalidInputError(
            f"window must be in [1, {arr.size}] but is {window}."
        )
    csum = np.concatenate(([0.0], np.cumsum(arr)))
    return (csum[window:] - csum[:-window]) / window


def smallest_odd_at_least(value: float) -> int:
    """Returns the smallest odd integer greater than or equal to ``value``."""
    result = math.ceil(value)
    if result % 2 == 0:
        result += 1
    return int(result)


def tricube(u: ArrayLike) -> NDArray[np.float64]:
    """Evaluates the tricube kernel ``(1 - |u|^3)^3``, zero for ``|u| >= 1``."""
    u = np.abs(np.asarray(u, dtype=float))
    return np.where(u < 1.0, (1.0 - u**3) ** 3, 0.0)
