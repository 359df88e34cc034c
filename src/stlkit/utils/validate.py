"""Validation utilities for StlKit."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from stlkit.errors import InvalidInputError, PrimitiveFailureError

__all__ = [
    "validate_series",
    "validate_period",
    "validate_window",
    "validate_xy",
]


def validate_series(series: ArrayLike) -> NDArray[np.float64]:
    """Validates a time series and converts it to a 1D float array.

    Non-finite values are allowed through on purpose. They surface later as a
    numeric-degeneracy failure during the decomposition.

    Args:
        series: Array-like of observations.

    Returns:
        A 1D float64 NumPy array.

    Raises:
        InvalidInputError: If ``series`` is not 1D or is empty.
    """
    try:
        arr = np.asarray(series, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError("series must be convertible to a float array.") from e
    if arr.ndim != 1:
        raise InvalidInputError(f"series must be 1D; got ndim={arr.ndim}.")
    if arr.size == 0:
        raise InvalidInputError("series cannot be empty.")
    return arr


def validate_period(period: int) -> int:
    """Validates a seasonal period.

    Args:
        period: Number of observations per seasonal cycle.

    Returns:
        The period as a Python ``int``.

    Raises:
        InvalidInputError: If ``period`` is not an integer or is not positive.
    """
    if isinstance(period, bool) or not isinstance(period, (int, np.integer)):
        raise InvalidInputError(
            f"seasonal period must be an integer; got {type(period).__name__}."
        )
    if period <= 0:
        raise InvalidInputError(f"seasonal period must be positive but is {period}.")
    return int(period)


def validate_window(window: int, *, name: str = "window") -> int:
    """Validates a smoothing window (a neighbour count).

    Args:
        window: The window size.
        name: Name used in error messages.

    Returns:
        The window as a Python ``int``.

    Raises:
        InvalidInputError: If ``window`` is not a positive integer.
    """
    if isinstance(window, bool) or not isinstance(window, (int, np.integer)):
        raise InvalidInputError(f"{name} must be an integer; got {type(window).__name__}.")
    if window < 1:
        raise InvalidInputError(f"{name} must be at least 1 but is {window}.")
    return int(window)


def validate_xy(
    x: ArrayLike,
    y: ArrayLike,
    *,
    min_length: int = 2,
    require_sorted: bool = False,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Validates paired x/y samples for a smoother.

    Requirements:
      - ``x`` and ``y`` are 1D and have the same length.
      - ``x`` is finite.
      - the length is at least ``min_length``.
      - ``x`` is non-decreasing when ``require_sorted`` is set.

    Args:
        x: 1D array-like of x values.
        y: 1D array-like of y values.
        min_length: Smallest number of samples the smoother can fit.
        require_sorted: Whether ``x`` must be non-decreasing.

    Returns:
        Tuple of (x_array, y_array) as float64 NumPy arrays.

    Raises:
        InvalidInputError: If the arrays are malformed or of different lengths.
        PrimitiveFailureError: If there are fewer than ``min_length`` samples.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)

    if x_arr.ndim != 1 or y_arr.ndim != 1:
        raise InvalidInputError("x and y must be 1D.")
    if x_arr.shape[0] != y_arr.shape[0]:
        raise InvalidInputError(
            f"x and y must have the same length; got {x_arr.shape[0]} and {y_arr.shape[0]}."
        )
    if x_arr.shape[0] < min_length:
        raise PrimitiveFailureError(
            f"at least {min_length} samples are needed for local regression; "
            f"got {x_arr.shape[0]}."
        )
    if not np.all(np.isfinite(x_arr)):
        raise InvalidInputError("x must be finite.")
    if require_sorted and np.any(np.diff(x_arr) < 0):
        raise InvalidInputError("x must be non-decreasing for temporal data.")

    return x_arr, y_arr
