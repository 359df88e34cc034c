"""Tests for stlkit.utils.validate."""

import numpy as np
import pytest

from stlkit.errors import InvalidInputError, PrimitiveFailureError
from stlkit.utils.validate import (
    validate_period,
    validate_series,
    validate_window,
    validate_xy,
)


def test_validate_series_converts_to_float_array():
    """Tests that a list of ints becomes a float64 array."""
    out = validate_series([1, 2, 3])
    assert out.dtype == np.float64
    assert out.tolist() == [1.0, 2.0, 3.0]


def test_validate_series_keeps_nan():
    """Tests that NaN values are passed through for later detection."""
    out = validate_series([1.0, np.nan])
    assert np.isnan(out[1])


@pytest.mark.parametrize("bad", [[], [[1.0, 2.0]], ["a", "b"]])
def test_validate_series_rejects_bad_input(bad):
    """Tests that empty, 2D and non-numeric series raise."""
    with pytest.raises(InvalidInputError):
        validate_series(bad)


@pytest.mark.parametrize("period", [1, 4, np.int32(12)])
def test_validate_period_accepts_positive_ints(period):
    """Tests that positive integer periods are accepted."""
    assert validate_period(period) == int(period)


@pytest.mark.parametrize("period", [0, -1, 4.0, None, True])
def test_validate_period_rejects_bad_values(period):
    """Tests that non-positive or non-integer periods raise."""
    with pytest.raises(InvalidInputError):
        validate_period(period)


def test_validate_window():
    """Tests window validation."""
    assert validate_window(9) == 9
    with pytest.raises(InvalidInputError):
        validate_window(0)
    with pytest.raises(InvalidInputError):
        validate_window(2.5)


def test_validate_xy_length_mismatch_is_invalid_input():
    """Tests that mismatched x and y lengths raise InvalidInputError."""
    with pytest.raises(InvalidInputError):
        validate_xy([0.0, 1.0, 2.0], [1.0, 2.0])


def test_validate_xy_too_short_is_primitive_failure():
    """Tests that too few samples raise PrimitiveFailureError."""
    with pytest.raises(PrimitiveFailureError):
        validate_xy([0.0], [1.0], min_length=2)


def test_validate_xy_sorted_requirement():
    """Tests that decreasing x is rejected only when sorting is required."""
    x, y = validate_xy([2.0, 1.0, 0.0], [1.0, 2.0, 3.0])
    assert x.tolist() == [2.0, 1.0, 0.0]
    with pytest.raises(InvalidInputError):
        validate_xy([2.0, 1.0, 0.0], [1.0, 2.0, 3.0], require_sorted=True)


def test_validate_xy_rejects_non_finite_x():
    """Tests that non-finite x values raise."""
    with pytest.raises(InvalidInputError):
        validate_xy([0.0, np.inf], [1.0, 2.0])
