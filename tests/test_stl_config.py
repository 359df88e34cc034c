"""Tests for stlkit.stl.stl_config."""

import numpy as np
import pytest

from stlkit.errors import InvalidInputError
from stlkit.stl.stl_config import UNSET_PERIOD, StlConfig


def test_defaults():
    """Tests default values and constants."""
    config = StlConfig()
    assert config.period == UNSET_PERIOD
    assert not config.is_period_set
    assert config.is_temporal
    assert config.sample_budget == 100
    assert StlConfig.SEASONAL_WINDOW == 9
    assert StlConfig.INNER_ITERATIONS == 2
    assert StlConfig.OUTER_ITERATIONS == 10


@pytest.mark.parametrize("period, expected", [(1, 1), (4, 5), (5, 5), (12, 13), (24, 25)])
def test_low_pass_window_is_least_odd_at_least_period(period, expected):
    """Tests the derived low-pass window."""
    assert StlConfig(period).low_pass_window == expected


@pytest.mark.parametrize(
    "period, expected",
    [(1, 3), (4, 9), (5, 9), (7, 13), (10, 19), (12, 23), (24, 45)],
)
def test_trend_window(period, expected):
    """Tests the derived trend window against 1.5 * np / (1 - 1.5 / ns)."""
    assert StlConfig(period).trend_window == expected


@pytest.mark.parametrize("period", [5, 15, 25])
def test_trend_window_keeps_whole_odd_values(period):
    """Tests that an exact odd value is used as is rather than bumped by two."""
    assert StlConfig(period).trend_window == round(1.8 * period)


def test_trend_window_is_odd_and_large_enough():
    """Tests the trend window invariants over a range of periods."""
    for period in range(1, 200):
        nt = StlConfig(period).trend_window
        assert nt % 2 == 1
        assert nt >= 1.5 * period / (1.0 - 1.5 / 9) - 1e-9
        assert nt - 2 < 1.5 * period / (1.0 - 1.5 / 9)


def test_derived_windows_require_period():
    """Tests that derived windows are undefined without a period."""
    config = StlConfig()
    with pytest.raises(InvalidInputError):
        config.low_pass_window
    with pytest.raises(InvalidInputError):
        config.trend_window


@pytest.mark.parametrize("period", [0, -2, 4.0, "4", True])
def test_rejects_bad_periods(period):
    """Tests period validation at construction."""
    with pytest.raises(InvalidInputError):
        StlConfig(period)


@pytest.mark.parametrize("budget", [1, 0, 50.0])
def test_rejects_bad_sample_budget(budget):
    """Tests sample budget validation at construction."""
    with pytest.raises(InvalidInputError):
        StlConfig(4, sample_budget=budget)


def test_accepts_numpy_integers_and_repr():
    """Tests NumPy integer periods and the repr."""
    config = StlConfig(np.int64(6), is_temporal=False, sample_budget=50)
    assert config.period == 6
    assert isinstance(config.period, int)
    assert repr(config) == "StlConfig(period=6, is_temporal=False, sample_budget=50)"
