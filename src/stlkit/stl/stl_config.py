"""Configuration of an STL decomposition.

Only the seasonal period, the temporal flag and the FastLoess sample budget
are stored. The low-pass and trend windows are derived from the period so the
trend and seasonal components do not compete for the same variation.
"""

from __future__ import annotations

import numpy as np

from stlkit.errors import InvalidInputError
from stlkit.smoothing.fast_loess import DEFAULT_SAMPLE_BUDGET, MIN_SAMPLE_BUDGET
from stlkit.utils.numerics import smallest_odd_at_least

__all__ = ["StlConfig", "UNSET_PERIOD"]

UNSET_PERIOD = -1


class StlConfig:
    """Configuration of an STL decomposition.

    Attributes:
        period: Observations per seasonal cycle, or ``UNSET_PERIOD``.
        is_temporal: Whether the series is treated as temporal data by the
            smoothers.
        sample_budget: Largest number of points a single smoothing fit uses.
        SEASONAL_WINDOW: Smoothing window of the cycle-subseries (odd, >= 7).
        INNER_ITERATIONS: Passes through the inner loop.
        OUTER_ITERATIONS: Robustness iterations of the outer loop. Reserved;
            the engine runs the inner loop only.
    """

    SEASONAL_WINDOW = 9
    INNER_ITERATIONS = 2
    OUTER_ITERATIONS = 10

    def __init__(
        self,
        period: int = UNSET_PERIOD,
        *,
        is_temporal: bool = True,
        sample_budget: int = DEFAULT_SAMPLE_BUDGET,
    ):
        """Initialize configuration.

        Args:
            period: Number of observations in each seasonal cycle. Either a
                positive integer or ``UNSET_PERIOD`` when periodicity has not
                been resolved yet.
            is_temporal: Forwarded to every smoothing call.
            sample_budget: Sample size cap for FastLoess; must be at least 2.

        Raises:
            InvalidInputError: If ``period`` or ``sample_budget`` is invalid.
        """
        if isinstance(period, bool) or not isinstance(period, (int, np.integer)):
            raise InvalidInputError(
                f"period must be an integer; got {type(period).__name__}."
            )
        if period != UNSET_PERIOD and period <= 0:
            raise InvalidInputError(
                f"period must be positive or UNSET_PERIOD ({UNSET_PERIOD}) but is {period}."
            )
        if isinstance(sample_budget, bool) or not isinstance(sample_budget, (int, np.integer)):
            raise InvalidInputError(
                f"sample_budget must be an integer; got {type(sample_budget).__name__}."
            )
        if sample_budget < MIN_SAMPLE_BUDGET:
            raise InvalidInputError(
                f"sample_budget must be at least {MIN_SAMPLE_BUDGET} but is {sample_budget}."
            )

        self.period = int(period)
        self.is_temporal = bool(is_temporal)
        self.sample_budget = int(sample_budget)

    @property
    def is_period_set(self) -> bool:
        """Whether a seasonal period has been given."""
        return self.period != UNSET_PERIOD

    def _require_period(self) -> int:
        if not self.is_period_set:
            raise InvalidInputError("seasonal period is not set.")
        return self.period

    @property
    def low_pass_window(self) -> int:
        """Smoothing window of the low-pass filter: the least odd integer >= period."""
        period = self._require_period()
        return period + 1 if period % 2 == 0 else period

    @property
    def trend_window(self) -> int:
        """Smoothing window of the trend.

        The least odd integer >= ``1.5 * period / (1 - 1.5 / SEASONAL_WINDOW)``.

        Some STL implementations instead take ``int(value) + 1`` before rounding
        up to odd. The two agree except when the value is a whole number, which
        happens for periods that are multiples of 5: period 5 gives 9 here but
        11 there.
        """
        period = self._require_period()
        raw = 1.5 * period / (1.0 - 1.5 / self.SEASONAL_WINDOW)
        # absorb float drift on exact values, e.g. period 5 -> 9.0
        return smallest_odd_at_least(round(raw, 9))

    def __repr__(self) -> str:
        return (
            f"StlConfig(period={self.period}, is_temporal={self.is_temporal}, "
            f"sample_budget={self.sample_budget})"
        )
