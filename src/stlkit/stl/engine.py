"""STL decomposition engine.

Implements the inner loop of Seasonal-Trend decomposition using Loess
(Cleveland et al., 1990, sections 2 and 3). Each pass

1. detrends the series with the current trend,
2. smooths every cycle-subseries and pads it by one point at each end,
3. low-pass filters the recombined cycle-subseries,
4. takes the seasonal component as their difference,
5. deseasonalizes the series, and
6. smooths the result into the next trend.

The outer robustness loop of the reference algorithm is not run; see
:attr:`stlkit.stl.stl_config.StlConfig.OUTER_ITERATIONS`.
"""

from __future__ import annotations

from typing import Type

import numpy as np
from numpy.typing import ArrayLike

from stlkit.errors import InvalidInputError, PrimitiveFailureError, StlError
from stlkit.logger import stlkit_logger
from stlkit.smoothing.fast_loess import FastLoess
from stlkit.smoothing.loess import LocalRegressionSmoother, Loess
from stlkit.stl.result import (
    DecompositionFailure,
    DecompositionResult,
    FailureKind,
)
from stlkit.stl.stl_config import StlConfig
from stlkit.utils.coordinate_cache import CoordinateCache, default_coordinate_cache
from stlkit.utils.numerics import moving_average
from stlkit.utils.types import FloatArray
from stlkit.utils.validate import validate_period, validate_series

__all__ = ["StlEngine"]


class StlEngine:
    """Decomposes one series into seasonal, trend and residual components.

    The engine owns no state shared with other engines except the coordinate
    cache, so separate instances can run on separate threads.

    Example:
        >>> import numpy as np
        >>> from stlkit.stl.engine import StlEngine
        >>> from stlkit.stl.stl_config import StlConfig
        >>> y = np.tile([10.0, 12.0, 9.0, 11.0], 3)
        >>> outcome = StlEngine(y, StlConfig(4)).decompose()
        >>> outcome.ok
        True

    Attributes:
        y: The input series as a float array.
        config: The :class:`StlConfig` in effect.
        coordinate_cache: Source of synthetic x coordinates.
        smoother_cls: Local-regression smoother used by every FastLoess call.
    """

    def __init__(
        self,
        series: ArrayLike,
        config: StlConfig,
        *,
        coordinate_cache: CoordinateCache | None = None,
        smoother_cls: Type[LocalRegressionSmoother] = Loess,
    ):
        """Initializes the engine.

        Args:
            series: Equally spaced observations, length >= 1.
            config: Decomposition settings with a resolved seasonal period.
            coordinate_cache: Cache of synthetic x values. Defaults to the
                process-wide :data:`default_coordinate_cache`.
            smoother_cls: Class implementing :class:`LocalRegressionSmoother`.

        Raises:
            InvalidInputError: If the series is empty or the period is not a
                positive integer.
        """
        if not isinstance(config, StlConfig):
            raise InvalidInputError(
                f"config must be a StlConfig; got {type(config).__name__}."
            )
        self.y = validate_series(series)
        self.period = validate_period(config.period)
        self.config = config
        self.coordinate_cache = (
            default_coordinate_cache if coordinate_cache is None else coordinate_cache
        )
        self.smoother_cls = smoother_cls

        if self.y.size < 2 * self.period:
            stlkit_logger.warning(
                "Series of length %d spans fewer than two cycles of period %d; "
                "some cycle-subseries are too short to smooth.",
                self.y.size, self.period,
            )

    def decompose(self) -> DecompositionResult | DecompositionFailure:
        """Runs the decomposition.

        Returns:
            A :class:`DecompositionResult` on success. A
            :class:`DecompositionFailure` if a NaN appears in the recombined
            cycle-subseries or if the smoother rejects one of its inputs.
        """
        try:
            return self._run()
        except StlError as e:
            stlkit_logger.debug("Decomposition failed: %s", e)
            return DecompositionFailure.from_error(e)

    def _run(self) -> DecompositionResult | DecompositionFailure:
        n = self.y.size
        trend = np.zeros(n)
        seasonal = np.zeros(n)

        for iteration in range(StlConfig.INNER_ITERATIONS):
            detrended = self.y - trend

            combined = self._smooth_cycle_subseries(detrended)
            if np.isnan(combined).any():
                return DecompositionFailure(
                    kind=FailureKind.NUMERIC_DEGENERACY,
                    message=(
                        "NaN in the smoothed cycle-subseries "
                        f"(inner iteration {iteration})."
                    ),
                )

            low_pass = self._low_pass(combined)
            seasonal = combined[:n] - low_pass[:n]

            deseasonalized = self.y - seasonal
            trend = self._smooth(deseasonalized, self.config.trend_window).copy()
            stlkit_logger.debug("STL inner iteration %d done.", iteration)

        residual = self.y - seasonal - trend
        slope = (trend[n - 1] - seasonal[0]) / (n - 1) if n > 1 else 0.0

        return DecompositionResult(
            seasonal=seasonal,
            trend=trend,
            residual=residual,
            slope=float(slope),
        )

    def _smooth(self, values: FloatArray, window: int | None) -> FloatArray:
        """Smooths ``values`` on synthetic coordinates ``0..len-1``."""
        return self._fit(values, window).estimate()

    def _fit(self, values: FloatArray, window: int | None) -> FastLoess:
        x = self.coordinate_cache.get(values.size)
        return FastLoess(
            x,
            values,
            self.config.is_temporal,
            window,
            sample_budget=self.config.sample_budget,
            smoother_cls=self.smoother_cls,
        )

    def _smooth_cycle_subseries(self, detrended: FloatArray) -> FloatArray:
        """Smooths each cycle-subseries and interleaves them with end padding.

        Cycle-subseries ``j`` holds indices ``j, j + period, ...``. Each one is
        smoothed, extended by the model value at ``-1`` and at its own length,
        and written back at positions ``j, j + period, ...`` of an array of
        length ``n + 2 * period``.
        """
        period = self.period
        combined = np.empty(detrended.size + 2 * period)
        for j in range(period):
            sub = detrended[j::period]
            if sub.size == 0:
                raise PrimitiveFailureError(
                    f"cycle-subseries {j} is empty; the series is shorter than period {period}."
                )
            model = self._fit(sub, StlConfig.SEASONAL_WINDOW)
            combined[j::period] = np.concatenate(
                (
                    [model.estimate_at(-1.0)],
                    model.estimate(),
                    [model.estimate_at(float(sub.size))],
                )
            )
        return combined

    def _low_pass(self, combined: FloatArray) -> FloatArray:
        """Moving averages of width period, period and 3, then a Loess pass."""
        c1 = moving_average(combined, self.period)
        c2 = moving_average(c1, self.period)
        c3 = moving_average(c2, 3)
        return self._smooth(c3, self.config.low_pass_window)
