"""Local regression (Loess) smoother.

This module defines the two-operation contract every smoother used by the
STL engine must satisfy, :class:`LocalRegressionSmoother`, together with the
default implementation, :class:`Loess`.

For every query point the smoother takes the ``window`` samples nearest to it,
weighs them with the tricube kernel and fits a low-degree polynomial centred
at the query. The fitted value at the query is the smoothed estimate. Because
the model is evaluated directly at the query, the same machinery extrapolates
to points outside the sampled x range.

Examples:
    >>> import numpy as np
    >>> from stlkit.smoothing.loess import Loess
    >>> x = np.arange(10.0)
    >>> model = Loess(x, 2.0 * x + 1.0, window=5)
    >>> round(model.estimate_at(-1.0), 6)
    -1.0
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np
from numpy.typing import ArrayLike

from stlkit.smoothing.local_fit import neighbour_weights, weighted_local_fit
from stlkit.smoothing.loess_config import LoessConfig
from stlkit.utils.types import FloatArray
from stlkit.utils.validate import validate_window, validate_xy

__all__ = ["LocalRegressionSmoother", "Loess"]


class LocalRegressionSmoother(Protocol):
    """Protocol each local-regression smoother must satisfy.

    A smoother is constructed from paired samples, a temporal flag and an
    optional window, and exposes two operations: fitted values at every input
    x, and the fitted model evaluated at an arbitrary coordinate. It serves only
    as a structural type check and carries no runtime behavior.
    """
    def __init__(
        self,
        x: ArrayLike,
        y: ArrayLike,
        is_temporal: bool = True,
        window: int | None = None,
    ):
        """Fit the smoother to the samples."""
        ...
    def estimate_all(self) -> FloatArray:
        """Return fitted values, one per input x, in input order."""
        ...
    def estimate_at(self, x: float) -> float:
        """Evaluate the fitted model at ``x``, extrapolating if needed."""
        ...


class Loess:
    """Locally weighted polynomial regression.

    Attributes:
        x: Input x values in the caller's order.
        y: Input y values in the caller's order.
        is_temporal: Whether x is a time axis (non-decreasing, left as is).
        window: Number of neighbours used per local fit.
        config: The :class:`LoessConfig` in effect.
    """

    def __init__(
        self,
        x: ArrayLike,
        y: ArrayLike,
        is_temporal: bool = True,
        window: int | None = None,
        *,
        config: LoessConfig | None = None,
    ):
        """Initializes the smoother.

        Args:
            x: Sample x values. Must be non-decreasing when ``is_temporal``.
            y: Sample y values, same length as ``x``.
            is_temporal: If ``True`` the samples form a time series and are
                used in the given order. If ``False`` they are treated as
                scatter data and sorted by x internally.
            window: Neighbour count for each local fit. Defaults to
                ``config.ratio`` of the samples, rounded up to an odd number.
                Windows larger than the sample count widen the kernel
                proportionally.
            config: Optional :class:`LoessConfig`.

        Raises:
            InvalidInputError: If the samples or the window are malformed.
            PrimitiveFailureError: If there are fewer than
                ``config.min_length`` samples.
        """
        self.config = config or LoessConfig()
        self.is_temporal = bool(is_temporal)
        self.x, self.y = validate_xy(
            x, y, min_length=self.config.min_length, require_sorted=self.is_temporal
        )
        n = self.x.size

        if self.is_temporal:
            self._xs, self._ys = self.x, self.y
        else:
            order = np.argsort(self.x, kind="stable")
            self._xs, self._ys = self.x[order], self.y[order]

        if window is None:
            window = math.ceil(round(self.config.ratio * n, 9))
            if window % 2 == 0:
                window += 1
            window = max(window, min(3, n))
        self.window = validate_window(window)
        self._k = min(self.window, n)
        self._span_scale = max(1.0, self.window / n)

    def _neighbourhood(self, x0: float) -> slice:
        """Returns the contiguous block of ``k`` sorted samples nearest ``x0``."""
        n = self._xs.size
        k = self._k
        pos = int(np.searchsorted(self._xs, x0))
        first = max(0, pos - k)
        last = min(pos, n - k)
        starts = np.arange(first, last + 1)
        cost = np.maximum(x0 - self._xs[starts], self._xs[starts + k - 1] - x0)
        start = int(starts[np.argmin(cost)])
        return slice(start, start + k)

    def estimate_at(self, x: float) -> float:
        """Evaluates the fitted local regression at ``x``.

        Args:
            x: Query coordinate, inside or outside the sampled range.

        Returns:
            The smoothed value at ``x``.
        """
        x0 = float(x)
        block = self._neighbourhood(x0)
        xs = self._xs[block]
        ys = self._ys[block]
        weights = neighbour_weights(x0, xs, self._span_scale)
        return weighted_local_fit(x0, xs, ys, weights, self.config.degree)

    def estimate_all(self) -> FloatArray:
        """Returns the smoothed value at every input x, in input order."""
        return np.array([self.estimate_at(xi) for xi in self.x], dtype=float)
