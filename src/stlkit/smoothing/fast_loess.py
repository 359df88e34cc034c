"""Sampling-based fast Loess.

Local regression is the dominant cost of an STL decomposition: it runs once
per cycle-subseries in every inner iteration, plus once each for the low-pass
filter and the trend. :class:`FastLoess` bounds that cost. Inputs longer than
``sample_budget`` are thinned to ``sample_budget`` points taken at a uniform
stride, the smoother is fitted on the thinned set only, and the fitted model is
then evaluated at every original x to recover a full-length result.

This is an approximation. For long series the output differs from an exact
fit on all points, and that trade-off is intended.
"""

from __future__ import annotations

from typing import Type

import numpy as np
from numpy.typing import ArrayLike

from stlkit.errors import InvalidInputError, PrimitiveFailureError, StlError
from stlkit.logger import stlkit_logger
from stlkit.smoothing.loess import LocalRegressionSmoother, Loess
from stlkit.utils.types import FloatArray
from stlkit.utils.validate import validate_xy

__all__ = ["DEFAULT_SAMPLE_BUDGET", "MIN_SAMPLE_BUDGET", "FastLoess", "sample_indices"]

DEFAULT_SAMPLE_BUDGET = 100
MIN_SAMPLE_BUDGET = 2


def sample_indices(length: int, sample_budget: int) -> np.ndarray:
    """Returns the indices kept when thinning ``length`` points to ``sample_budget``.

    Index ``i`` of the sample is ``int(i * length / sample_budget)``.

    Args:
        length: Number of input points; must exceed ``sample_budget``.
        sample_budget: Number of points to keep.

    Returns:
        Strictly increasing integer array of shape ``(sample_budget,)``.
    """
    step = length * 1.0 / sample_budget
    return (np.arange(sample_budget) * step).astype(int)


class FastLoess:
    """Fast Loess that fits on a uniform sample of long inputs.

    Attributes:
        x: Original x values.
        sampled: Whether the fit was done on a sample rather than all points.
        smoother: The fitted :class:`LocalRegressionSmoother`.
    """

    def __init__(
        self,
        x: ArrayLike,
        y: ArrayLike,
        is_temporal: bool = True,
        window: int | None = None,
        *,
        sample_budget: int = DEFAULT_SAMPLE_BUDGET,
        smoother_cls: Type[LocalRegressionSmoother] = Loess,
    ):
        """Initializes and fits the smoother.

        Args:
            x: Input x values.
            y: Input y values, same length as ``x``.
            is_temporal: Forwarded to the underlying smoother.
            window: Optional neighbour count forwarded to the smoother. When
                omitted, the smoother chooses its own default.
            sample_budget: Maximum number of points the smoother is fitted on.
            smoother_cls: Class implementing :class:`LocalRegressionSmoother`.

        Raises:
            InvalidInputError: If ``x`` and ``y`` differ in length or
                ``sample_budget`` is below ``MIN_SAMPLE_BUDGET``.
            PrimitiveFailureError: If the smoother rejects the (sampled) input.
                Plain ``ValueError`` and ``ArithmeticError`` raised by a
                third-party smoother are re-raised as this type.
        """
        if sample_budget < MIN_SAMPLE_BUDGET:
            raise InvalidInputError(
                f"sample_budget must be at least {MIN_SAMPLE_BUDGET} but is {sample_budget}."
            )
        self.x, y_arr = validate_xy(x, y, min_length=1)
        self._y: FloatArray | None = None
        length = self.x.size

        self.sampled = length > sample_budget
        if self.sampled:
            idx = sample_indices(length, sample_budget)
            stlkit_logger.debug(
                "FastLoess: fitting %d of %d points (stride %.3f).",
                sample_budget, length, length / sample_budget,
            )
            x_fit, y_fit = self.x[idx], y_arr[idx]
        else:
            x_fit, y_fit = self.x, y_arr

        if window is None:
            self.smoother = _guarded(smoother_cls, x_fit, y_fit, is_temporal)
        else:
            self.smoother = _guarded(smoother_cls, x_fit, y_fit, is_temporal, window)

    def estimate(self) -> FloatArray:
        """Computes (once) and returns the smoothed value at every original x."""
        if self._y is None:
            if self.sampled:
                y = np.array([self.estimate_at(xi) for xi in self.x], dtype=float)
            else:
                y = np.asarray(_guarded(self.smoother.estimate_all), dtype=float)
                if y.shape != self.x.shape:
                    raise PrimitiveFailureError(
                        f"{type(self.smoother).__name__}.estimate_all returned shape "
                        f"{y.shape}; expected {self.x.shape}."
                    )
            self._y = y
        return self._y

    @property
    def y(self) -> FloatArray:
        """The full-length smoothed sequence."""
        return self.estimate()

    def estimate_at(self, x: float) -> float:
        """Evaluates the fitted model at ``x``, extrapolation included."""
        return float(_guarded(self.smoother.estimate_at, x))


def _guarded(fn, *args):
    """Calls ``fn`` and reports foreign value/arithmetic errors as primitive failures."""
    try:
        return fn(*args)
    except StlError:
        raise
    except (ValueError, ArithmeticError) as e:
        name = getattr(fn, "__qualname__", type(fn).__name__)
        raise PrimitiveFailureError(f"{name} failed: {e}") from e
