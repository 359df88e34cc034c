"""Local regression smoothing.

This module provides the smoother contract used by the STL engine, the
default Loess implementation and its sampling-based fast variant.
"""

from stlkit.smoothing.fast_loess import FastLoess
from stlkit.smoothing.loess import LocalRegressionSmoother, Loess
from stlkit.smoothing.loess_config import LoessConfig

__all__ = ["FastLoess", "LocalRegressionSmoother", "Loess", "LoessConfig"]
