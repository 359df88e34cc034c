"""Provides all stlkit components."""

from importlib.metadata import PackageNotFoundError, version

from stlkit.errors import (
    InvalidInputError,
    NumericDegeneracyError,
    PrimitiveFailureError,
    StlError,
)
from stlkit.smoothing.fast_loess import FastLoess
from stlkit.smoothing.loess import LocalRegressionSmoother, Loess
from stlkit.smoothing.loess_config import LoessConfig
from stlkit.stl.engine import StlEngine
from stlkit.stl.result import DecompositionFailure, DecompositionResult, FailureKind
from stlkit.stl.stl_config import StlConfig
from stlkit.stl_kit import StlKit, available_smoothers, decompose, register_smoother
from stlkit.utils.coordinate_cache import CoordinateCache, default_coordinate_cache

try:
    __version__ = version("stlkit")
except PackageNotFoundError:
    pass

StlKit.__module__ = "stlkit"

__all__ = [
    "CoordinateCache",
    "DecompositionFailure",
    "DecompositionResult",
    "FailureKind",
    "FastLoess",
    "InvalidInputError",
    "LocalRegressionSmoother",
    "Loess",
    "LoessConfig",
    "NumericDegeneracyError",
    "PrimitiveFailureError",
    "StlConfig",
    "StlEngine",
    "StlError",
    "StlKit",
    "available_smoothers",
    "decompose",
    "default_coordinate_cache",
    "register_smoother",
]
