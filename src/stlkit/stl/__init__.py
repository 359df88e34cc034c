"""STL decomposition.

This module provides the decomposition engine, its configuration and the
result types it reports.
"""

from stlkit.stl.engine import StlEngine
from stlkit.stl.result import DecompositionFailure, DecompositionResult, FailureKind
from stlkit.stl.stl_config import UNSET_PERIOD, StlConfig

__all__ = [
    "DecompositionFailure",
    "DecompositionResult",
    "FailureKind",
    "StlConfig",
    "StlEngine",
    "UNSET_PERIOD",
]
