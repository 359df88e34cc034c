"""Utility functions for StlKit package."""

from .coordinate_cache import CoordinateCache, default_coordinate_cache
from .numerics import moving_average

__all__ = [
    "CoordinateCache",
    "default_coordinate_cache",
    "moving_average",
]
