"""Exception types raised by StlKit components.

Low-level building blocks (the coordinate cache, the smoothers and the
configuration classes) raise these exceptions directly. The decomposition
entry points catch them and report a structured
:class:`stlkit.stl.result.DecompositionFailure` instead.
"""

from __future__ import annotations

__all__ = [
    "StlError",
    "InvalidInputError",
    "NumericDegeneracyError",
    "PrimitiveFailureError",
]


class StlError(RuntimeError):
    """Base class for all StlKit errors."""


class InvalidInputError(StlError, ValueError):
    """Raises when inputs are rejected before any computation starts.

    Examples are an empty series, a non-positive seasonal period or x/y
    arrays of different lengths.
    """


class NumericDegeneracyError(StlError):
    """Raises when a NaN shows up while recombining cycle-subseries."""


class PrimitiveFailureError(StlError, ValueError):
    """Raises when the local-regression smoother cannot fit its input."""
