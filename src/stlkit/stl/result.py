"""Outcomes of an STL decomposition."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from stlkit.errors import (
    InvalidInputError,
    NumericDegeneracyError,
    PrimitiveFailureError,
    StlError,
)

__all__ = ["DecompositionFailure", "DecompositionResult", "FailureKind"]


class FailureKind(str, Enum):
    """Reason a decomposition did not produce a result."""

    INVALID_INPUT = "invalid_input"
    NUMERIC_DEGENERACY = "numeric_degeneracy"
    PRIMITIVE_FAILURE = "primitive_failure"


_ERRORS_BY_KIND: dict[FailureKind, type[StlError]] = {
    FailureKind.INVALID_INPUT: InvalidInputError,
    FailureKind.NUMERIC_DEGENERACY: NumericDegeneracyError,
    FailureKind.PRIMITIVE_FAILURE: PrimitiveFailureError,
}


@dataclass(frozen=True, eq=False)
class DecompositionResult:
    """Additive decomposition of a series.

    For every index ``i``,
    ``series[i] == seasonal[i] + trend[i] + residual[i]`` up to rounding.
    ``slope`` is ``(trend[-1] - seasonal[0]) / (n - 1)``.
    """

    seasonal: np.ndarray
    trend: np.ndarray
    residual: np.ndarray
    slope: float

    ok = True

    def __len__(self) -> int:
        return int(self.seasonal.shape[0])

    def raise_for_failure(self) -> DecompositionResult:
        """Returns ``self``; successful results never raise."""
        return self


@dataclass(frozen=True)
class DecompositionFailure:
    """Structured report of a failed decomposition.

    No partial components are kept. ``kind`` tells the caller whether
    retrying with different inputs (another period, a longer series) can help.
    """

    kind: FailureKind
    message: str

    ok = False

    @classmethod
    def from_error(cls, error: StlError) -> DecompositionFailure:
        """Builds a failure from one of the StlKit exceptions."""
        for kind, error_cls in _ERRORS_BY_KIND.items():
            if isinstance(error, error_cls):
                return cls(kind=kind, message=str(error))
        return cls(kind=FailureKind.PRIMITIVE_FAILURE, message=str(error))

    def raise_for_failure(self):
        """Raises the exception matching ``kind``."""
        raise _ERRORS_BY_KIND[self.kind](self.message)
