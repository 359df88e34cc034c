"""Configuration for the default local-regression smoother.

This config controls how :class:`stlkit.smoothing.loess.Loess` chooses its
neighbourhood when no explicit window is given, which polynomial it fits
locally, and how many samples it needs before it agrees to fit at all.
"""

from __future__ import annotations

from stlkit.errors import InvalidInputError


class LoessConfig:
    """Configuration for the default local-regression smoother."""

    def __init__(
        self,
        ratio: float = 0.3,
        degree: int = 1,
        min_length: int = 2,
    ):
        """Initialize configuration.

        Args:
            ratio:
                Fraction of the samples used as the neighbourhood when the
                caller does not pass a window. The resulting neighbour count is
                rounded up to an odd number and clipped to
                ``[min(3, n), n]``. Must lie in ``(0, 1]``.

            degree:
                Degree of the local polynomial, ``0`` (weighted mean),
                ``1`` (local linear, the classical Loess choice) or ``2``.
                The degree is lowered automatically in neighbourhoods that
                cannot support it.

            min_length:
                Minimum number of samples the smoother accepts. Shorter
                inputs raise :class:`stlkit.errors.PrimitiveFailureError`.

        Raises:
            InvalidInputError: If a value is out of range.
        """
        if not 0.0 < ratio <= 1.0:
            raise InvalidInputError(f"ratio must be in (0, 1] but is {ratio}.")
        if degree not in (0, 1, 2):
            raise InvalidInputError(f"degree must be 0, 1 or 2 but is {degree}.")
        if min_length < 1:
            raise InvalidInputError(f"min_length must be at least 1 but is {min_length}.")

        self.ratio = float(ratio)
        self.degree = int(degree)
        self.min_length = int(min_length)
