"""Weighted local polynomial fitting around a query point."""

from __future__ import annotations

import numpy as np

from stlkit.utils.numerics import tricube

__all__ = ["design_matrix", "neighbour_weights", "weighted_local_fit"]


def design_matrix(
        x0: float,
        sample_points: np.ndarray,
        degree: int) -> np.ndarray:
    """Builds a Vandermonde design matrix centred at ``x0``.

    Args:
        x0:
            The query point. Powers are taken of ``sample_points - x0`` so the
            fitted value at ``x0`` is the intercept.
        sample_points:
            An array of sample points (shape (n_samples,)).
        degree:
            The degree of the polynomial to fit.

    Returns:
        A Vandermonde matrix (shape (n_samples, degree + 1)).
    """
    return np.vander(sample_points - x0, N=degree + 1, increasing=True)


def neighbour_weights(
    x0: float,
    xs: np.ndarray,
    span_scale: float = 1.0,
) -> np.ndarray:
    """Returns tricube weights of the neighbours ``xs`` seen from ``x0``.

    The bandwidth is the largest neighbour distance multiplied by
    ``span_scale``. A zero bandwidth (all neighbours at ``x0``) weighs every
    neighbour equally.

    Args:
        x0: The query point.
        xs: Neighbour x values.
        span_scale: Factor (>= 1) applied to the largest distance.

    Returns:
        Array of weights with the same shape as ``xs``.
    """
    dist = np.abs(xs - x0)
    bandwidth = float(dist.max()) * span_scale
    if bandwidth <= 0.0:
        return np.ones_like(dist)
    return tricube(dist / bandwidth)


def weighted_local_fit(
    x0: float,
    xs: np.ndarray,
    ys: np.ndarray,
    weights: np.ndarray,
    degree: int,
) -> float:
    """Fits a weighted polynomial to the neighbourhood and evaluates it at ``x0``.

    The degree is reduced when the positively weighted samples do not have
    enough distinct x values to determine the polynomial; with a single
    distinct value the fit is a weighted mean.

    Args:
        x0: The query point.
        xs: Neighbour x values (shape (k,)).
        ys: Neighbour y values (shape (k,)).
        weights: Non-negative weights (shape (k,)).
        degree: Requested polynomial degree.

    Returns:
        The fitted value at ``x0``, or ``nan`` if any neighbour y is not finite.
    """
    if not np.all(np.isfinite(ys)):
        return float("nan")

    active = weights > 0.0
    if not active.any():
        active = np.ones_like(active)
        weights = np.ones_like(weights)

    x_use = xs[active]
    y_use = ys[active]
    w_use = weights[active]

    n_distinct = np.unique(x_use).size
    degree = min(degree, n_distinct - 1)
    if degree <= 0:
        return float(np.sum(w_use * y_use) / np.sum(w_use))

    sw = np.sqrt(w_use)
    mat = design_matrix(x0, x_use, degree) * sw[:, None]
    coeffs, *_ = np.linalg.lstsq(mat, y_use * sw, rcond=None)
    return float(coeffs[0])
