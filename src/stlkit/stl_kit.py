"""Provides the StlKit API and the :func:`decompose` entry point.

``StlKit`` is a lightweight front end over the STL engine. You provide the
series once and then decompose it for one or more candidate seasonal periods.
The local-regression smoother is chosen by name (e.g., ``"loess"``) or passed
directly as a class.

Adding smoothers
----------------
New smoothers can be registered without modifying this module by calling
``register_smoother`` (see example below). A smoother must implement the
:class:`stlkit.smoothing.loess.LocalRegressionSmoother` protocol.

Examples:
    Basic usage:

        >>> import numpy as np
        >>> from stlkit.stl_kit import decompose
        >>> y = np.tile([10.0, 12.0, 9.0, 11.0], 3)
        >>> outcome = decompose(y, seasonal_period=4)
        >>> outcome.ok
        True

    Registering a new smoother:

        >>> from stlkit.stl_kit import register_smoother
        >>> from my_package.smoothers import SplineSmoother  # doctest: +SKIP
        >>> register_smoother(
        ...     name="spline",
        ...     cls=SplineSmoother,
        ...     aliases=("smoothing-spline",),
        ... )  # doctest: +SKIP

Notes:
    - Smoother names are case/spacing/punctuation insensitive.
    - For available canonical smoother names at runtime, call
      ``available_smoothers()``.
    - Failures are returned as :class:`DecompositionFailure`, never raised,
      so a caller can retry with another period.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Mapping, Type

from numpy.typing import ArrayLike

from stlkit.errors import InvalidInputError, StlError
from stlkit.smoothing.fast_loess import DEFAULT_SAMPLE_BUDGET
from stlkit.smoothing.loess import LocalRegressionSmoother, Loess
from stlkit.stl.engine import StlEngine
from stlkit.stl.result import DecompositionFailure, DecompositionResult
from stlkit.stl.stl_config import StlConfig
from stlkit.utils.coordinate_cache import CoordinateCache

__all__ = [
    "StlKit",
    "available_smoothers",
    "decompose",
    "register_smoother",
]

SmootherSpec = str | Type[LocalRegressionSmoother]

# These are the built-in smoothers available in the package by default.
_SMOOTHER_SPECS: list[tuple[str, Type[LocalRegressionSmoother], list[str]]] = [
    ("loess", Loess, ["lowess", "local-regression", "local_regression"]),
]


def _norm(s: str) -> str:
    """Normalize a smoother name for robust matching (case/spacing/punct insensitive).

    Args:
        s: Input string.

    Returns:
        Normalized string.
    """
    return re.sub(r"[^a-z0-9]+", "", s.lower())


@lru_cache(maxsize=1)
def _smoother_maps() -> tuple[Mapping[str, Type[LocalRegressionSmoother]], tuple[str, ...]]:
    """Construct and cache lookup tables for smoothers.

    Returns:
        A pair ``(smoother_map, canonical_names)`` where ``smoother_map`` maps
        normalized names and aliases to smoother classes and
        ``canonical_names`` lists the sorted canonical names.
    """
    smoother_map: dict[str, Type[LocalRegressionSmoother]] = {}
    canonical: set[str] = set()
    for name, cls, aliases in _SMOOTHER_SPECS:
        k = _norm(name)
        smoother_map[k] = cls
        canonical.add(k)
        for a in aliases:
            smoother_map[_norm(a)] = cls
    return smoother_map, tuple(sorted(canonical))


def register_smoother(
    name: str,
    cls: Type[LocalRegressionSmoother],
    *,
    aliases: Iterable[str] = (),
) -> None:
    """Register a new local-regression smoother.

    The internal lookup cache is cleared and rebuilt on the next lookup, so
    registration is safe regardless of import order.

    Args:
        name: Canonical public name of the smoother (e.g., "spline").
        cls: Class implementing the LocalRegressionSmoother protocol.
        aliases: Additional accepted spellings.
    """
    _SMOOTHER_SPECS.append((name, cls, list(aliases)))
    _smoother_maps.cache_clear()


def _resolve(smoother: SmootherSpec) -> Type[LocalRegressionSmoother]:
    """Resolve a smoother name, alias or class to a smoother class.

    Args:
        smoother: Registered name/alias, or a smoother class.

    Returns:
        The smoother class.

    Raises:
        InvalidInputError: If ``smoother`` is an unknown name.
    """
    if not isinstance(smoother, str):
        return smoother
    smoother_map, canon = _smoother_maps()
    try:
        return smoother_map[_norm(smoother)]
    except KeyError:
        opts = ", ".join(canon)
        raise InvalidInputError(
            f"Unknown smoother '{smoother}'. Choose one of {{{opts}}}."
        ) from None


def available_smoothers() -> list[str]:
    """List canonical smoother names.

    Returns:
        List of smoother names.
    """
    _, canon = _smoother_maps()
    return list(canon)


class StlKit:
    """Unified interface for STL decompositions of one series.

    Example:
        >>> import numpy as np
        >>> from stlkit.stl_kit import StlKit
        >>> kit = StlKit(np.tile([10.0, 12.0, 9.0, 11.0], 3))
        >>> kit.decompose(4).ok
        True
        >>> kit.decompose(0).kind.value
        'invalid_input'

    Attributes:
        series: The series to decompose.
        is_temporal: Whether smoothers treat the series as temporal data.
        coordinate_cache: Injected coordinate cache, or ``None`` for the
            process-wide default.
        smoother: Smoother name or class used by every decomposition.
        sample_budget: Sample size cap for FastLoess.
    """

    def __init__(
        self,
        series: ArrayLike,
        *,
        is_temporal: bool = True,
        coordinate_cache: CoordinateCache | None = None,
        smoother: SmootherSpec = "loess",
        sample_budget: int = DEFAULT_SAMPLE_BUDGET,
    ):
        """Initializes the kit.

        Args:
            series: Equally spaced observations.
            is_temporal: Forwarded to the smoothers.
            coordinate_cache: Optional cache of synthetic x coordinates.
            smoother: Registered smoother name or a smoother class.
            sample_budget: Sample size cap for FastLoess.
        """
        self.series = series
        self.is_temporal = is_temporal
        self.coordinate_cache = coordinate_cache
        self.smoother = smoother
        self.sample_budget = sample_budget

    def decompose(self, seasonal_period: int) -> DecompositionResult | DecompositionFailure:
        """Decomposes the series for the given seasonal period.

        Args:
            seasonal_period: Observations per seasonal cycle; must be positive.

        Returns:
            A :class:`DecompositionResult`, or a :class:`DecompositionFailure`
            describing why no result could be produced.
        """
        try:
            config = StlConfig(
                seasonal_period,
                is_temporal=self.is_temporal,
                sample_budget=self.sample_budget,
            )
            engine = StlEngine(
                self.series,
                config,
                coordinate_cache=self.coordinate_cache,
                smoother_cls=_resolve(self.smoother),
            )
        except StlError as e:
            return DecompositionFailure.from_error(e)
        return engine.decompose()


def decompose(
    series: ArrayLike,
    seasonal_period: int,
    is_temporal: bool = True,
    *,
    coordinate_cache: CoordinateCache | None = None,
    smoother: SmootherSpec = "loess",
    sample_budget: int = DEFAULT_SAMPLE_BUDGET,
) -> DecompositionResult | DecompositionFailure:
    """Decomposes ``series`` into seasonal, trend and residual components.

    Args:
        series: Equally spaced observations, length >= 1.
        seasonal_period: Observations per seasonal cycle; must be positive.
        is_temporal: Whether smoothers treat the series as temporal data.
        coordinate_cache: Optional cache of synthetic x coordinates.
        smoother: Registered smoother name or a smoother class.
        sample_budget: Sample size cap for FastLoess.

    Returns:
        A :class:`DecompositionResult` on success, otherwise a
        :class:`DecompositionFailure` with ``kind`` set to the failure reason.
    """
    kit = StlKit(
        series,
        is_temporal=is_temporal,
        coordinate_cache=coordinate_cache,
        smoother=smoother,
        sample_budget=sample_budget,
    )
    return kit.decompose(seasonal_period)
