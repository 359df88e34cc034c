"""Provides :class:`CoordinateCache` and the shared default instance.

Every smoothing call issued by the STL engine runs on synthetic x-axis
coordinates ``0, 1, ..., length - 1``. A single decomposition asks for the
same handful of lengths many times over (one request per cycle-subseries per
inner iteration, plus the low-pass and trend passes), so the arrays are built
once per length and shared.
"""
from __future__ import annotations

import threading
from collections import namedtuple

import numpy as np

from stlkit.errors import InvalidInputError
from stlkit.utils.types import FloatArray

__all__ = ["CacheInfo", "CoordinateCache", "default_coordinate_cache"]

CacheInfo = namedtuple("CacheInfo", ["hits", "misses", "currsize"])


class CoordinateCache:
    """Thread-safe, append-only cache of synthetic x-axis coordinates.

    Entries are keyed by sequence length. An entry is synthesized at most
    once per length, even when several threads ask for it at the same time,
    and is published as a read-only array so no caller can mutate a shared
    entry.

    Example:
        >>> from stlkit.utils.coordinate_cache import CoordinateCache
        >>> cache = CoordinateCache()
        >>> cache.get(4)
        array([0., 1., 2., 3.])
        >>> cache.get(4) is cache.get(4)
        True
    """

    def __init__(self) -> None:
        """Initializes an empty cache."""
        self._pool: dict[int, FloatArray] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, length: int) -> FloatArray:
        """Returns the coordinates ``0.0, 1.0, ..., length - 1``.

        Args:
            length: Number of coordinates. Must be a positive integer.

        Returns:
            A read-only float array of shape ``(length,)``.

        Raises:
            InvalidInputError: If ``length`` is not a positive integer.
        """
        if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
            raise InvalidInputError(
                f"length must be an integer; got {type(length).__name__}."
            )
        length = int(length)
        if length < 1:
            raise InvalidInputError(f"length must be at least 1 but is {length}.")

        with self._lock:
            coords = self._pool.get(length)
            if coords is not None:
                self._hits += 1
                return coords
            coords = self._synthesize(length)
            coords.setflags(write=False)
            self._pool[length] = coords
            self._misses += 1
            return coords

    def _synthesize(self, length: int) -> FloatArray:
        """Builds a fresh coordinate array of the given length."""
        return np.arange(length, dtype=float)

    def cache_info(self) -> CacheInfo:
        """Reports hit/miss counters and the number of cached lengths."""
        with self._lock:
            return CacheInfo(self._hits, self._misses, len(self._pool))

    def __contains__(self, length: object) -> bool:
        with self._lock:
            return length in self._pool

    def __len__(self) -> int:
        with self._lock:
            return len(self._pool)


default_coordinate_cache = CoordinateCache()
"""Process-wide cache used when no cache is injected explicitly."""
