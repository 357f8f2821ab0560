"""Memoization cache for registry lookups.

Lookups are answered from here until the table entry behind them changes.
Eviction is least-recently-used once `max_size` entries are held; a
`max_size` of 0 means unbounded. The cache does no locking of its own: the
registry only touches it while holding its lock.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Generic, Hashable, TypeVar

logger = logging.getLogger(__name__)

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT")


class LookupCache(Generic[KT, VT]):
    """An LRU map from a lookup key (or None, meaning "all") to a result tuple."""

    def __init__(self, cache_name: str, max_size: int = 0) -> None:
        """
        Args:
            cache_name: Name of this cache, used for logging.
            max_size: Maximum number of entries; 0 for no limit.
        """
        self._cache_name = cache_name
        self._max_size = max_size
        self._cache: OrderedDict[KT | None, tuple[VT, ...]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: KT | None) -> tuple[VT, ...] | None:
        try:
            value = self._cache[key]
        except KeyError:
            self.misses += 1
            return None
        self._cache.move_to_end(key)
        self.hits += 1
        return value

    def put(self, key: KT | None, value: tuple[VT, ...]) -> None:
        self._cache[key] = value
        self._cache.move_to_end(key)
        self._evict()

    def invalidate(self, key: KT | None) -> None:
        """Drop the entry for key and the aggregate None entry."""
        self._cache.pop(key, None)
        self._cache.pop(None, None)

    def clear(self) -> None:
        self._cache.clear()

    def _evict(self) -> None:
        while self._max_size and len(self._cache) > self._max_size:
            key, _value = self._cache.popitem(last=False)
            logger.debug("Evicted %r from %s cache", key, self._cache_name)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)
