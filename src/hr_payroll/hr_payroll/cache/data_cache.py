from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from ..core.constants import REPORT_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


@dataclass
class CacheItem:
    value: Any
    stored_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


class DataCache:
    """Expiring key -> value store for derived results.

    Each consumer builds its own instance; there is no shared global cache and
    no dependency tracking, so writers must call ``invalidate`` themselves.
    """

    def __init__(
        self,
        *,
        default_ttl: float = REPORT_CACHE_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
        name: str = "cache",
    ):
        self._items: dict[str, CacheItem] = {}
        self._default_ttl = float(default_ttl)
        self._clock = clock or time.monotonic
        self._name = name

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self._default_ttl if ttl is None else float(ttl)
        self._items[key] = CacheItem(value=value, stored_at=self._clock(), ttl=ttl)

    def get(self, key: str) -> Any:
        item = self._items.get(key)
        if item is None:
            logger.debug("%s miss key=%s", self._name, key)
            return None

        if item.expired(self._clock()):
            self._items.pop(key, None)
            logger.debug("%s expired key=%s", self._name, key)
            return None

        logger.debug("%s hit key=%s", self._name, key)
        return item.value

    def invalidate(self, pattern: Optional[str] = None) -> int:
        """Drop every key containing ``pattern`` (all keys when omitted).

        Returns the number of entries removed.
        """
        if not pattern:
            removed = len(self._items)
            self._items.clear()
        else:
            keys = [k for k in list(self._items) if pattern in k]
            removed = sum(1 for k in keys if self._items.pop(k, None) is not None)

        if removed:
            logger.debug("%s invalidated %d entries pattern=%r", self._name, removed, pattern)
        return removed

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


def cache_key(prefix: str, *parts: Union[str, int]) -> str:
    return ":".join([prefix, *(str(p) for p in parts)])


def scope_pattern(company_id: str, month_key: Optional[str] = None) -> str:
    """Invalidation pattern matching keys built as ``cache_key(prefix, company_id, month_key, ...)``."""
    pattern = f":{company_id}:"
    if month_key:
        pattern += month_key
    return pattern
