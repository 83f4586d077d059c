"""
In-process TTL cache for read endpoints.

One TTLCache is built per application (see `career_guide.main.create_app`) and
handed to routes through the `get_cache` dependency, so tests can build their
own instance with a fake clock.

When full, the entry with the oldest `stored_at` is evicted (linear scan).
"""

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import urlencode

from fastapi import Request

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    stored_at: float
    ttl: float
    hits: int = 0

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at >= self.ttl


class TTLCache:
    """Key -> value store with per-entry time-to-live and a size cap."""

    def __init__(
        self,
        max_entries: int = 1000,
        default_ttl: float = 300,
        sweep_interval: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._sweeper: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._entries)

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_entries:
                self._evict_oldest()
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock(), ttl=ttl)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return default
            entry.hits += 1
            return entry.value

    def has(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return False
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def sweep(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Cache sweep removed %d expired entries", len(expired))
        return len(expired)

    def stats(self) -> dict:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_entries": self.max_entries,
                "total_hits": sum(entry.hits for entry in self._entries.values()),
            }

    def _evict_oldest(self) -> None:
        oldest_key = min(self._entries, key=lambda k: self._entries[k].stored_at)
        del self._entries[oldest_key]
        logger.debug("Cache full, evicted %s", oldest_key)

    # --- background sweep ---

    def start_sweeper(self) -> asyncio.Task:
        """Start the periodic sweep on the running event loop."""
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.get_running_loop().create_task(self._sweep_forever())
        return self._sweeper

    async def stop_sweeper(self) -> None:
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            self.sweep()


def build_cache_key(route: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build the cache key for a read endpoint.

    Parameters with None/empty values are dropped and the rest are sorted, so
    the key depends only on what actually shapes the result:

        build_cache_key("careers", {"stream": "Engineering", "limit": 2})
        -> "careers?limit=2&stream=Engineering"
    """
    items = sorted(
        (str(name), str(value))
        for name, value in (params or {}).items()
        if value is not None and value != ""
    )
    if not items:
        return route
    return f"{route}?{urlencode(items)}"


def get_cache(request: Request) -> TTLCache:
    """FastAPI dependency - the application's cache instance."""
    return request.app.state.cache
