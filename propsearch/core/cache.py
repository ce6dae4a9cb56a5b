import math
import time
from dataclasses import dataclass
from typing import Any, Callable

from cachetools import TTLCache

@dataclass
class CacheEntry:
    data: Any
    timestamp: float

class PropertyCache:
    """
    In-process store for search results, keyed by canonical search params.

    Entries expire once ``now - timestamp >= ttl`` and are dropped lazily on
    the next access; nothing sweeps in the background. Size is unbounded and
    nothing is shared across processes. Construct one per app and hand it to
    the aggregator.
    """
    def __init__(self, ttl_seconds: float = 3600, timer: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._timer = timer
        self._entries: TTLCache = TTLCache(maxsize=math.inf, ttl=ttl_seconds, timer=timer)

    def get(self, key: str) -> Any | None:
        self._entries.expire()
        entry = self._entries.get(key)
        return entry.data if entry is not None else None

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(data=value, timestamp=self._timer())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
