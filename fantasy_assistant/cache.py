"""In-memory response cache for the Sleeper client."""

import enum
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from urllib.parse import urlencode


class FreshnessClass(enum.Enum):
    STANDARD = "standard"
    BULK = "bulk"  # the full player directory


@dataclass(frozen=True)
class FreshnessPolicy:
    standard_ttl: float = 5 * 60
    bulk_ttl: float = 24 * 60 * 60

    def ttl_for(self, freshness: FreshnessClass) -> float:
        if freshness is FreshnessClass.BULK:
            return self.bulk_ttl
        return self.standard_ttl


@dataclass(frozen=True)
class CacheKey:
    """Resource path plus its normalized query parameters."""

    path: str
    params: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def for_request(cls, path: str, params: Optional[Mapping[str, Any]] = None) -> "CacheKey":
        normalized = tuple(sorted((str(name), str(value)) for name, value in (params or {}).items()))
        return cls(path=path, params=normalized)

    def target(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"


@dataclass(frozen=True)
class CacheEntry:
    key: CacheKey
    payload: Any
    stored_at: float

    def age(self, now: float) -> float:
        return now - self.stored_at


class ResponseCache:
    """Maps CacheKey to CacheEntry for the lifetime of one client.

    Individual reads and writes are atomic; nothing coordinates two callers
    that miss on the same key, so both fetch and the later write wins.
    """

    def __init__(
        self,
        policy: Optional[FreshnessPolicy] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.policy = policy or FreshnessPolicy()
        self.clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def get_fresh(self, key: CacheKey, freshness: FreshnessClass = FreshnessClass.STANDARD) -> Optional[CacheEntry]:
        """Return the entry for ``key`` if it is younger than the class TTL."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.age(self.clock()) < self.policy.ttl_for(freshness):
            return entry
        return None

    def store(self, key: CacheKey, payload: Any) -> CacheEntry:
        entry = CacheEntry(key=key, payload=payload, stored_at=self.clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def peek(self, key: CacheKey) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries
