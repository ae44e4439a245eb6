"""TTL cache for upstream recipe and nutrition lookups."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""


@dataclass
class _Entry:
    value: object
    expires_at: datetime


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; entries are evicted lazily on read."""

    clock: Callable[[], datetime] = field(default=_utc_now)
    _entries: dict[str, _Entry] = field(default_factory=dict, init=False)

    def get(self, key: str) -> object | None:
        """Return the cached value, dropping it once expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value with an expiry relative to now."""
        self._entries[key] = _Entry(
            value=value,
            expires_at=self.clock() + timedelta(seconds=ttl_seconds),
        )
