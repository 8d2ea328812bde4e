"""In-memory key/value store whose entries expire after a fixed lifetime."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable, Dict, Generic, Optional, TypeVar

V = TypeVar("V")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class _Entry(Generic[V]):
    value: V
    stored_at: datetime


class TTLStore(Generic[V]):
    """Stores values with an insertion timestamp taken from an injected clock.

    An entry is live while ``now - stored_at <= ttl``. Reads evict expired
    entries; ``sweep`` evicts all of them at once. Concurrent writers to the
    same key resolve as last write wins.
    """

    def __init__(self, ttl: timedelta, *, clock: Clock = utc_now) -> None:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, _Entry[V]] = {}

    def get(self, key: str) -> Optional[V]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, self._clock()):
            self._entries.pop(key, None)
            return None
        return entry.value

    def stored_at(self, key: str) -> Optional[datetime]:
        entry = self._entries.get(key)
        return entry.stored_at if entry is not None else None

    def put(self, key: str, value: V) -> None:
        self._entries[key] = _Entry(value=value, stored_at=self._clock())

    def sweep(self) -> int:
        """Evict every expired entry and return how many were removed."""
        now = self._clock()
        # Snapshot so writers on other threads cannot break iteration.
        expired = [
            key for key, entry in list(self._entries.items()) if self._is_expired(entry, now)
        ]
        for key in expired:
            self._entries.pop(key, None)
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def _is_expired(self, entry: _Entry[V], now: datetime) -> bool:
        return now - entry.stored_at > self.ttl


__all__ = ["Clock", "TTLStore", "utc_now"]
