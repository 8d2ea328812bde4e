"""Short-lived memory of the last document generated per conversation."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from ..logging import get_logger
from ..models import SessionRecord, TrackMode
from .ttl import Clock, TTLStore, utc_now

SESSION_TTL = timedelta(minutes=30)


def session_key(session_id: str, track: TrackMode) -> str:
    """Combine the opaque session token with the track so README and TEMPLATE never collide."""
    return f"{session_id}-{track.value}"


class SessionStore:
    """Holds the previous document for each session key until it expires."""

    def __init__(self, ttl: timedelta = SESSION_TTL, *, clock: Clock = utc_now) -> None:
        self._store: TTLStore[str] = TTLStore(ttl, clock=clock)
        self.logger = get_logger("sessions")

    @property
    def ttl(self) -> timedelta:
        return self._store.ttl

    def get(self, key: str) -> Optional[SessionRecord]:
        if not key:
            return None
        document = self._store.get(key)
        if document is None:
            return None
        created_at = self._store.stored_at(key)
        if created_at is None:  # pragma: no cover - evicted by a concurrent sweep
            return None
        return SessionRecord(previous_document=document, created_at=created_at)

    def put(self, key: str, document: str) -> None:
        if not key:
            return
        self._store.put(key, document)

    def sweep(self) -> int:
        removed = self._store.sweep()
        if removed:
            self.logger.debug("Evicted %d expired session(s)", removed)
        return removed

    def __len__(self) -> int:
        return len(self._store)


__all__ = ["SESSION_TTL", "SessionStore", "session_key"]
