"""Best-effort memoization of repository metadata lookups."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from ..logging import get_logger
from ..models import RepositoryMetadata
from .ttl import Clock, TTLStore, utc_now

CACHE_TTL = timedelta(hours=1)


class RepositoryCache:
    """Caches normalized metadata keyed by case-insensitive ``owner/repo``."""

    def __init__(self, ttl: timedelta = CACHE_TTL, *, clock: Clock = utc_now) -> None:
        self._store: TTLStore[RepositoryMetadata] = TTLStore(ttl, clock=clock)
        self.logger = get_logger("repo_cache")

    def get(self, owner: str, repo: str) -> Optional[RepositoryMetadata]:
        return self._store.get(self._key(owner, repo))

    def put(self, owner: str, repo: str, metadata: RepositoryMetadata) -> None:
        self._store.put(self._key(owner, repo), metadata)

    def sweep(self) -> int:
        removed = self._store.sweep()
        if removed:
            self.logger.debug("Evicted %d expired repository entries", removed)
        return removed

    def __len__(self) -> int:
        return len(self._store)

    @staticmethod
    def _key(owner: str, repo: str) -> str:
        return f"{owner}/{repo}".lower()


__all__ = ["CACHE_TTL", "RepositoryCache"]
