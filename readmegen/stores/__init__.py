"""Expiring in-memory stores for sessions and repository metadata."""

from .repo_cache import CACHE_TTL, RepositoryCache
from .sessions import SESSION_TTL, SessionStore, session_key
from .sweeper import IntervalSweeper, ManualSweeper, SweepScheduler
from .ttl import TTLStore, utc_now

__all__ = [
    "CACHE_TTL",
    "IntervalSweeper",
    "ManualSweeper",
    "RepositoryCache",
    "SESSION_TTL",
    "SessionStore",
    "SweepScheduler",
    "TTLStore",
    "session_key",
    "utc_now",
]
