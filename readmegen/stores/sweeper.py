"""Schedulers that trigger periodic eviction of expired store entries."""

from __future__ import annotations

from abc import ABC, abstractmethod
import threading
from typing import Callable, List, Optional

from ..logging import get_logger

SweepFn = Callable[[], int]


class SweepScheduler(ABC):
    """Collects sweep callables and decides when to run them."""

    def __init__(self) -> None:
        self._sweeps: List[SweepFn] = []
        self.logger = get_logger("sweeper")

    def register(self, sweep: SweepFn) -> None:
        self._sweeps.append(sweep)

    def run_sweeps(self) -> int:
        """Run every registered sweep once and return the total evictions."""
        removed = 0
        for sweep in list(self._sweeps):
            try:
                removed += sweep()
            except Exception:  # the remaining stores still sweep
                self.logger.exception("Store sweep failed")
        return removed

    @abstractmethod
    def start(self) -> None:
        """Begin scheduling sweeps."""

    @abstractmethod
    def stop(self) -> None:
        """Stop scheduling sweeps."""


class ManualSweeper(SweepScheduler):
    """Runs sweeps only when ``tick`` is called; used by tests and one-shot runs."""

    def start(self) -> None:
        return None

    def stop(self) -> None:
        return None

    def tick(self) -> int:
        return self.run_sweeps()


class IntervalSweeper(SweepScheduler):
    """Runs sweeps on a fixed interval from a daemon timer thread."""

    def __init__(self, interval_seconds: float) -> None:
        super().__init__()
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.interval_seconds = interval_seconds
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._running = False

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()
        self.logger.debug("Store sweeps scheduled every %.0fs", self.interval_seconds)

    def stop(self) -> None:
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def running(self) -> bool:
        return self._running

    def _schedule(self) -> None:
        timer = threading.Timer(self.interval_seconds, self._fire)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self) -> None:
        removed = self.run_sweeps()
        if removed:
            self.logger.info("Swept %d expired entries", removed)
        with self._lock:
            if self._running:
                self._schedule()


__all__ = ["IntervalSweeper", "ManualSweeper", "SweepScheduler"]
