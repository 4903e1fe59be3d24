from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from src.footcare.models.app_types import READ_TIMEOUT_SEC, REFRESH_INTERVAL_SEC
from src.footcare.telemetry.subscription import TelemetrySubscription

logger = logging.getLogger(__name__)

IDLE = "idle"
REFRESHING = "refreshing"
CLOSED = "closed"


class RefreshScheduler:
    """Periodic and manual refreshes of a TelemetrySubscription.

    idle -> refreshing -> idle, and closed (terminal). A trigger while a
    refresh is outstanding is dropped, so the store never sees two
    overlapping root reads. A refresh outstanding longer than
    `read_timeout` is expired and reported as a store error.

    There is no timer thread: the app calls `poll()` on every rerun.
    """

    def __init__(
        self,
        subscription: TelemetrySubscription,
        interval: float = REFRESH_INTERVAL_SEC,
        read_timeout: float = READ_TIMEOUT_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._subscription = subscription
        self.interval = interval
        self.read_timeout = read_timeout
        self._clock = clock
        self._lock = threading.Lock()
        # Held while a refresh is expired or started; close() waits on it.
        self._firing = threading.RLock()
        self._state = IDLE
        self._gen = 0
        self._started_at: Optional[float] = None
        self._next_due: Optional[float] = None

    @property
    def state(self) -> str:
        return self._state

    @property
    def refreshing(self) -> bool:
        return self._state == REFRESHING

    def trigger(self) -> bool:
        """Manual refresh. Returns False when it was dropped."""
        return self._fire(self._clock())

    def poll(self, now: Optional[float] = None) -> bool:
        """Expire a stuck refresh, then fire one if the interval has elapsed."""
        now = self._clock() if now is None else now
        with self._firing:
            with self._lock:
                if self._state == CLOSED:
                    return False
                stuck = self._state == REFRESHING and now - self._started_at >= self.read_timeout
                gen = self._gen
            if stuck:
                # Still REFRESHING here, so a trigger from inside expire() is dropped.
                self._subscription.expire(f"no response from store after {self.read_timeout:g}s")
                with self._lock:
                    if self._state == REFRESHING and self._gen == gen:
                        self._state = IDLE
                        self._gen += 1
                        self._started_at = None
            with self._lock:
                due = self._state == IDLE and (self._next_due is None or now >= self._next_due)
            if due:
                return self._fire(now)
        return False

    def _fire(self, now: float) -> bool:
        with self._firing:
            with self._lock:
                if self._state != IDLE:
                    logger.debug("refresh dropped (state=%s)", self._state)
                    return False
                self._state = REFRESHING
                self._gen += 1
                gen = self._gen
                self._started_at = now
                self._next_due = now + self.interval
            try:
                self._subscription.refresh(lambda: self._finish(gen))
            except Exception:
                logger.exception("refresh failed")
                self._finish(gen)
        return True

    def _finish(self, gen: int) -> None:
        with self._lock:
            if gen != self._gen or self._state != REFRESHING:
                return
            self._state = IDLE
            self._started_at = None

    def close(self) -> None:
        with self._lock:
            self._state = CLOSED
            self._gen += 1
        with self._firing:
            pass
        logger.info("refresh scheduler closed")
