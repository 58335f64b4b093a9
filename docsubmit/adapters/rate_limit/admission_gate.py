"""Counting permit pool with a blocking ``acquire``.

Notes:
- Permits are consumed, never released back by callers.
- Only ``reset`` adds permits, and it replaces the count instead of adding
  to it, so unused permits never roll over into the next window.
- Waiters sleep on a condition variable; the lock is released while they
  wait, so the scheduler can always get in to reset.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

from docsubmit.core.errors import InterruptedWaitError


class AdmissionGate:
    """Quota of ``limit`` permits per window, refilled by ``reset``.

    The gate starts empty; nothing is admitted until the first reset.
    """

    def __init__(self, limit: int, *, clock: Callable[[], float] = time.time) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")

        self._limit = limit
        self._clock = clock
        self._condition = threading.Condition(threading.Lock())
        self._available = 0
        self._window_start: float | None = None
        self._resets = 0
        self._interrupts = 0
        self._waiting = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def available_permits(self) -> int:
        with self._condition:
            return self._available

    @property
    def window_start(self) -> float | None:
        with self._condition:
            return self._window_start

    @property
    def resets(self) -> int:
        with self._condition:
            return self._resets

    @property
    def waiting(self) -> int:
        """Callers currently blocked in ``acquire``."""
        with self._condition:
            return self._waiting

    def acquire(self, timeout: float | None = None) -> bool:
        """Take one permit, waiting for a reset if none are left.

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.

        Returns:
            True when a permit was taken, False if the timeout elapsed.

        Raises:
            InterruptedWaitError: If ``interrupt_waiters`` ran while waiting.
        """
        with self._condition:
            interrupts_seen = self._interrupts
            self._waiting += 1
            try:
                ready = self._condition.wait_for(
                    lambda: self._available > 0 or self._interrupts != interrupts_seen,
                    timeout=timeout,
                )
            finally:
                self._waiting -= 1
            if self._interrupts != interrupts_seen:
                raise InterruptedWaitError(
                    code="acquire_interrupted",
                    message="Waiting for a rate limit permit was interrupted",
                    details={"limit": self._limit},
                )
            if not ready:
                return False
            self._available -= 1
            return True

    def reset(self) -> None:
        """Discard leftover permits and refill to ``limit`` for a new window."""
        with self._condition:
            self._available = self._limit
            self._window_start = self._clock()
            self._resets += 1
            self._condition.notify(self._limit)

    def interrupt_waiters(self) -> None:
        """Wake every blocked ``acquire`` so it raises ``InterruptedWaitError``."""
        with self._condition:
            self._interrupts += 1
            self._condition.notify_all()
