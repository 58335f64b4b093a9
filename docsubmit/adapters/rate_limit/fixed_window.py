"""Blocking fixed-window rate limiter.

Notes:
- Per-process only: each instance owns its own quota and scheduler thread.
- Windows follow the wall clock from construction, not caller activity.
- ``shutdown`` does not wake callers that are already blocked; they stay
  blocked. Use ``interrupt_waiters`` to release them explicitly.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import timedelta
from typing import Any, Callable

from docsubmit.adapters.rate_limit.admission_gate import AdmissionGate
from docsubmit.adapters.rate_limit.base import (
    AbstractBlockingRateLimiter,
    QuotaSnapshot,
    RateLimiterConfig,
)
from docsubmit.adapters.rate_limit.scheduler import WindowScheduler

logger = logging.getLogger(__name__)


class FixedWindowRateLimiter(AbstractBlockingRateLimiter):
    """Admit at most ``config.limit`` callers per ``config.window``.

    The scheduler starts in the constructor and fires immediately, so the
    first window opens as soon as the limiter exists. Configuration is
    validated by ``RateLimiterConfig`` before any thread is created.
    """

    def __init__(
        self,
        config: RateLimiterConfig,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter and start its window scheduler.

        Args:
            config: Validated window and limit.
            clock: Wall-clock source used to stamp window starts.
        """
        self._config = config
        self._gate = AdmissionGate(config.limit, clock=clock)
        self._scheduler = WindowScheduler(
            config.window_seconds,
            self._reset_window,
            name=f"rate-limit-window-{id(self):x}",
        )
        self._shut_down = False
        self._shutdown_lock = threading.Lock()
        self._scheduler.start()

    @classmethod
    def create(cls, *, limit: int, window_seconds: float, **kwargs: Any) -> FixedWindowRateLimiter:
        """Shortcut for ``FixedWindowRateLimiter(RateLimiterConfig(...))``.

        Raises:
            InvalidConfigurationError: If limit or window_seconds is not positive.
        """
        return cls(RateLimiterConfig(window=timedelta(seconds=window_seconds), limit=limit), **kwargs)

    @property
    def config(self) -> RateLimiterConfig:
        return self._config

    @property
    def is_shut_down(self) -> bool:
        return self._shut_down

    def acquire(self, timeout: float | None = None) -> bool:
        if self._gate.acquire(timeout=0):
            return True

        logger.debug(
            "rate_limit.acquire.blocked",
            extra={"limit": self._config.limit, "window_s": self._config.window_seconds},
        )
        started = time.monotonic()
        admitted = self._gate.acquire(timeout=timeout)
        waited_ms = round((time.monotonic() - started) * 1000, 2)

        if admitted:
            logger.info(
                "rate_limit.acquire.admitted",
                extra={"limit": self._config.limit, "waited_ms": waited_ms},
            )
        else:
            logger.warning(
                "rate_limit.acquire.timeout",
                extra={"limit": self._config.limit, "timeout_s": timeout, "waited_ms": waited_ms},
            )
        return admitted

    def shutdown(self) -> None:
        with self._shutdown_lock:
            if self._shut_down:
                return
            self._shut_down = True
        self._scheduler.stop()
        logger.info(
            "rate_limit.shutdown",
            extra={"limit": self._config.limit, "resets": self._gate.resets},
        )

    def interrupt_waiters(self) -> None:
        """Release every blocked caller with ``InterruptedWaitError``."""
        self._gate.interrupt_waiters()

    def snapshot(self) -> QuotaSnapshot:
        return QuotaSnapshot(
            limit=self._config.limit,
            available_permits=self._gate.available_permits,
            window_start=self._gate.window_start,
            window_seconds=self._config.window_seconds,
            resets=self._gate.resets,
            waiting=self._gate.waiting,
        )

    def _reset_window(self) -> None:
        self._gate.reset()
        logger.debug(
            "rate_limit.window.reset",
            extra={"limit": self._config.limit, "window_s": self._config.window_seconds},
        )
