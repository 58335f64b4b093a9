"""Fixed-rate background timer that drives window resets.

Notes:
- One daemon thread per scheduler; nothing is shared between instances.
- Ticks are aligned to the start instant (``t0 + n * period``), not to the
  end of the previous tick, so the schedule does not drift.
- A failing callback is logged and the thread keeps running. If the thread
  died, every caller waiting for permits would block forever.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)


class WindowScheduler:
    """Run ``callback`` immediately and then once every ``period_seconds``."""

    def __init__(
        self,
        period_seconds: float,
        callback: Callable[[], None],
        *,
        name: str = "window-scheduler",
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if period_seconds <= 0:
            raise ValueError("period_seconds must be > 0")

        self._period = period_seconds
        self._callback = callback
        self._name = name
        self._monotonic = monotonic
        self._stopped = threading.Event()
        # Held around each tick and around stop(), so no tick starts after
        # stop() has returned.
        self._tick_lock = threading.RLock()
        self._thread: threading.Thread | None = None
        self._fire_count = 0

    @property
    def fire_count(self) -> int:
        return self._fire_count

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def start(self) -> None:
        """Start the timer thread. The first tick fires at once.

        Raises:
            RuntimeError: If already started or stopped.
        """
        if self._thread is not None or self._stopped.is_set():
            raise RuntimeError("WindowScheduler can only be started once")

        origin = self._monotonic()
        self._thread = threading.Thread(
            target=self._run,
            args=(origin,),
            name=self._name,
            daemon=True,
        )
        self._thread.start()
        logger.debug(
            "scheduler.started",
            extra={"scheduler": self._name, "period_s": self._period},
        )

    def stop(self) -> None:
        """Cancel all future ticks. Idempotent; a running tick completes."""
        with self._tick_lock:
            if self._stopped.is_set():
                return
            self._stopped.set()

        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

        logger.debug(
            "scheduler.stopped",
            extra={"scheduler": self._name, "fire_count": self._fire_count},
        )

    def _run(self, origin: float) -> None:
        tick = 0
        while True:
            delay = origin + tick * self._period - self._monotonic()
            if delay > 0 and self._stopped.wait(delay):
                return
            if delay > 0:
                # Event.wait may wake marginally early; re-check the deadline.
                continue

            with self._tick_lock:
                if self._stopped.is_set():
                    return
                self._fire()

            tick = self._next_tick(origin, tick)

    def _next_tick(self, origin: float, tick: int) -> int:
        # Fire the latest overdue tick at once; older overdue ones are dropped.
        due = math.floor((self._monotonic() - origin) / self._period)
        if due > tick + 1:
            logger.warning(
                "scheduler.ticks_skipped",
                extra={"scheduler": self._name, "skipped": due - tick - 1},
            )
            return due
        return tick + 1

    def _fire(self) -> None:
        self._fire_count += 1
        try:
            self._callback()
        except Exception:
            logger.exception(
                "scheduler.callback_failed",
                extra={"scheduler": self._name, "fire_count": self._fire_count},
            )
