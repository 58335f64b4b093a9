"""Tests for the fixed-rate window scheduler."""

from __future__ import annotations

import threading
import time

import pytest

from docsubmit.adapters.rate_limit.scheduler import WindowScheduler


class _Recorder:
    def __init__(self) -> None:
        self.times: list[float] = []
        self.first = threading.Event()

    def __call__(self) -> None:
        self.times.append(time.monotonic())
        self.first.set()


def test_first_tick_fires_immediately() -> None:
    recorder = _Recorder()
    scheduler = WindowScheduler(10.0, recorder)

    start = time.monotonic()
    scheduler.start()
    try:
        assert recorder.first.wait(timeout=1)
        assert recorder.times[0] - start < 0.2
        assert scheduler.fire_count == 1
        assert scheduler.is_running
    finally:
        scheduler.stop()


def test_ticks_follow_fixed_schedule() -> None:
    recorder = _Recorder()
    scheduler = WindowScheduler(0.1, recorder)

    start = time.monotonic()
    scheduler.start()
    time.sleep(0.45)
    scheduler.stop()

    assert 4 <= len(recorder.times) <= 6
    for index, fired_at in enumerate(recorder.times):
        # Never early relative to start + n * period.
        assert fired_at - start >= index * 0.1


def test_stop_prevents_further_ticks() -> None:
    recorder = _Recorder()
    scheduler = WindowScheduler(0.05, recorder)
    scheduler.start()
    time.sleep(0.12)

    scheduler.stop()
    fired = scheduler.fire_count
    time.sleep(0.15)

    assert scheduler.fire_count == fired
    assert not scheduler.is_running


def test_stop_is_idempotent_and_safe_before_start() -> None:
    scheduler = WindowScheduler(1.0, lambda: None)

    scheduler.stop()
    scheduler.stop()

    assert scheduler.fire_count == 0


def test_cannot_restart() -> None:
    scheduler = WindowScheduler(1.0, lambda: None)
    scheduler.start()
    scheduler.stop()

    with pytest.raises(RuntimeError):
        scheduler.start()


def test_cannot_start_twice() -> None:
    scheduler = WindowScheduler(1.0, lambda: None)
    scheduler.start()
    try:
        with pytest.raises(RuntimeError):
            scheduler.start()
    finally:
        scheduler.stop()


def test_failing_callback_does_not_kill_timer() -> None:
    calls: list[int] = []

    def flaky() -> None:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")

    scheduler = WindowScheduler(0.05, flaky)
    scheduler.start()
    time.sleep(0.17)
    scheduler.stop()

    assert len(calls) >= 3


def test_stop_from_callback() -> None:
    holder: dict[str, WindowScheduler] = {}

    def stop_self() -> None:
        holder["scheduler"].stop()

    scheduler = WindowScheduler(0.05, stop_self)
    holder["scheduler"] = scheduler
    scheduler.start()
    time.sleep(0.15)

    assert scheduler.fire_count == 1


def test_invalid_period() -> None:
    with pytest.raises(ValueError):
        WindowScheduler(0, lambda: None)
