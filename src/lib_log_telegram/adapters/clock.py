"""Concrete clock port backed by :mod:`time`."""

from __future__ import annotations

import time

from lib_log_telegram.application.ports.time import ClockPort


class SystemClock(ClockPort):
    """Monotonic clock that really sleeps."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


__all__ = ["SystemClock"]
