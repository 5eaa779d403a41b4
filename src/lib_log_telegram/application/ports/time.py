"""Ports for time measurement and suspension."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide monotonic time and the ability to wait."""

    def now(self) -> float:
        """Return monotonic seconds."""

    def sleep(self, seconds: float) -> None:
        """Suspend the calling thread for ``seconds``."""


__all__ = ["ClockPort"]
