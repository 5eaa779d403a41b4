"""Port describing the background dispatcher for asynchronous emission."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_telegram.domain.events import LogEvent


@runtime_checkable
class QueuePort(Protocol):
    """Bridge between logging call sites and the delivery worker."""

    def start(self) -> None:
        """Start the queue worker."""

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the queue worker, optionally draining queued events."""

    def put(self, event: LogEvent) -> bool:
        """Enqueue ``event``; return ``False`` when it was dropped."""


__all__ = ["QueuePort"]
