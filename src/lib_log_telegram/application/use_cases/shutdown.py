"""Shutdown orchestration for the Telegram sink.

Purpose
-------
Provide one routine that drains the optional queue and then releases the
delivery client's HTTP resources.
"""

from __future__ import annotations

from typing import Callable

from lib_log_telegram.application.ports.delivery import DeliveryPort
from lib_log_telegram.application.ports.queue import QueuePort


def create_shutdown(
    *,
    queue: QueuePort | None,
    delivery: DeliveryPort,
    drain_timeout: float | None = None,
) -> Callable[[], None]:
    """Return a callable performing the shutdown sequence exactly once."""

    done = False

    def shutdown() -> None:
        """Drain queued events, then close the delivery client."""
        nonlocal done
        if done:
            return
        done = True
        try:
            if queue is not None:
                queue.stop(drain=True, timeout=drain_timeout)
        finally:
            delivery.close()

    return shutdown


__all__ = ["create_shutdown"]
