"""Port describing the outbound chat delivery client."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_telegram.domain.delivery import DeliveryRequest


@runtime_checkable
class DeliveryPort(Protocol):
    """Send one formatted message to the remote chat endpoint."""

    def send(self, request: DeliveryRequest) -> None:
        """Deliver ``request``; raise :class:`TelegramDeliveryError` on failure."""

    def close(self) -> None:
        """Release transport resources held by the client."""


__all__ = ["DeliveryPort"]
