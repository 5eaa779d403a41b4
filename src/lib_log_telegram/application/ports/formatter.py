"""Port for turning a log event into the final message text."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_telegram.domain.levels import LogLevel


@runtime_checkable
class MessageFormatterPort(Protocol):
    """Render ``(level, message, exc_info)`` into the text sent to the chat."""

    def format(self, level: LogLevel, message: str, exc_info: str | None) -> str:
        """Return the outbound text for one event."""


__all__ = ["MessageFormatterPort"]
