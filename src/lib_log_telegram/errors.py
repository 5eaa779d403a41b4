"""Exceptions raised by the Telegram sink."""

from __future__ import annotations


class TelegramSinkError(RuntimeError):
    """Base class for all errors raised by :mod:`lib_log_telegram`."""


class TelegramDeliveryError(TelegramSinkError):
    """The Bot API could not be reached or rejected the message.

    Attributes
    ----------
    status_code:
        HTTP status returned by the API; ``None`` for transport failures.
    description:
        ``description`` field of the API error body, when present.
    """

    def __init__(self, message: str, *, status_code: int | None = None, description: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.description = description


class ConfigurationError(TelegramSinkError, ValueError):
    """Settings are missing or malformed."""


__all__ = ["ConfigurationError", "TelegramDeliveryError", "TelegramSinkError"]
