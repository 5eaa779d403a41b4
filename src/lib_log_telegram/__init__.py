"""Rate-limited Telegram sink for structured log events.

Construct a :class:`TelegramSink` once at logging setup and call
:meth:`TelegramSink.emit`, or attach it to stdlib logging with
:func:`add_telegram_sink`. Messages are spaced at least four seconds apart by
default so the Bot API quota of 15 messages per minute is respected.
"""

from __future__ import annotations

from .adapters.formatter import TelegramDefaultFormatter
from .application.ports import MessageFormatterPort
from .domain import DeliveryRequest, LogEvent, LogLevel, WaitPolicy
from .errors import ConfigurationError, TelegramDeliveryError, TelegramSinkError
from .handler import TelegramLoggingHandler, add_telegram_sink
from .sink import TelegramSink

__all__ = [
    "ConfigurationError",
    "DeliveryRequest",
    "LogEvent",
    "LogLevel",
    "MessageFormatterPort",
    "TelegramDefaultFormatter",
    "TelegramDeliveryError",
    "TelegramLoggingHandler",
    "TelegramSink",
    "TelegramSinkError",
    "WaitPolicy",
    "add_telegram_sink",
]
