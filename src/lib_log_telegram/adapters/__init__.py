"""Concrete adapters plugged into the Telegram emit pipeline."""

from __future__ import annotations

from .clock import SystemClock
from .formatter import CallableFormatter, TelegramDefaultFormatter, resolve_formatter
from .queue import QueueAdapter
from .rate_limiter import MinIntervalRateGate
from .telegram import TelegramBotClient

__all__ = [
    "CallableFormatter",
    "MinIntervalRateGate",
    "QueueAdapter",
    "SystemClock",
    "TelegramBotClient",
    "TelegramDefaultFormatter",
    "resolve_formatter",
]
