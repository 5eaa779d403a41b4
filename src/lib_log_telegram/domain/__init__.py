"""Domain entities and value objects used by the Telegram sink."""

from __future__ import annotations

from .delivery import DEFAULT_API_URL, PARSE_MODE, DeliveryRequest
from .events import LogEvent
from .levels import LogLevel
from .throttle import DEFAULT_MIN_INTERVAL, WaitPolicy, compute_wait

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_MIN_INTERVAL",
    "DeliveryRequest",
    "LogEvent",
    "LogLevel",
    "PARSE_MODE",
    "WaitPolicy",
    "compute_wait",
]
