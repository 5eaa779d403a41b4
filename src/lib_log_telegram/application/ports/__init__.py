"""Ports separating the emit use case from concrete adapters."""

from __future__ import annotations

from .delivery import DeliveryPort
from .formatter import MessageFormatterPort
from .queue import QueuePort
from .rate_limiter import RateGatePort
from .time import ClockPort

__all__ = ["ClockPort", "DeliveryPort", "MessageFormatterPort", "QueuePort", "RateGatePort"]
