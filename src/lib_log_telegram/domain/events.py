"""Domain event describing a structured log message handed to the sink.

Purpose
-------
Provide an immutable representation of one log event: severity, message
template with its properties, and optional exception text.

Contents
--------
* :class:`LogEvent` dataclass with :meth:`LogEvent.render_message`.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Read-only input of the emit use case. The sink never mutates events; the
logging bridge builds them from stdlib records.
"""

from __future__ import annotations

import string
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


class _KeepMissing(dict):
    """Mapping used for rendering that leaves unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


_FORMATTER = string.Formatter()


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event delivered to the Telegram sink.

    Attributes
    ----------
    timestamp:
        Time of the event in timezone-aware UTC.
    level:
        :class:`LogLevel` severity associated with the event.
    message_template:
        Message text, optionally containing ``{name}`` placeholders.
    properties:
        Values substituted into ``message_template`` on rendering.
    exc_info:
        Optional full exception text (message plus traceback).
    logger_name:
        Logical logger emitting the event.
    """

    timestamp: datetime
    level: LogLevel
    message_template: str
    properties: Mapping[str, Any] = field(default_factory=dict)
    exc_info: str | None = None
    logger_name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "properties", dict(self.properties))

    def render_message(self) -> str:
        """Return the message with placeholders replaced by property values.

        Placeholders without a matching property stay as written. A template
        that cannot be parsed, or whose values do not fit their format spec,
        is returned verbatim.

        Examples
        --------
        >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
        >>> LogEvent(ts, LogLevel.INFO, "user {user} in {room}", {"user": "ada"}).render_message()
        'user ada in {room}'
        >>> LogEvent(ts, LogLevel.INFO, "raw {braces}").render_message()
        'raw {braces}'
        """

        if not self.properties:
            return self.message_template
        try:
            return _FORMATTER.vformat(self.message_template, (), _KeepMissing(self.properties))
        except (ValueError, IndexError, AttributeError, KeyError, TypeError):
            return self.message_template

    def replace(self, **changes: Any) -> "LogEvent":
        """Return a copied event with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEvent"]
