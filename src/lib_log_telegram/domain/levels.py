"""Log level abstraction shared by the sink, the formatter, and the bridge.

Purpose
-------
Offer the six-step severity scale used by the Telegram sink
(``VERBOSE`` .. ``FATAL``) together with conversions from and to the stdlib
:mod:`logging` integers.

Contents
--------
* :class:`LogLevel` enum with name/number conversion helpers.
* ``_ALIASES`` constant mapping alternative spellings to canonical members.

System Role
-----------
Used by the formatter to pick the message prefix and by
:class:`lib_log_telegram.handler.TelegramLoggingHandler` to translate
``LogRecord.levelno`` values.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Ordered severities, numerically aligned with :mod:`logging`."""

    VERBOSE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    def to_python_level(self) -> int:
        """Return the :mod:`logging` integer matching this level.

        ``VERBOSE`` has no stdlib counterpart and keeps its own value.
        """

        if self is LogLevel.FATAL:
            return logging.CRITICAL
        return self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value <= other.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging integer into :class:`LogLevel`.

        Custom levels between the standard ones map to the closest lower
        member; anything below ``DEBUG`` is ``VERBOSE``.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.CRITICAL)
        <LogLevel.FATAL: 50>
        >>> LogLevel.from_python_level(25)
        <LogLevel.INFO: 20>
        >>> LogLevel.from_python_level(1)
        <LogLevel.VERBOSE: 5>
        """

        selected = cls.VERBOSE
        for member in cls:
            if member.value <= level:
                selected = member
        return selected


_ALIASES = {
    "TRACE": "VERBOSE",
    "INFORMATION": "INFO",
    "WARN": "WARNING",
    "CRITICAL": "FATAL",
}
# Serilog and stdlib spellings accepted by :meth:`LogLevel.from_name`.


__all__ = ["LogLevel"]
