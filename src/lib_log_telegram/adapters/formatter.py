"""Default Telegram message formatter implementing :class:`MessageFormatterPort`.

Purpose
-------
Render a log event as a Markdown code block so the Telegram client shows it in
a monospace font, prefixed with a severity tag and followed by the exception
text when one was captured.

Contents
--------
* :data:`LEVEL_PREFIXES` - literal prefix per :class:`LogLevel`.
* :class:`TelegramDefaultFormatter` - formatter used when the sink is built
  without a custom one.
* :class:`CallableFormatter` - wraps a plain function into the port.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping

from lib_log_telegram.application.ports.formatter import MessageFormatterPort
from lib_log_telegram.domain.levels import LogLevel

CODE_FENCE = "```"

LEVEL_PREFIXES: Mapping[LogLevel, str] = {
    LogLevel.VERBOSE: "*VERBOSE* ",
    LogLevel.DEBUG: "*DEBUG* ",
    LogLevel.INFO: "*INFO* ",
    LogLevel.WARNING: "*WARNING* ",
    LogLevel.ERROR: "ERROR: ",
    LogLevel.FATAL: "*FATAL* ",
}
#: ``ERROR`` carries no emphasis markers, unlike the other levels.


class TelegramDefaultFormatter(MessageFormatterPort):
    """Wrap ``prefix + message + exception`` in a triple-backtick block.

    Examples
    --------
    >>> TelegramDefaultFormatter().format(LogLevel.INFO, "disk almost full", None)
    '```*INFO* disk almost full```'
    >>> TelegramDefaultFormatter(newline="\\n").format(LogLevel.ERROR, "boom", "ValueError: bad")
    '```ERROR: boom\\n\\nValueError: bad```'
    """

    def __init__(self, *, newline: str = os.linesep) -> None:
        self._newline = newline

    def format(self, level: LogLevel, message: str, exc_info: str | None) -> str:
        prefix = LEVEL_PREFIXES.get(level, "")
        suffix = "" if exc_info is None else self._newline * 2 + exc_info
        return f"{CODE_FENCE}{prefix}{message}{suffix}{CODE_FENCE}"


class CallableFormatter(MessageFormatterPort):
    """Adapt a ``(level, message, exc_info) -> str`` function to the port."""

    def __init__(self, fn: Callable[[LogLevel, str, str | None], str]) -> None:
        self._fn = fn

    def format(self, level: LogLevel, message: str, exc_info: str | None) -> str:
        return self._fn(level, message, exc_info)


def resolve_formatter(
    formatter: MessageFormatterPort | Callable[[LogLevel, str, str | None], str] | None,
) -> MessageFormatterPort:
    """Return ``formatter`` as a port instance, defaulting to the built-in one."""

    if formatter is None:
        return TelegramDefaultFormatter()
    if isinstance(formatter, (str, bytes, logging.Formatter)):
        raise TypeError(f"formatter must provide format(level, message, exc_info), got {type(formatter).__name__}")
    if isinstance(formatter, MessageFormatterPort):
        return formatter
    if callable(formatter):
        return CallableFormatter(formatter)
    raise TypeError(f"formatter must provide format(level, message, exc_info) or be callable, got {type(formatter).__name__}")


__all__ = ["CODE_FENCE", "CallableFormatter", "LEVEL_PREFIXES", "TelegramDefaultFormatter", "resolve_formatter"]
