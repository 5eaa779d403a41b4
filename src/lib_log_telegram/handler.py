"""Bridge from the stdlib :mod:`logging` pipeline to :class:`TelegramSink`.

Purpose
-------
Let applications attach the sink like any other handler:
``logging.getLogger().addHandler(TelegramLoggingHandler(sink))`` or the
one-call helper :func:`add_telegram_sink`.

Contents
--------
* :class:`TelegramLoggingHandler` - converts ``LogRecord`` into ``LogEvent``.
* :func:`record_to_event` - the conversion itself.
* :func:`add_telegram_sink` - build sink + handler and register them.

System Role
-----------
The logging pipeline is the sink's upstream collaborator. Records produced by
this package and by the HTTP stack are skipped: they describe the delivery
itself, and the HTTP client logs request URLs that contain the bot token.
"""

from __future__ import annotations

import logging
import threading
import traceback
from datetime import datetime, timezone
from typing import Any

from .domain import LogEvent, LogLevel
from .sink import FormatterLike, TelegramSink

_IGNORED_LOGGER_PREFIXES: tuple[str, ...] = ("lib_log_telegram", "httpx", "httpcore")


def _is_ignored(name: str) -> bool:
    return any(name == prefix or name.startswith(prefix + ".") for prefix in _IGNORED_LOGGER_PREFIXES)


def record_to_event(record: logging.LogRecord, exc_text: str | None = None) -> LogEvent:
    """Translate ``record`` into a :class:`LogEvent`.

    ``record.getMessage()`` already applied the ``%`` arguments, so the event
    carries the rendered text and no properties.
    """

    if exc_text is None:
        exc_text = record.exc_text
        if exc_text is None and record.exc_info and record.exc_info[0] is not None:
            exc_text = "".join(traceback.format_exception(*record.exc_info)).rstrip("\n")
    return LogEvent(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=LogLevel.from_python_level(record.levelno),
        message_template=record.getMessage(),
        exc_info=exc_text,
        logger_name=record.name,
    )


class TelegramLoggingHandler(logging.Handler):
    """:class:`logging.Handler` forwarding records to a :class:`TelegramSink`.

    Failures raised by the sink go through :meth:`logging.Handler.handleError`
    unless the sink was built with ``raise_on_failure=True``, in which case they
    reach the logging call site.
    """

    def __init__(self, sink: TelegramSink, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._sink = sink
        self._local = threading.local()

    @property
    def sink(self) -> TelegramSink:
        return self._sink

    def emit(self, record: logging.LogRecord) -> None:
        if _is_ignored(record.name) or getattr(self._local, "active", False):
            return
        self._local.active = True
        try:
            event = record_to_event(record, self._exception_text(record))
            self._sink.emit(event)
        except Exception:
            if self._sink.raise_on_failure:
                raise
            self.handleError(record)
        finally:
            self._local.active = False

    def close(self) -> None:
        try:
            self._sink.close()
        finally:
            super().close()

    def _exception_text(self, record: logging.LogRecord) -> str | None:
        """Use the attached formatter's exception rendering when one is set."""
        if self.formatter is None or not record.exc_info or record.exc_info[0] is None:
            return None
        return self.formatter.formatException(record.exc_info)


def add_telegram_sink(
    logger: logging.Logger | str | None,
    bot_id: str,
    chat_id: str | int,
    formatter: FormatterLike | None = None,
    *,
    level: int | str = logging.NOTSET,
    **options: Any,
) -> TelegramLoggingHandler:
    """Create a sink and attach its handler to ``logger``.

    Parameters
    ----------
    logger:
        Target logger, logger name, or ``None`` for the root logger.
    bot_id, chat_id, formatter:
        Forwarded to :class:`TelegramSink`.
    level:
        Handler threshold; stdlib integer or level name.
    **options:
        Further :class:`TelegramSink` keyword options.

    Returns
    -------
    TelegramLoggingHandler
        The registered handler; call ``close()`` (or ``logging.shutdown()``)
        to release the sink.
    """

    target = logger if isinstance(logger, logging.Logger) else logging.getLogger(logger)
    sink = TelegramSink(bot_id, chat_id, formatter, **options)
    if isinstance(level, str):
        level = LogLevel.from_name(level).to_python_level()
    handler = TelegramLoggingHandler(sink, level=level)
    target.addHandler(handler)
    return handler


__all__ = ["TelegramLoggingHandler", "add_telegram_sink", "record_to_event"]
