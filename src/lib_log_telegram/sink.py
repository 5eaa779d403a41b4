"""Sink façade wiring the rate gate, formatter, and Telegram client together.

Purpose
-------
Expose :class:`TelegramSink`, the object host applications construct once at
logging setup and call with :meth:`TelegramSink.emit` for every log event.

Contents
--------
* :class:`TelegramSink` - composition root and public emission entry point.

System Role
-----------
Outer shell of the package: adapters are chosen here, while throttling and
failure policy live in
:mod:`lib_log_telegram.application.use_cases.emit_event`.

Blocking Contract
-----------------
In the default synchronous mode ``emit`` blocks the calling thread for the
throttle wait plus the HTTP round-trip. With ``asynchronous=True`` it only
enqueues; a single worker thread performs the same steps in order.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from typing import Any

from .adapters import MinIntervalRateGate, QueueAdapter, SystemClock, TelegramBotClient, resolve_formatter
from .application.ports import ClockPort, DeliveryPort, MessageFormatterPort
from .application.use_cases.emit_event import DiagnosticHook, create_emit_log_event
from .application.use_cases.shutdown import create_shutdown
from .domain import DEFAULT_MIN_INTERVAL, LogEvent, LogLevel, WaitPolicy
from .errors import ConfigurationError

FormatterLike = MessageFormatterPort | Callable[[LogLevel, str, str | None], str]


class TelegramSink:
    """Forward log events to a Telegram chat, at most one every ``min_interval``.

    Parameters
    ----------
    bot_id:
        Bot API token (``123456:ABC...``).
    chat_id:
        Target chat, channel, or user identifier.
    formatter:
        Optional :class:`MessageFormatterPort` or plain
        ``(level, message, exc_info) -> str`` callable; defaults to
        :class:`~lib_log_telegram.adapters.formatter.TelegramDefaultFormatter`.
    min_interval:
        Minimum spacing between messages (four seconds by default).
    wait_policy:
        :class:`WaitPolicy` applied when an event arrives early.
    raise_on_failure:
        Let formatter and delivery errors escape :meth:`emit`.
    timeout:
        HTTP timeout in seconds for the default client.
    asynchronous:
        Emit through a background queue instead of on the caller's thread.
    queue_maxsize, stop_timeout:
        Queue capacity and the drain deadline used by :meth:`close`.
    delivery, clock:
        Injectable collaborators, mainly for tests.
    diagnostic:
        Optional ``(name, payload)`` callback receiving pipeline milestones.

    Examples
    --------
    >>> class Outbox:
    ...     def __init__(self):
    ...         self.requests = []
    ...     def send(self, request):
    ...         self.requests.append(request)
    ...     def close(self):
    ...         pass
    >>> from datetime import datetime, timezone
    >>> outbox = Outbox()
    >>> with TelegramSink("1:token", "42", min_interval=timedelta(0), delivery=outbox) as sink:
    ...     sink.emit(LogEvent(datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.WARNING, "disk {pct}% full", {"pct": 91}))
    >>> outbox.requests[0].text
    '```*WARNING* disk 91% full```'
    """

    def __init__(
        self,
        bot_id: str,
        chat_id: str | int,
        formatter: FormatterLike | None = None,
        *,
        min_interval: timedelta = DEFAULT_MIN_INTERVAL,
        wait_policy: WaitPolicy | str = WaitPolicy.DOUBLE_ELAPSED,
        raise_on_failure: bool = False,
        timeout: float | None = 10.0,
        asynchronous: bool = False,
        queue_maxsize: int = 1024,
        stop_timeout: float | None = 30.0,
        delivery: DeliveryPort | None = None,
        clock: ClockPort | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        if not bot_id or not str(bot_id).strip():
            raise ConfigurationError("bot_id must not be empty")
        if chat_id is None or not str(chat_id).strip():
            raise ConfigurationError("chat_id must not be empty")
        policy = WaitPolicy.from_name(wait_policy) if isinstance(wait_policy, str) else wait_policy

        self._bot_id = str(bot_id).strip()
        self._chat_id = str(chat_id).strip()
        self._formatter = resolve_formatter(formatter)
        self._raise_on_failure = raise_on_failure
        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._delivery: DeliveryPort = delivery if delivery is not None else TelegramBotClient(timeout=timeout)
        self._rate_gate = MinIntervalRateGate(min_interval=min_interval, policy=policy, start=self._clock.now())
        self._process = create_emit_log_event(
            bot_id=self._bot_id,
            chat_id=self._chat_id,
            formatter=self._formatter,
            delivery=self._delivery,
            rate_gate=self._rate_gate,
            clock=self._clock,
            raise_on_failure=raise_on_failure and not asynchronous,
            diagnostic=diagnostic,
        )
        self._queue: QueueAdapter | None = None
        if asynchronous:
            self._queue = QueueAdapter(
                worker=self._process,
                maxsize=queue_maxsize,
                stop_timeout=stop_timeout,
                diagnostic=diagnostic,
            )
            self._queue.start()
        self._shutdown = create_shutdown(queue=self._queue, delivery=self._delivery, drain_timeout=stop_timeout)
        self._closed = False

    @property
    def bot_id(self) -> str:
        return self._bot_id

    @property
    def chat_id(self) -> str:
        return self._chat_id

    @property
    def formatter(self) -> MessageFormatterPort:
        return self._formatter

    @property
    def raise_on_failure(self) -> bool:
        return self._raise_on_failure

    @property
    def rate_gate(self) -> MinIntervalRateGate:
        return self._rate_gate

    @property
    def asynchronous(self) -> bool:
        return self._queue is not None

    def emit(self, event: LogEvent) -> None:
        """Throttle, format, and deliver ``event``.

        Returns nothing; delivery outcomes are reported through logging and
        the diagnostic hook unless ``raise_on_failure`` is set.
        """

        if self._closed:
            raise RuntimeError("TelegramSink is closed")
        if self._queue is not None:
            self._queue.put(event)
            return
        self._process(event)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for queued events; always ``True`` in synchronous mode."""
        if self._queue is None:
            return True
        return self._queue.wait_until_idle(timeout)

    def close(self) -> None:
        """Drain the queue (if any) and release the HTTP client."""
        if self._closed:
            return
        self._closed = True
        self._shutdown()

    def __enter__(self) -> "TelegramSink":
        return self

    def __exit__(self, *_exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        mode = "async" if self._queue is not None else "sync"
        return f"TelegramSink(chat_id={self._chat_id!r}, mode={mode!r})"


__all__ = ["TelegramSink"]
