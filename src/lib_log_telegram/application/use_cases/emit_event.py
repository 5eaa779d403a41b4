"""Use case orchestrating the delivery of a single log event to Telegram.

Purpose
-------
Tie together the rate gate, the message formatter, and the delivery client:
wait if the previous message went out too recently, record the new emission
time, render and format the event, then send it.

Contents
--------
* :func:`create_emit_log_event` factory returning the runtime callable.
* ``_EmitPipeline`` - the callable itself, one instance per sink.

System Role
-----------
Application-layer orchestrator invoked by :class:`lib_log_telegram.sink.TelegramSink`
either inline on the logging thread or on the queue worker.

Failure Policy
--------------
With ``raise_on_failure=False`` formatter and delivery errors are logged to
this module's logger, reported through the diagnostic hook, and the message is
dropped. With ``raise_on_failure=True`` they propagate to the caller, which is
how the historical sink behaved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from lib_log_telegram.application.ports import ClockPort, DeliveryPort, MessageFormatterPort, RateGatePort
from lib_log_telegram.domain import DeliveryRequest, LogEvent

logger = logging.getLogger(__name__)

EmitResult = dict[str, Any]
DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


def create_emit_log_event(
    *,
    bot_id: str,
    chat_id: str,
    formatter: MessageFormatterPort,
    delivery: DeliveryPort,
    rate_gate: RateGatePort,
    clock: ClockPort,
    raise_on_failure: bool = False,
    diagnostic: DiagnosticHook = None,
) -> Callable[[LogEvent], EmitResult]:
    """Build the orchestrator capturing the sink's dependency wiring.

    Parameters
    ----------
    bot_id, chat_id:
        Credential and destination, fixed for the lifetime of the callable.
    formatter:
        Adapter implementing :class:`MessageFormatterPort`.
    delivery:
        Adapter implementing :class:`DeliveryPort`.
    rate_gate:
        Gate deciding how long to wait; its lock serialises concurrent callers.
    clock:
        Monotonic time source that also performs the throttle sleep.
    raise_on_failure:
        Propagate formatter/delivery errors instead of logging and dropping.
    diagnostic:
        Optional callback invoked with pipeline milestones
        (``throttled``, ``delivered``, ``delivery_failed``).

    Returns
    -------
    Callable[[LogEvent], dict[str, Any]]
        Function accepting one event and returning a result mapping with
        ``ok``, ``waited`` and, on failure, ``reason``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_telegram.domain import LogLevel
    >>> class FakeClock:
    ...     def __init__(self):
    ...         self.t = 10.0
    ...     def now(self):
    ...         return self.t
    ...     def sleep(self, seconds):
    ...         self.t += seconds
    >>> class FakeGate:
    ...     import threading
    ...     lock = threading.Lock()
    ...     last_emission = 9.0
    ...     def required_wait(self, now):
    ...         return 2.0
    ...     def record(self, now):
    ...         self.last_emission = now
    >>> class Upper:
    ...     def format(self, level, message, exc_info):
    ...         return message.upper()
    >>> class Outbox:
    ...     def __init__(self):
    ...         self.sent = []
    ...     def send(self, request):
    ...         self.sent.append(request.payload())
    ...     def close(self):
    ...         pass
    >>> outbox = Outbox()
    >>> emit = create_emit_log_event(bot_id='1:x', chat_id='42', formatter=Upper(), delivery=outbox, rate_gate=FakeGate(), clock=FakeClock())
    >>> emit(LogEvent(datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.INFO, 'hello'))
    {'ok': True, 'waited': 2.0}
    >>> outbox.sent
    [{'text': 'HELLO', 'chat_id': '42', 'parse_mode': 'markdown'}]
    """

    toolkit = _EmitToolkit(
        bot_id=bot_id,
        chat_id=chat_id,
        formatter=formatter,
        delivery=delivery,
        rate_gate=rate_gate,
        clock=clock,
        raise_on_failure=raise_on_failure,
        emit=_build_diagnostic_emitter(diagnostic),
    )
    return _EmitPipeline(toolkit)


@dataclass(frozen=True)
class _EmitToolkit:
    bot_id: str
    chat_id: str
    formatter: MessageFormatterPort
    delivery: DeliveryPort
    rate_gate: RateGatePort
    clock: ClockPort
    raise_on_failure: bool
    emit: Callable[[str, dict[str, Any]], None]


class _EmitPipeline:
    def __init__(self, toolkit: _EmitToolkit) -> None:
        self._toolkit = toolkit

    def __call__(self, event: LogEvent) -> EmitResult:
        waited = _pass_rate_gate(self._toolkit)
        try:
            text = _format_event(self._toolkit, event)
            _deliver(self._toolkit, text)
        except Exception as exc:
            if self._toolkit.raise_on_failure:
                raise
            return _report_failure(self._toolkit, event, exc, waited)
        self._toolkit.emit("delivered", {"chat_id": self._toolkit.chat_id, "level": event.level.name})
        return {"ok": True, "waited": waited}


def _pass_rate_gate(toolkit: _EmitToolkit) -> float:
    """Wait out the throttle and record the emission time; return seconds waited."""
    gate = toolkit.rate_gate
    with gate.lock:
        wait = gate.required_wait(toolkit.clock.now())
        if wait > 0:
            logger.debug("Throttling Telegram emission for %.3f seconds", wait)
            toolkit.emit("throttled", {"wait": wait})
            toolkit.clock.sleep(wait)
        gate.record(toolkit.clock.now())
    return wait


def _format_event(toolkit: _EmitToolkit, event: LogEvent) -> str:
    return toolkit.formatter.format(event.level, event.render_message(), event.exc_info)


def _deliver(toolkit: _EmitToolkit, text: str) -> None:
    toolkit.delivery.send(DeliveryRequest(bot_id=toolkit.bot_id, chat_id=toolkit.chat_id, text=text))


def _report_failure(toolkit: _EmitToolkit, event: LogEvent, exc: Exception, waited: float) -> EmitResult:
    logger.error("Dropping %s log event; Telegram delivery failed: %s", event.level.name, exc, exc_info=exc)
    toolkit.emit(
        "delivery_failed",
        {"chat_id": toolkit.chat_id, "level": event.level.name, "exception": repr(exc)},
    )
    return {"ok": False, "waited": waited, "reason": type(exc).__name__}


def _build_diagnostic_emitter(diagnostic: DiagnosticHook) -> Callable[[str, dict[str, Any]], None]:
    """Wrap ``diagnostic`` so a failing callback never breaks emission."""

    if diagnostic is None:

        def _noop(name: str, payload: dict[str, Any]) -> None:
            return None

        return _noop

    def _emit(name: str, payload: dict[str, Any]) -> None:
        try:
            diagnostic(name, payload)
        except Exception as exc:  # noqa: BLE001
            logger.error("Diagnostic hook raised while reporting %s", name, exc_info=exc)

    return _emit


__all__ = ["EmitResult", "create_emit_log_event"]
