from __future__ import annotations

import threading

from lib_log_telegram.application.ports import ClockPort, DeliveryPort, MessageFormatterPort, QueuePort, RateGatePort
from lib_log_telegram.domain.delivery import DeliveryRequest
from lib_log_telegram.domain.events import LogEvent
from lib_log_telegram.domain.levels import LogLevel
from tests.fakes import FakeClock, RecordingDelivery


class _Formatter:
    def format(self, level: LogLevel, message: str, exc_info: str | None) -> str:
        return message


class _Gate:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = 0.0

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    @property
    def last_emission(self) -> float:
        return self._last

    def required_wait(self, now: float) -> float:
        return 0.0

    def record(self, now: float) -> None:
        self._last = now


class _Queue:
    def start(self) -> None:
        pass

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        pass

    def put(self, event: LogEvent) -> bool:
        return True


def test_fakes_satisfy_runtime_checkable_ports() -> None:
    assert isinstance(_Formatter(), MessageFormatterPort)
    assert isinstance(RecordingDelivery(), DeliveryPort)
    assert isinstance(_Gate(), RateGatePort)
    assert isinstance(FakeClock(), ClockPort)
    assert isinstance(_Queue(), QueuePort)


def test_objects_missing_methods_do_not_satisfy_ports() -> None:
    class NoSend:
        def close(self) -> None:
            pass

    assert not isinstance(NoSend(), DeliveryPort)
    assert not isinstance(object(), MessageFormatterPort)


def test_recording_delivery_captures_requests() -> None:
    delivery = RecordingDelivery()
    delivery.send(DeliveryRequest(bot_id="1", chat_id="2", text="t"))
    assert delivery.requests[0].text == "t"
