from __future__ import annotations

import threading
from collections.abc import Callable

import pytest

from lib_log_telegram.adapters.queue import QueueAdapter
from lib_log_telegram.application.ports.queue import QueuePort
from lib_log_telegram.domain.events import LogEvent
from tests.fakes import make_event

Worker = Callable[[LogEvent], None]


def start_queue(worker: Worker, **kwargs: object) -> QueueAdapter:
    adapter = QueueAdapter(worker=worker, **kwargs)  # type: ignore[arg-type]
    adapter.start()
    return adapter


def test_adapter_satisfies_port() -> None:
    assert isinstance(QueueAdapter(worker=lambda event: None), QueuePort)


def test_queue_processes_events_in_order() -> None:
    processed: list[str] = []
    adapter = start_queue(lambda event: processed.append(event.message_template))
    for index in range(5):
        assert adapter.put(make_event(f"message-{index}")) is True
    adapter.stop()
    assert processed == [f"message-{index}" for index in range(5)]


def test_worker_exceptions_are_reported_and_processing_continues() -> None:
    processed: list[str] = []
    diagnostics: list[tuple[str, dict]] = []

    def worker(event: LogEvent) -> None:
        if event.message_template == "bad":
            raise RuntimeError("boom")
        processed.append(event.message_template)

    adapter = start_queue(worker, diagnostic=lambda name, payload: diagnostics.append((name, payload)))
    adapter.put(make_event("bad"))
    adapter.put(make_event("good"))
    adapter.stop()

    assert processed == ["good"]
    assert adapter.worker_failed is True
    assert diagnostics[0][0] == "queue_worker_error"


def test_full_queue_drops_and_invokes_callback() -> None:
    release = threading.Event()
    started = threading.Event()
    dropped: list[str] = []

    def worker(event: LogEvent) -> None:
        started.set()
        release.wait(5)

    adapter = start_queue(worker, maxsize=1, on_drop=lambda event: dropped.append(event.message_template))
    adapter.put(make_event("first"))
    started.wait(5)
    assert adapter.put(make_event("second")) is True
    assert adapter.put(make_event("third")) is False
    release.set()
    adapter.stop()
    assert dropped == ["third"]


def test_stop_without_drain_drops_pending_events() -> None:
    release = threading.Event()
    started = threading.Event()
    processed: list[str] = []
    dropped: list[str] = []

    def worker(event: LogEvent) -> None:
        started.set()
        release.wait(5)
        processed.append(event.message_template)

    adapter = start_queue(worker, on_drop=lambda event: dropped.append(event.message_template))
    adapter.put(make_event("first"))
    started.wait(5)
    adapter.put(make_event("second"))
    threading.Timer(0.1, release.set).start()
    adapter.stop(drain=False)
    assert processed == ["first"]
    assert dropped == ["second"]


def test_stop_timeout_raises_when_worker_hangs() -> None:
    release = threading.Event()
    started = threading.Event()

    def worker(event: LogEvent) -> None:
        started.set()
        release.wait(5)

    adapter = start_queue(worker)
    adapter.put(make_event("stuck"))
    started.wait(5)
    with pytest.raises(RuntimeError, match="failed to stop"):
        adapter.stop(timeout=0.05)
    release.set()


def test_wait_until_idle_reports_drain() -> None:
    processed: list[str] = []
    adapter = start_queue(lambda event: processed.append(event.message_template))
    adapter.put(make_event("a"))
    assert adapter.wait_until_idle(timeout=5) is True
    assert processed == ["a"]
    adapter.stop()


def test_invalid_drop_policy_is_rejected() -> None:
    with pytest.raises(ValueError, match="drop_policy"):
        QueueAdapter(worker=lambda event: None, drop_policy="explode")
