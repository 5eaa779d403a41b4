"""Thread-based dispatcher for asynchronous Telegram emission.

Purpose
-------
Let logging call sites return immediately while a single worker thread runs
the throttled emit pipeline. One worker keeps events in arrival order, so the
spacing and monotonic-timestamp guarantees of the synchronous sink hold.

Contents
--------
* :class:`QueueAdapter` - background worker implementation of :class:`QueuePort`.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from typing import Any

from lib_log_telegram.application.ports.queue import QueuePort
from lib_log_telegram.domain.events import LogEvent

LOGGER = logging.getLogger(__name__)


class QueueAdapter(QueuePort):
    """Process log events on a background thread.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_telegram.domain.levels import LogLevel
    >>> processed = []
    >>> adapter = QueueAdapter(worker=lambda event: processed.append(event.message_template))
    >>> adapter.start()
    >>> adapter.put(LogEvent(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'msg'))
    True
    >>> adapter.stop(drain=True)
    >>> processed
    ['msg']
    """

    def __init__(
        self,
        *,
        worker: Callable[[LogEvent], Any],
        maxsize: int = 1024,
        drop_policy: str = "drop",
        timeout: float | None = 1.0,
        stop_timeout: float | None = 30.0,
        on_drop: Callable[[LogEvent], None] | None = None,
        diagnostic: Callable[[str, dict[str, Any]], None] | None = None,
    ) -> None:
        """Create the queue.

        Parameters
        ----------
        worker:
            Callable invoked for each event on the worker thread.
        maxsize:
            Maximum number of queued events before the drop policy applies.
        drop_policy:
            ``"drop"`` rejects new events when full; ``"block"`` makes the
            producer wait up to ``timeout`` seconds before dropping.
        stop_timeout:
            Default drain deadline used by :meth:`stop`. Throttle waits happen
            on the worker, so a long backlog needs a generous deadline.
        """
        policy = drop_policy.lower()
        if policy not in {"block", "drop"}:
            raise ValueError("drop_policy must be 'block' or 'drop'")
        self._worker = worker
        self._queue: queue.Queue[LogEvent | None] = queue.Queue(maxsize=maxsize)
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._discard_pending = False
        self._drop_policy = policy
        self._timeout = timeout
        self._stop_timeout = stop_timeout
        self._on_drop = on_drop
        self._diagnostic = diagnostic
        self._worker_failed = False

    @property
    def worker_failed(self) -> bool:
        """Return ``True`` once the worker has seen an exception."""
        return self._worker_failed

    def start(self) -> None:
        """Start the background worker thread if it is not already running."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._discard_pending = False
        self._thread = threading.Thread(target=self._run, name="lib-log-telegram-queue", daemon=True)
        self._thread.start()

    def stop(self, *, drain: bool = True, timeout: float | None = None) -> None:
        """Stop the worker, optionally delivering everything still queued.

        Raises :class:`RuntimeError` when the worker does not finish within the
        deadline; queued events are dropped in that case.
        """
        thread = self._thread
        if thread is None:
            return
        effective_timeout = timeout if timeout is not None else self._stop_timeout
        deadline = time.monotonic() + effective_timeout if effective_timeout is not None else None

        if not drain:
            self._discard_pending = True
        self._stop_event.set()
        self._queue.put(None)

        join_timeout = None if deadline is None else max(0.0, deadline - time.monotonic())
        thread.join(join_timeout)
        if thread.is_alive():
            self._discard_pending = True
            self._emit_diagnostic("queue_shutdown_timeout", {"timeout": effective_timeout})
            raise RuntimeError("Queue worker failed to stop within the allotted timeout")
        self._thread = None

    def put(self, event: LogEvent) -> bool:
        """Enqueue ``event``; return ``False`` when the drop policy discarded it."""
        try:
            if self._drop_policy == "drop":
                self._queue.put(event, block=False)
            else:
                self._queue.put(event, timeout=self._timeout)
        except queue.Full:
            self._handle_drop(event)
            return False
        return True

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until the queue is empty or ``timeout`` elapses."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while self._queue.unfinished_tasks:
            if deadline is not None and time.monotonic() >= deadline:
                return False
            time.sleep(0.01)
        return True

    def _run(self) -> None:
        """Internal worker loop draining the queue until stopped."""
        while True:
            item = self._queue.get()
            try:
                if item is None:
                    if self._stop_event.is_set():
                        break
                    continue
                if self._discard_pending:
                    self._handle_drop(item)
                    continue
                try:
                    self._worker(item)
                except Exception as exc:  # noqa: BLE001
                    self._worker_failed = True
                    LOGGER.error("Queue worker raised an exception; continuing", exc_info=exc)
                    self._emit_diagnostic("queue_worker_error", {"logger": item.logger_name, "exception": repr(exc)})
            finally:
                self._queue.task_done()
        self._drain_remaining()

    def _drain_remaining(self) -> None:
        """Drop anything enqueued after the stop signal."""
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            if item is not None:
                self._handle_drop(item)
            self._queue.task_done()

    def _handle_drop(self, event: LogEvent) -> None:
        """Report a dropped event through the callback and the diagnostic hook."""
        self._emit_diagnostic("queue_dropped", {"logger": event.logger_name, "level": event.level.name})
        if self._on_drop is None:
            return
        try:
            self._on_drop(event)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Queue drop handler raised an exception; continuing", exc_info=exc)

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Queue diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["QueueAdapter"]
