"""Minimum-interval rate gate for outbound chat messages.

Tracks the monotonic time of the last accepted emission and computes how long
the next caller has to wait, following the configured :class:`WaitPolicy`.
"""

from __future__ import annotations

import threading
from datetime import timedelta

from lib_log_telegram.application.ports.rate_limiter import RateGatePort
from lib_log_telegram.domain.throttle import DEFAULT_MIN_INTERVAL, WaitPolicy, compute_wait


class MinIntervalRateGate(RateGatePort):
    """Space emissions at least ``min_interval`` apart (policy permitting).

    The gate only computes; callers hold :attr:`lock` across
    ``required_wait`` / sleep / ``record`` so concurrent emitters take turns
    instead of racing on :attr:`last_emission`.

    Taking turns is not the same as spacing. Under
    :attr:`WaitPolicy.DOUBLE_ELAPSED` a caller arriving right after the
    previous emission sees ``elapsed`` close to zero and waits about zero
    seconds, so a burst can exceed the quota. Only
    :attr:`WaitPolicy.REMAINING` keeps every emission ``min_interval`` apart.

    Examples
    --------
    >>> gate = MinIntervalRateGate(start=100.0)
    >>> gate.required_wait(101.0)
    2.0
    >>> gate.record(103.0)
    >>> gate.required_wait(107.5)
    0.0
    """

    def __init__(
        self,
        *,
        min_interval: timedelta = DEFAULT_MIN_INTERVAL,
        policy: WaitPolicy = WaitPolicy.DOUBLE_ELAPSED,
        start: float = 0.0,
    ) -> None:
        if min_interval < timedelta(0):
            raise ValueError("min_interval must not be negative")
        self._min_interval = min_interval.total_seconds()
        self._policy = policy
        self._last_emission = start
        self._lock = threading.Lock()

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def policy(self) -> WaitPolicy:
        return self._policy

    @property
    def last_emission(self) -> float:
        return self._last_emission

    def required_wait(self, now: float) -> float:
        """Return the seconds to wait before an emission at ``now``."""
        elapsed = max(0.0, now - self._last_emission)
        return compute_wait(elapsed, self._min_interval, self._policy)

    def record(self, now: float) -> None:
        """Store ``now`` unless an earlier call already recorded a later time."""
        if now > self._last_emission:
            self._last_emission = now


__all__ = ["MinIntervalRateGate"]
