"""Port for the gate spacing outbound requests."""

from __future__ import annotations

from typing import ContextManager, Protocol, runtime_checkable


@runtime_checkable
class RateGatePort(Protocol):
    """Compute waits from the last recorded emission; never blocks itself."""

    @property
    def lock(self) -> ContextManager[object]:
        """Lock guarding the compute/sleep/record section."""

    @property
    def last_emission(self) -> float:
        """Monotonic timestamp of the last accepted emission."""

    def required_wait(self, now: float) -> float:
        """Return the seconds the caller must wait before sending at ``now``."""

    def record(self, now: float) -> None:
        """Remember ``now`` as the latest emission time."""


__all__ = ["RateGatePort"]
