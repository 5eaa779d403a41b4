"""Wait policies for the minimum-interval rate gate.

The Bot API accepts roughly 15 messages per minute per chat, hence the
default spacing of four seconds. How long a caller waits when it arrives
early is a policy decision kept here as pure arithmetic.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum

DEFAULT_MIN_INTERVAL = timedelta(minutes=1) / 15
"""Four seconds between messages."""


class WaitPolicy(Enum):
    """How long an early caller is suspended."""

    #: Wait twice the time elapsed since the last emission. This is the
    #: historical sink behaviour; a caller arriving just before the interval
    #: ends can still under-wait or over-wait relative to ``min_interval``.
    DOUBLE_ELAPSED = "double_elapsed"
    #: Wait exactly until ``min_interval`` has passed.
    REMAINING = "remaining"

    @classmethod
    def from_name(cls, name: str) -> "WaitPolicy":
        normalized = name.strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown wait policy: {name!r}") from exc


def compute_wait(elapsed: float, min_interval: float, policy: WaitPolicy) -> float:
    """Return the seconds to wait given ``elapsed`` seconds since the last send.

    Examples
    --------
    >>> compute_wait(1.0, 4.0, WaitPolicy.DOUBLE_ELAPSED)
    2.0
    >>> compute_wait(1.0, 4.0, WaitPolicy.REMAINING)
    3.0
    >>> compute_wait(4.0, 4.0, WaitPolicy.DOUBLE_ELAPSED)
    0.0
    """

    if elapsed >= min_interval:
        return 0.0
    if policy is WaitPolicy.REMAINING:
        return min_interval - elapsed
    return max(0.0, 2 * elapsed)


__all__ = ["DEFAULT_MIN_INTERVAL", "WaitPolicy", "compute_wait"]
