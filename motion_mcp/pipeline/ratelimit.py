"""
Throughput Queue for outbound API calls.

Every outbound call to the remote API passes through a single lane:

- At most one unit of work runs at a time (concurrency = 1)
- Units are admitted in the order they were enqueued (FIFO)
- At most `cap` transport calls start within any rolling window

The window is tracked as a sliding log of admission timestamps, so the
(cap + 1)-th call waits until the oldest admission leaves the window.

The cap is derived from the account's nominal per-minute quota scaled by a
safety factor, leaving headroom for clock skew and other consumers of the
same quota:

    cap = floor(rate_limit_per_minute * safety_factor)   # min 1

Example:
    queue = ThroughputQueue.from_rate_limit(10)   # cap = 8 per 60s

    result = await queue.enqueue(lambda: transport.send("GET", "/tasks"))
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 60.0
DEFAULT_SAFETY_FACTOR = 0.8


def effective_cap(rate_limit_per_minute: int, safety_factor: float = DEFAULT_SAFETY_FACTOR) -> int:
    """
    Derive the per-window admission cap from a nominal quota.

    Args:
        rate_limit_per_minute: Nominal account quota
        safety_factor: Fraction of the quota the queue may use (0, 1]

    Returns:
        Cap of at least 1
    """
    if rate_limit_per_minute < 1:
        raise ValueError(f"rate_limit_per_minute must be >= 1, got {rate_limit_per_minute}")
    if not 0 < safety_factor <= 1:
        raise ValueError(f"safety_factor must be in (0, 1], got {safety_factor}")

    # round() absorbs float noise such as 0.7 * 10 = 7.000000000000001
    return max(1, math.floor(round(rate_limit_per_minute * safety_factor, 6)))


@dataclass
class ThroughputQueue:
    """
    Single-lane admission gate with a rolling-window cap.

    The lane is an asyncio.Lock, whose waiters are woken in arrival order,
    which gives FIFO admission. The admission log and the lane are the only
    mutable state and are touched only by the lane holder.

    Args:
        cap: Maximum transport calls started per window
        window_seconds: Rolling window length
        clock: Monotonic time source (injectable for tests)
    """

    cap: int
    window_seconds: float = DEFAULT_WINDOW_SECONDS
    clock: Callable[[], float] = time.monotonic

    _admissions: deque[float] = field(default_factory=deque, init=False, repr=False)
    _lane: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _waiting: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.cap < 1:
            raise ValueError(f"cap must be >= 1, got {self.cap}")
        if self.window_seconds <= 0:
            raise ValueError(f"window_seconds must be > 0, got {self.window_seconds}")

    @classmethod
    def from_rate_limit(
        cls,
        rate_limit_per_minute: int,
        *,
        safety_factor: float = DEFAULT_SAFETY_FACTOR,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
    ) -> ThroughputQueue:
        """Build a queue whose cap is the safety-scaled per-minute quota."""
        return cls(
            cap=effective_cap(rate_limit_per_minute, safety_factor),
            window_seconds=window_seconds,
        )

    # =========================================================================
    # Admission
    # =========================================================================

    async def enqueue(self, work: Callable[[], Awaitable[T]]) -> T:
        """
        Run a unit of work once it is admitted.

        The unit holds the lane for its whole run, including any retries it
        performs. Its result, or the exception it raises, is handed back to
        the caller unchanged.

        Args:
            work: Async callable to run when admitted

        Returns:
            Whatever `work` returns
        """
        self._waiting += 1
        try:
            await self._lane.acquire()
        finally:
            self._waiting -= 1

        try:
            await self.reserve()
            return await work()
        finally:
            self._lane.release()

    async def reserve(self) -> None:
        """
        Take one slot in the rolling window, waiting for the window to roll
        over if the cap is reached.

        Must only be called by the unit currently holding the lane.
        """
        while True:
            now = self.clock()
            self._evict_expired(now)

            if len(self._admissions) < self.cap:
                self._admissions.append(now)
                return

            wait_time = max(0.0, self._admissions[0] + self.window_seconds - now)
            logger.debug(
                f"Throughput cap reached ({self.cap}/{self.window_seconds}s), "
                f"waiting {wait_time:.2f}s"
            )
            await asyncio.sleep(wait_time)

    def _evict_expired(self, now: float) -> None:
        """Drop admissions that have left the window."""
        cutoff = now - self.window_seconds
        while self._admissions and self._admissions[0] <= cutoff:
            self._admissions.popleft()

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def in_flight(self) -> bool:
        """True while a unit of work holds the lane."""
        return self._lane.locked()

    @property
    def pending(self) -> int:
        """Units waiting for the lane."""
        return self._waiting

    def remaining(self) -> int:
        """Slots left in the current window."""
        self._evict_expired(self.clock())
        return self.cap - len(self._admissions)

    def time_until_available(self) -> float:
        """Seconds until a slot frees up (0 if one is free now)."""
        now = self.clock()
        self._evict_expired(now)
        if len(self._admissions) < self.cap:
            return 0.0
        return max(0.0, self._admissions[0] + self.window_seconds - now)

    def get_stats(self) -> dict[str, Any]:
        """Get queue statistics."""
        return {
            "cap": self.cap,
            "window_seconds": self.window_seconds,
            "remaining": self.remaining(),
            "in_flight": self.in_flight,
            "pending": self.pending,
        }


__all__ = [
    "DEFAULT_SAFETY_FACTOR",
    "DEFAULT_WINDOW_SECONDS",
    "ThroughputQueue",
    "effective_cap",
]
