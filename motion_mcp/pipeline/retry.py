"""
Retry Policy for API requests.

Decides, after a failed attempt, whether to try again and how long to wait.

Rules:
- At most `max_attempts` attempts in total (1 initial + retries)
- Non-retryable kinds (auth, not-found, client error) never retry
- Rate-limited: flat delay of 2x the base, independent of attempt number.
  The remote quota resets on a fixed clock, so waiting longer after each
  429 buys nothing.
- Server error / network: linear delay, base x attempt number, so
  sustained server trouble gets increasing spacing.

Example:
    policy = RetryPolicy(max_attempts=3, base_delay=5.0)

    decision = policy.decide(record, error)
    if decision.retry:
        await asyncio.sleep(decision.delay)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from motion_mcp.pipeline.errors import ErrorKind, IntegrationError

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 5.0


# =============================================================================
# Backoff Strategies
# =============================================================================


class BackoffStrategy(ABC):
    """Delay calculation between retry attempts."""

    @abstractmethod
    def get_delay(self, attempt: int) -> float:
        """
        Calculate delay before the next attempt.

        Args:
            attempt: Number of the attempt that just failed (1-indexed)

        Returns:
            Delay in seconds
        """
        ...


@dataclass(frozen=True)
class ConstantBackoff(BackoffStrategy):
    """
    Fixed delay between retries.

    Example:
        backoff = ConstantBackoff(delay=10.0)
        # Always waits 10 seconds
    """

    delay: float = 1.0

    def get_delay(self, attempt: int) -> float:
        return self.delay


@dataclass(frozen=True)
class LinearBackoff(BackoffStrategy):
    """
    Linearly increasing delay between retries.

    delay = initial + (attempt - 1) * increment

    Example:
        backoff = LinearBackoff(initial=5.0, increment=5.0)
        # Attempt 1: 5s, Attempt 2: 10s, Attempt 3: 15s, ...
    """

    initial: float = 1.0
    increment: float = 1.0
    max_delay: float = 300.0

    def get_delay(self, attempt: int) -> float:
        delay = self.initial + (attempt - 1) * self.increment
        return min(delay, self.max_delay)


# =============================================================================
# Attempt Record
# =============================================================================


@dataclass(frozen=True)
class AttemptRecord:
    """
    State of one request's retry loop.

    Transient: lives for a single request and is discarded once the
    request succeeds or gives up.
    """

    attempt_number: int = 1
    last_error_kind: ErrorKind | None = None
    last_error_message: str | None = None

    def after_failure(self, error: IntegrationError) -> AttemptRecord:
        """Record a failed attempt (attempt number unchanged)."""
        return AttemptRecord(
            attempt_number=self.attempt_number,
            last_error_kind=error.kind,
            last_error_message=error.message,
        )

    def next_attempt(self) -> AttemptRecord:
        """Advance to the next attempt, keeping the last error."""
        return AttemptRecord(
            attempt_number=self.attempt_number + 1,
            last_error_kind=self.last_error_kind,
            last_error_message=self.last_error_message,
        )


# =============================================================================
# Retry Policy
# =============================================================================


@dataclass(frozen=True)
class RetryDecision:
    """Outcome of consulting the retry policy."""

    retry: bool
    delay: float = 0.0

    @classmethod
    def give_up(cls) -> RetryDecision:
        return cls(retry=False)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Decides whether and when a failed request is attempted again.

    Stateless: the same record and error always give the same decision.

    Args:
        max_attempts: Total attempts allowed, including the first
        base_delay: Base delay in seconds
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    base_delay: float = DEFAULT_BASE_DELAY

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay < 0:
            raise ValueError(f"base_delay must be >= 0, got {self.base_delay}")

    @property
    def rate_limit_backoff(self) -> BackoffStrategy:
        return ConstantBackoff(delay=self.base_delay * 2)

    @property
    def server_backoff(self) -> BackoffStrategy:
        return LinearBackoff(initial=self.base_delay, increment=self.base_delay)

    def decide(self, record: AttemptRecord, error: IntegrationError) -> RetryDecision:
        """
        Decide what to do after a failed attempt.

        Args:
            record: Attempt record for the attempt that just failed
            error: Classified error from that attempt

        Returns:
            RetryDecision with retry flag and delay in seconds
        """
        if not error.retryable:
            return RetryDecision.give_up()

        if record.attempt_number >= self.max_attempts:
            return RetryDecision.give_up()

        return RetryDecision(retry=True, delay=self.get_delay(record.attempt_number, error.kind))

    def get_delay(self, attempt: int, kind: ErrorKind) -> float:
        """Delay before the attempt following `attempt`."""
        if kind is ErrorKind.RATE_LIMITED:
            return self.rate_limit_backoff.get_delay(attempt)
        return self.server_backoff.get_delay(attempt)


NO_RETRY = RetryPolicy(max_attempts=1)


__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "NO_RETRY",
    "AttemptRecord",
    "BackoffStrategy",
    "ConstantBackoff",
    "LinearBackoff",
    "RetryDecision",
    "RetryPolicy",
]
