"""
Request orchestration.

A RequestUnit is one logical API call. A RequestExecution drives it
through an explicit state machine:

    QUEUED -> ADMITTED -> ATTEMPTING -> SUCCEEDED
                              |   ^
                              v   |
                            RETRYING
                              |
                              v
                            FAILED

On each failed attempt the transport failure is classified and the retry
policy consulted. Retries stay internal: the caller sees either the parsed
result or the last classified error, never the intermediate ones.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from motion_mcp.pipeline.errors import IntegrationError, TransportFailure, classify_failure
from motion_mcp.pipeline.retry import AttemptRecord, RetryPolicy

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Performs exactly one HTTP call."""

    async def send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """Return the parsed body, or raise TransportFailure."""
        ...


class RequestState(Enum):
    """Lifecycle states of a request."""

    QUEUED = "queued"
    ADMITTED = "admitted"
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestState.SUCCEEDED, RequestState.FAILED)


_ALLOWED_TRANSITIONS: dict[RequestState, frozenset[RequestState]] = {
    RequestState.QUEUED: frozenset({RequestState.ADMITTED}),
    RequestState.ADMITTED: frozenset({RequestState.ATTEMPTING}),
    RequestState.ATTEMPTING: frozenset(
        {RequestState.SUCCEEDED, RequestState.RETRYING, RequestState.FAILED}
    ),
    RequestState.RETRYING: frozenset({RequestState.ATTEMPTING}),
    RequestState.SUCCEEDED: frozenset(),
    RequestState.FAILED: frozenset(),
}


@dataclass(frozen=True)
class RequestUnit:
    """One logical API call. Immutable once built."""

    method: str
    path: str
    body: Any = None
    query: Mapping[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.method} {self.path}"


class RequestExecution:
    """
    Runs one RequestUnit to a single terminal outcome.

    Attempt count, recorded delays and the state history are exposed so
    each can be checked on its own.

    Args:
        unit: The request to run
        transport: Performs each HTTP attempt
        policy: Decides retries and delays
        integration: Integration name used in error messages
        reserve: Awaited before every retry attempt to take a throughput
            slot; the first attempt's slot is taken on admission
        sleep: Coroutine used to wait out retry delays
    """

    def __init__(
        self,
        unit: RequestUnit,
        *,
        transport: Transport,
        policy: RetryPolicy,
        integration: str,
        reserve: Callable[[], Awaitable[None]] | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.unit = unit
        self._transport = transport
        self._policy = policy
        self._integration = integration
        self._reserve = reserve
        self._sleep = sleep

        self.state = RequestState.QUEUED
        self.history: list[RequestState] = [RequestState.QUEUED]
        self.record = AttemptRecord()
        self.attempts = 0
        self.delays: list[float] = []
        self.result: Any = None
        self.error: IntegrationError | None = None

    def _transition(self, state: RequestState) -> None:
        if state not in _ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Invalid request transition {self.state.value} -> {state.value} for {self.unit}"
            )
        self.state = state
        self.history.append(state)

    async def run(self) -> Any:
        """
        Execute the request with retries.

        Returns:
            Parsed response body

        Raises:
            IntegrationError: The last classified error once retries are
                exhausted or the error is not retryable
        """
        self._transition(RequestState.ADMITTED)

        while True:
            self._transition(RequestState.ATTEMPTING)
            self.attempts += 1

            try:
                result = await self._transport.send(
                    self.unit.method,
                    self.unit.path,
                    body=self.unit.body,
                    query=self.unit.query,
                )
            except TransportFailure as failure:
                error = classify_failure(failure, self._integration)
                self.record = self.record.after_failure(error)
                decision = self._policy.decide(self.record, error)

                if not decision.retry:
                    self.error = error
                    self._transition(RequestState.FAILED)
                    if error.retryable:
                        logger.warning(
                            f"[{self._integration}] Giving up on {self.unit} after "
                            f"{self.attempts} attempts: {error.message}"
                        )
                    raise error from failure

                self._transition(RequestState.RETRYING)
                self.delays.append(decision.delay)
                logger.info(
                    f"[{self._integration}] Retry {self.attempts}/{self._policy.max_attempts - 1} "
                    f"for {self.unit} after {decision.delay:.2f}s ({error.kind.value})"
                )
                await self._sleep(decision.delay)
                if self._reserve is not None:
                    await self._reserve()
                self.record = self.record.next_attempt()
                continue

            self.result = result
            self._transition(RequestState.SUCCEEDED)
            return result


__all__ = [
    "RequestExecution",
    "RequestState",
    "RequestUnit",
    "Transport",
]
