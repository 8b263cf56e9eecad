"""
motion-mcp Request Pipeline

The single choke point every outbound API call passes through.

Core Components:
- ThroughputQueue: Single-lane, rolling-window admission gate
- RetryPolicy: Flat backoff for 429, linear backoff for server/network errors
- classify_failure: Maps transport failures to typed IntegrationErrors
- RequestExecution: Explicit per-request state machine tying it together

Flow:
    RequestUnit -> ThroughputQueue.enqueue -> RequestExecution.run
        -> Transport.send -> (classify -> RetryPolicy.decide -> retry | raise)
"""

from .errors import (
    AuthenticationError,
    ClientError,
    ErrorKind,
    IntegrationError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportFailure,
    classify_failure,
)
from .ratelimit import (
    DEFAULT_SAFETY_FACTOR,
    DEFAULT_WINDOW_SECONDS,
    ThroughputQueue,
    effective_cap,
)
from .request import RequestExecution, RequestState, RequestUnit, Transport
from .retry import (
    NO_RETRY,
    AttemptRecord,
    BackoffStrategy,
    ConstantBackoff,
    LinearBackoff,
    RetryDecision,
    RetryPolicy,
)

__all__ = [
    # Errors
    "AuthenticationError",
    "ClientError",
    "ErrorKind",
    "IntegrationError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TransportFailure",
    "classify_failure",
    # Throughput
    "DEFAULT_SAFETY_FACTOR",
    "DEFAULT_WINDOW_SECONDS",
    "ThroughputQueue",
    "effective_cap",
    # Retry
    "NO_RETRY",
    "AttemptRecord",
    "BackoffStrategy",
    "ConstantBackoff",
    "LinearBackoff",
    "RetryDecision",
    "RetryPolicy",
    # Orchestration
    "RequestExecution",
    "RequestState",
    "RequestUnit",
    "Transport",
]
