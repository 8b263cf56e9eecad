"""
Error taxonomy and classification for API requests.

Every failed call ends up as exactly one IntegrationError subclass. The
kind is carried explicitly so callers branch on `error.kind` (or the
exception type) instead of parsing message text.

Classification (status-driven, first match wins):
    429            -> RateLimitError   (retryable)
    401            -> AuthenticationError
    404            -> NotFoundError
    other 4xx      -> ClientError
    5xx            -> ServerError      (retryable)
    no response    -> NetworkError     (retryable)
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx


class ErrorKind(str, Enum):
    """Why a call failed."""

    AUTH = "auth"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    NETWORK = "network"

    @property
    def retryable(self) -> bool:
        return self in _RETRYABLE_KINDS


_RETRYABLE_KINDS = frozenset(
    {ErrorKind.RATE_LIMITED, ErrorKind.SERVER_ERROR, ErrorKind.NETWORK}
)


# =============================================================================
# Transport Failure
# =============================================================================


class TransportFailure(Exception):
    """
    Raw failure from a single HTTP call.

    Carries the status code and parsed body when the server answered,
    or neither when no response was received (timeout, connection error).
    """

    def __init__(
        self,
        reason: str,
        *,
        status_code: int | None = None,
        body: Any = None,
    ):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
        self.body = body

    @property
    def has_response(self) -> bool:
        return self.status_code is not None

    def __repr__(self) -> str:
        return f"TransportFailure(status_code={self.status_code!r}, reason={self.reason!r})"


# =============================================================================
# Classified Errors
# =============================================================================


class IntegrationError(Exception):
    """Base exception for classified integration errors."""

    kind: ErrorKind = ErrorKind.SERVER_ERROR

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        status_code: int | None = None,
        response_body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.integration = integration
        self.status_code = status_code
        self.response_body = response_body

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    def to_dict(self) -> dict[str, Any]:
        """Structured form for tool results and HTTP responses."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "retryable": self.retryable,
        }

    def __str__(self) -> str:
        parts = [f"[{self.integration}] {self.message}"]
        if self.status_code:
            parts.append(f"(status={self.status_code})")
        return " ".join(parts)


class AuthenticationError(IntegrationError):
    """Raised when the API key is rejected (401)."""

    kind = ErrorKind.AUTH


class NotFoundError(IntegrationError):
    """Raised when a resource is not found (404)."""

    kind = ErrorKind.NOT_FOUND


class RateLimitError(IntegrationError):
    """Raised when the account quota is exhausted (429)."""

    kind = ErrorKind.RATE_LIMITED


class ClientError(IntegrationError):
    """Raised for any other 4xx response."""

    kind = ErrorKind.CLIENT_ERROR


class ServerError(IntegrationError):
    """Raised for 5xx responses."""

    kind = ErrorKind.SERVER_ERROR


class NetworkError(IntegrationError):
    """Raised when no response was received at all."""

    kind = ErrorKind.NETWORK


# =============================================================================
# Classifier
# =============================================================================


def upstream_message(failure: TransportFailure) -> str:
    """
    Pick the most useful human-readable message for a failure.

    Prefers the `message` field of a JSON error payload, then the HTTP
    reason phrase, then the transport's own reason.
    """
    body = failure.body
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, list):
            message = "; ".join(str(m) for m in message)
        if message:
            return str(message)

    if failure.status_code is not None:
        phrase = httpx.codes.get_reason_phrase(failure.status_code)
        if phrase:
            return phrase

    return failure.reason


def classify_failure(failure: TransportFailure, integration: str) -> IntegrationError:
    """
    Map a transport failure to a classified error.

    Pure: the same status and body always yield the same kind and message.
    """
    status = failure.status_code
    message = upstream_message(failure)
    kwargs: dict[str, Any] = {"status_code": status, "response_body": failure.body}

    if status is None:
        return NetworkError(f"Network error: {message}", integration, **kwargs)

    if status == 429:
        return RateLimitError(
            f"Rate limit exceeded. Please try again later. {message}", integration, **kwargs
        )

    if status == 401:
        return AuthenticationError(
            f"Authentication failed. Check your API key. {message}", integration, **kwargs
        )

    if status == 404:
        return NotFoundError(f"Resource not found. {message}", integration, **kwargs)

    if status >= 500:
        return ServerError(f"API error ({status}): {message}", integration, **kwargs)

    # Remaining 4xx, plus unexpected 3xx (redirects are not followed)
    return ClientError(f"API error ({status}): {message}", integration, **kwargs)


__all__ = [
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
    "upstream_message",
]
