"""
Base classes for motion-mcp integrations.

This module wires the request pipeline into an async API client:

1. HttpTransport: one httpx call per attempt, no retries, no classification
2. IntegrationClient: `request()` - the single choke point every resource
   method goes through

Request Flow:
    resource method
        -> request(method, path, body, query)
        -> ThroughputQueue.enqueue(...)        # single lane, rolling cap
        -> RequestExecution.run()              # attempt / classify / retry
        -> HttpTransport.send(...)

Retry Strategy:
    - Retryable errors: timeouts, network errors, 429, 5xx
    - Non-retryable: other 4xx, auth errors
    - Backoff: flat 2x base for 429, linear base x attempt otherwise
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from motion_mcp.pipeline.errors import TransportFailure
from motion_mcp.pipeline.ratelimit import (
    DEFAULT_SAFETY_FACTOR,
    DEFAULT_WINDOW_SECONDS,
    ThroughputQueue,
)
from motion_mcp.pipeline.request import RequestExecution, RequestUnit, Transport
from motion_mcp.pipeline.retry import DEFAULT_BASE_DELAY, DEFAULT_MAX_ATTEMPTS, RetryPolicy

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class IntegrationConfig:
    """Configuration for an integration client."""

    # Authentication
    api_key: str = ""

    # Connection
    base_url: str = ""
    timeout: float = 30.0

    # Throughput
    rate_limit_per_minute: int = 12
    rate_limit_safety_factor: float = DEFAULT_SAFETY_FACTOR
    window_seconds: float = DEFAULT_WINDOW_SECONDS

    # Retries
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_delay: float = DEFAULT_BASE_DELAY

    # Observability
    log_requests: bool = False
    log_responses: bool = False


# =============================================================================
# Transport
# =============================================================================


def _clean_params(query: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Drop unset query parameters."""
    if not query:
        return None
    params = {key: value for key, value in query.items() if value is not None}
    return params or None


def _parse_body(response: httpx.Response) -> Any:
    """Parse a response body as JSON, falling back to text. Empty -> None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpTransport:
    """
    Performs exactly one HTTP call per `send`.

    Returns the parsed JSON body for any 2xx response. Anything else raises
    TransportFailure: with the status code and body when the server
    answered, without them when no response arrived (timeout, DNS,
    connection reset).
    """

    def __init__(
        self,
        *,
        base_url: str,
        headers: Mapping[str, str],
        timeout: float = 30.0,
        integration: str = "integration",
        log_requests: bool = False,
        log_responses: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: Fixed API base URL
            headers: Headers sent with every request (auth, content type)
            timeout: Per-call timeout in seconds
            integration: Name used in log lines
            log_requests: Log outgoing requests at DEBUG
            log_responses: Log responses at DEBUG
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self._base_url = base_url
        self._headers = dict(headers)
        self._timeout = timeout
        self._integration = integration
        self._log_requests = log_requests
        self._log_responses = log_responses
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        client = await self._get_client()
        params = _clean_params(query)

        if self._log_requests:
            logger.debug(f"[{self._integration}] {method} {path} params={params} body={body}")

        try:
            response = await client.request(method=method, url=path, params=params, json=body)
        except httpx.TimeoutException as e:
            raise TransportFailure(
                f"Request timeout after {self._timeout}s: {e or type(e).__name__}"
            ) from e
        except httpx.TransportError as e:
            raise TransportFailure(f"{type(e).__name__}: {e}") from e

        if self._log_responses:
            logger.debug(
                f"[{self._integration}] Response: status={response.status_code} "
                f"body={response.text[:500] if response.text else 'empty'}"
            )

        payload = _parse_body(response)
        if not response.is_success:
            raise TransportFailure(
                response.reason_phrase or f"HTTP {response.status_code}",
                status_code=response.status_code,
                body=payload,
            )
        return payload


# =============================================================================
# Base Client
# =============================================================================


class IntegrationClient(ABC):
    """
    Abstract base class for integration clients.

    Provides the request pipeline shared by every resource method:
    - Throughput queue (one call at a time, capped per rolling window)
    - Retry with kind-specific backoff
    - Error classification into IntegrationError subtypes

    Subclasses must implement:
    - name: Integration identifier
    - _get_auth_headers(): Return authentication headers
    """

    def __init__(
        self,
        config: IntegrationConfig,
        *,
        transport: Transport | None = None,
        queue: ThroughputQueue | None = None,
        retry_policy: RetryPolicy | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the integration client.

        Args:
            config: Integration configuration
            transport: Replaces the HTTP transport entirely
            queue: Replaces the throughput queue derived from config
            retry_policy: Replaces the retry policy derived from config
            http_transport: httpx transport for the default HttpTransport
        """
        self.config = config
        self._queue = queue or ThroughputQueue.from_rate_limit(
            config.rate_limit_per_minute,
            safety_factor=config.rate_limit_safety_factor,
            window_seconds=config.window_seconds,
        )
        self._retry_policy = retry_policy or RetryPolicy(
            max_attempts=config.max_attempts,
            base_delay=config.retry_delay,
        )
        self._transport: Transport = transport or HttpTransport(
            base_url=config.base_url,
            timeout=config.timeout,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                **self._get_auth_headers(),
            },
            integration=self.name,
            log_requests=config.log_requests,
            log_responses=config.log_responses,
            transport=http_transport,
        )

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this integration."""
        ...

    @abstractmethod
    def _get_auth_headers(self) -> dict[str, str]:
        """Return authentication headers for requests."""
        ...

    @property
    def queue(self) -> ThroughputQueue:
        return self._queue

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
    ) -> Any:
        """
        Issue one logical API call through the pipeline.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: URL path (appended to base_url)
            body: JSON body
            query: Query parameters (None values are dropped)
            retry_policy: Override the client's policy for this call only

        Returns:
            Parsed JSON response body (None for empty responses)

        Raises:
            IntegrationError: The final classified error
        """
        unit = RequestUnit(method=method, path=path, body=body, query=query)
        execution = RequestExecution(
            unit,
            transport=self._transport,
            policy=retry_policy or self._retry_policy,
            integration=self.name,
            reserve=self._queue.reserve,
        )
        return await self._queue.enqueue(execution.run)

    async def close(self) -> None:
        """Close the underlying transport."""
        close = getattr(self._transport, "close", None)
        if close is not None:
            await close()

    async def health_check(self) -> bool:
        """
        Check if the integration is healthy/reachable.

        Returns:
            True if healthy, False otherwise
        """
        return True

    async def __aenter__(self) -> IntegrationClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


__all__ = [
    "HttpTransport",
    "IntegrationClient",
    "IntegrationConfig",
]
