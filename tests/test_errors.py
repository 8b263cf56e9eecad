"""
Tests for error classification.
"""

import pytest

from motion_mcp.pipeline import (
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
from motion_mcp.pipeline.errors import upstream_message

# =============================================================================
# ErrorKind Tests
# =============================================================================


class TestErrorKind:
    """Tests for ErrorKind."""

    @pytest.mark.parametrize(
        "kind",
        [ErrorKind.RATE_LIMITED, ErrorKind.SERVER_ERROR, ErrorKind.NETWORK],
    )
    def test_retryable_kinds(self, kind):
        assert kind.retryable is True

    @pytest.mark.parametrize(
        "kind",
        [ErrorKind.AUTH, ErrorKind.NOT_FOUND, ErrorKind.CLIENT_ERROR],
    )
    def test_non_retryable_kinds(self, kind):
        assert kind.retryable is False

    def test_kind_values_are_strings(self):
        assert ErrorKind.NOT_FOUND.value == "not_found"
        assert ErrorKind.RATE_LIMITED == "rate_limited"


# =============================================================================
# Classification Tests
# =============================================================================


class TestClassifyFailure:
    """Tests for classify_failure."""

    def test_rate_limited(self):
        failure = TransportFailure(
            "Too Many Requests", status_code=429, body={"message": "slow down"}
        )

        error = classify_failure(failure, "motion")

        assert isinstance(error, RateLimitError)
        assert error.kind is ErrorKind.RATE_LIMITED
        assert error.retryable is True
        assert "slow down" in error.message
        assert error.message.startswith("Rate limit exceeded. Please try again later.")

    def test_auth(self):
        failure = TransportFailure("Unauthorized", status_code=401, body={"message": "bad key"})

        error = classify_failure(failure, "motion")

        assert isinstance(error, AuthenticationError)
        assert error.retryable is False
        assert error.message == "Authentication failed. Check your API key. bad key"

    def test_not_found(self):
        failure = TransportFailure("Not Found", status_code=404, body={"message": "no task"})

        error = classify_failure(failure, "motion")

        assert isinstance(error, NotFoundError)
        assert error.kind is ErrorKind.NOT_FOUND
        assert error.message == "Resource not found. no task"
        assert error.status_code == 404

    @pytest.mark.parametrize("status", [400, 403, 409, 422])
    def test_other_4xx_is_client_error(self, status):
        failure = TransportFailure("Bad", status_code=status, body={"message": "invalid"})

        error = classify_failure(failure, "motion")

        assert isinstance(error, ClientError)
        assert error.retryable is False
        assert error.message == f"API error ({status}): invalid"

    @pytest.mark.parametrize("status", [500, 502, 503, 504])
    def test_5xx_is_server_error(self, status):
        failure = TransportFailure("Server Error", status_code=status)

        error = classify_failure(failure, "motion")

        assert isinstance(error, ServerError)
        assert error.retryable is True
        assert error.message.startswith(f"API error ({status}): ")

    def test_redirect_is_client_error(self):
        failure = TransportFailure("Found", status_code=302)

        error = classify_failure(failure, "motion")

        assert isinstance(error, ClientError)
        assert error.retryable is False

    def test_no_response_is_network(self):
        failure = TransportFailure("Request timeout after 30.0s: ReadTimeout")

        error = classify_failure(failure, "motion")

        assert isinstance(error, NetworkError)
        assert error.retryable is True
        assert error.status_code is None
        assert "Request timeout" in error.message

    def test_classification_is_deterministic(self):
        failure = TransportFailure("x", status_code=429, body={"message": "slow down"})

        first = classify_failure(failure, "motion")
        second = classify_failure(failure, "motion")

        assert type(first) is type(second)
        assert first.kind == second.kind
        assert first.retryable == second.retryable
        assert first.message == second.message

    def test_keeps_response_body(self):
        body = {"message": "bad", "code": "E_BAD"}
        failure = TransportFailure("Bad Request", status_code=400, body=body)

        error = classify_failure(failure, "motion")

        assert error.response_body == body


# =============================================================================
# Upstream Message Tests
# =============================================================================


class TestUpstreamMessage:
    """Tests for upstream_message."""

    def test_prefers_payload_message(self):
        failure = TransportFailure("Bad Request", status_code=400, body={"message": "name missing"})
        assert upstream_message(failure) == "name missing"

    def test_joins_list_messages(self):
        failure = TransportFailure(
            "Bad Request",
            status_code=400,
            body={"message": ["name missing", "workspaceId missing"]},
        )
        assert upstream_message(failure) == "name missing; workspaceId missing"

    def test_falls_back_to_reason_phrase(self):
        failure = TransportFailure("ignored", status_code=503, body="<html>oops</html>")
        assert upstream_message(failure) == "Service Unavailable"

    def test_falls_back_to_transport_reason(self):
        failure = TransportFailure("ConnectError: connection refused")
        assert upstream_message(failure) == "ConnectError: connection refused"


# =============================================================================
# IntegrationError Tests
# =============================================================================


class TestIntegrationError:
    """Tests for IntegrationError."""

    def test_to_dict(self):
        error = NotFoundError("Resource not found. gone", "motion", status_code=404)

        assert error.to_dict() == {
            "kind": "not_found",
            "message": "Resource not found. gone",
            "status_code": 404,
            "retryable": False,
        }

    def test_str_includes_integration_and_status(self):
        error = ServerError("API error (500): boom", "motion", status_code=500)

        assert str(error) == "[motion] API error (500): boom (status=500)"

    def test_subclasses_share_base(self):
        for error_class in (
            AuthenticationError,
            NotFoundError,
            RateLimitError,
            ClientError,
            ServerError,
            NetworkError,
        ):
            assert issubclass(error_class, IntegrationError)
