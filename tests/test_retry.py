"""
Tests for the retry policy.
"""

import pytest

from motion_mcp.pipeline import (
    NO_RETRY,
    AttemptRecord,
    ConstantBackoff,
    ErrorKind,
    LinearBackoff,
    RetryPolicy,
)
from motion_mcp.pipeline.errors import (
    AuthenticationError,
    ClientError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
)


def record_for(attempt: int, error) -> AttemptRecord:
    return AttemptRecord(attempt_number=attempt).after_failure(error)


# =============================================================================
# Backoff Strategy Tests
# =============================================================================


class TestConstantBackoff:
    """Tests for ConstantBackoff."""

    def test_constant_delay(self):
        backoff = ConstantBackoff(delay=5.0)

        assert backoff.get_delay(1) == 5.0
        assert backoff.get_delay(2) == 5.0
        assert backoff.get_delay(10) == 5.0


class TestLinearBackoff:
    """Tests for LinearBackoff."""

    def test_linear_increase(self):
        backoff = LinearBackoff(initial=1.0, increment=2.0)

        assert backoff.get_delay(1) == 1.0
        assert backoff.get_delay(2) == 3.0
        assert backoff.get_delay(3) == 5.0

    def test_max_delay_cap(self):
        backoff = LinearBackoff(initial=10.0, increment=10.0, max_delay=25.0)

        assert backoff.get_delay(3) == 25.0


# =============================================================================
# AttemptRecord Tests
# =============================================================================


class TestAttemptRecord:
    """Tests for AttemptRecord."""

    def test_after_failure_keeps_attempt_number(self):
        error = ServerError("API error (500): boom", "motion", status_code=500)

        record = AttemptRecord().after_failure(error)

        assert record.attempt_number == 1
        assert record.last_error_kind is ErrorKind.SERVER_ERROR
        assert record.last_error_message == "API error (500): boom"

    def test_next_attempt_keeps_last_error(self):
        error = RateLimitError("Rate limit exceeded.", "motion", status_code=429)

        record = AttemptRecord().after_failure(error).next_attempt()

        assert record.attempt_number == 2
        assert record.last_error_kind is ErrorKind.RATE_LIMITED


# =============================================================================
# RetryPolicy Tests
# =============================================================================


class TestRetryPolicy:
    """Tests for RetryPolicy."""

    def test_defaults(self):
        policy = RetryPolicy()

        assert policy.max_attempts == 3
        assert policy.base_delay == 5.0

    def test_rate_limit_delay_is_flat(self):
        policy = RetryPolicy(base_delay=5.0)
        error = RateLimitError("Rate limit exceeded.", "motion", status_code=429)

        first = policy.decide(record_for(1, error), error)
        second = policy.decide(record_for(2, error), error)

        assert first.retry is True
        assert first.delay == 10.0
        assert second.delay == 10.0

    @pytest.mark.parametrize(
        "error",
        [
            ServerError("API error (500): boom", "motion", status_code=500),
            NetworkError("Network error: timeout", "motion"),
        ],
    )
    def test_server_and_network_delay_is_linear(self, error):
        policy = RetryPolicy(base_delay=5.0)

        first = policy.decide(record_for(1, error), error)
        second = policy.decide(record_for(2, error), error)

        assert first.delay == 5.0
        assert second.delay == 10.0

    def test_gives_up_at_attempt_ceiling(self):
        policy = RetryPolicy(max_attempts=3)
        error = ServerError("API error (503): down", "motion", status_code=503)

        decision = policy.decide(record_for(3, error), error)

        assert decision.retry is False

    @pytest.mark.parametrize(
        "error",
        [
            AuthenticationError("Authentication failed.", "motion", status_code=401),
            NotFoundError("Resource not found.", "motion", status_code=404),
            ClientError("API error (400): bad", "motion", status_code=400),
        ],
    )
    def test_never_retries_non_retryable(self, error):
        policy = RetryPolicy()

        decision = policy.decide(record_for(1, error), error)

        assert decision.retry is False

    def test_decision_is_stateless(self):
        policy = RetryPolicy()
        error = ServerError("API error (500): boom", "motion", status_code=500)
        record = record_for(1, error)

        assert policy.decide(record, error) == policy.decide(record, error)

    def test_get_delay_by_kind(self):
        policy = RetryPolicy(base_delay=2.0)

        assert policy.get_delay(1, ErrorKind.RATE_LIMITED) == 4.0
        assert policy.get_delay(3, ErrorKind.SERVER_ERROR) == 6.0

    def test_no_retry_policy(self):
        error = ServerError("API error (500): boom", "motion", status_code=500)

        assert NO_RETRY.decide(record_for(1, error), error).retry is False

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_attempts": 0}, {"base_delay": -1.0}],
    )
    def test_rejects_invalid_settings(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)
