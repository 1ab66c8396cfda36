"""Tests for RetryPolicy."""

from evolution_tools.infrastructure.evolution.errors import RequestError, RequestErrorKind
from evolution_tools.infrastructure.evolution.retry import RetryPolicy

NETWORK = RequestError(RequestErrorKind.NETWORK, "reset")
AUTH = RequestError(RequestErrorKind.AUTHENTICATION, "nope", status_code=401)


class TestRetryPolicy:
    """Tests for RetryPolicy."""

    def test_defaults(self) -> None:
        """Should default to 3 retries with a constant 1s delay."""
        policy = RetryPolicy()

        assert policy.max_attempts == 4
        assert policy.calculate_delay(1) == 1000
        assert policy.calculate_delay(3) == 1000

    def test_exponential_backoff_is_capped(self) -> None:
        """Should grow by the backoff factor up to the cap."""
        policy = RetryPolicy(retry_delay_ms=1000, backoff_factor=2, max_delay_ms=3000)

        assert [policy.calculate_delay(n) for n in (1, 2, 3, 4)] == [1000, 2000, 3000, 3000]

    def test_should_retry_until_attempts_exhausted(self) -> None:
        """Should allow retry_attempts retries and no more."""
        policy = RetryPolicy(retry_attempts=2)

        assert policy.should_retry(1, NETWORK) is True
        assert policy.should_retry(2, NETWORK) is True
        assert policy.should_retry(3, NETWORK) is False

    def test_zero_attempts_never_retries(self) -> None:
        """Should make a single attempt when retries are disabled."""
        assert RetryPolicy(retry_attempts=0).should_retry(1, NETWORK) is False

    def test_non_retryable_error(self) -> None:
        """Should not retry terminal errors."""
        assert RetryPolicy().should_retry(1, AUTH) is False

    def test_retry_message(self) -> None:
        """Should describe the attempt, delay and error."""
        message = RetryPolicy(retry_attempts=3).get_retry_message(1, 1000, NETWORK)

        assert message == "Retry attempt 1/3 after 1000ms delay. Error: network: reset"
