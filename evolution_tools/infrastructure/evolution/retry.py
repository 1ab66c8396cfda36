"""Retry policy for Evolution API calls.

Bounded retry with optional exponential backoff. Retryability is decided
from the classified RequestError only.
"""

from evolution_tools.infrastructure.evolution.errors import RequestError


class RetryPolicy:
    """
    Bounded retry strategy.

    Features:
    - At most ``retry_attempts`` retries (``retry_attempts + 1`` attempts)
    - Constant delay by default, exponential when ``backoff_factor > 1``
    - Delay capped at ``max_delay_ms``

    Example:
        policy = RetryPolicy(retry_attempts=3, retry_delay_ms=1000)

        outcome = await attempt()
        if outcome.error and policy.should_retry(attempt=1, error=outcome.error):
            await asyncio.sleep(policy.calculate_delay(1) / 1000)
            # retry...
    """

    # Default configuration
    RETRY_ATTEMPTS = 3
    RETRY_DELAY_MS = 1000
    BACKOFF_FACTOR = 1.0
    MAX_DELAY_MS = 30000

    def __init__(
        self,
        retry_attempts: int = RETRY_ATTEMPTS,
        retry_delay_ms: int = RETRY_DELAY_MS,
        backoff_factor: float = BACKOFF_FACTOR,
        max_delay_ms: int = MAX_DELAY_MS,
    ) -> None:
        """
        Initialize retry policy.

        Args:
            retry_attempts: Number of retries after the first attempt (default: 3)
            retry_delay_ms: Delay before the first retry (default: 1000ms)
            backoff_factor: Multiplier for each subsequent retry (default: 1.0)
            max_delay_ms: Upper bound for any single delay (default: 30000ms)
        """
        self.retry_attempts = retry_attempts
        self.retry_delay_ms = retry_delay_ms
        self.backoff_factor = backoff_factor
        self.max_delay_ms = max_delay_ms

    @property
    def max_attempts(self) -> int:
        return self.retry_attempts + 1

    def is_retryable(self, error: RequestError) -> bool:
        return error.retryable

    def calculate_delay(self, attempt: int) -> int:
        """
        Calculate retry delay in milliseconds.

        Args:
            attempt: The attempt that just failed (1-based)

        Returns:
            Delay in milliseconds before the next attempt
        """
        delay = self.retry_delay_ms * (self.backoff_factor ** (attempt - 1))
        return int(min(delay, self.max_delay_ms))

    def should_retry(self, attempt: int, error: RequestError) -> bool:
        """
        Determine if we should retry based on attempt count and error.

        Args:
            attempt: The attempt that just failed (1-based)
            error: The classified failure

        Returns:
            True if another attempt should be made
        """
        if attempt > self.retry_attempts:
            return False
        return self.is_retryable(error)

    def get_retry_message(self, attempt: int, delay_ms: int, error: RequestError) -> str:
        """Get a log line describing an upcoming retry."""
        return (
            f"Retry attempt {attempt}/{self.retry_attempts} after {delay_ms}ms delay. "
            f"Error: {error.kind.value}: {error.message}"
        )
