"""Retry logic with exponential backoff for Lokalise API rate limits.

This module provides the RetryExecutor shared by uploads and downloads. It
retries only on rate limit (HTTP 429) failures, waiting 1s, 2s, 4s, ...
between attempts, and fails fast for every other error after wrapping it
with a description of the operation that was in flight.
"""

import logging
import time
from typing import Callable, Optional, TypeVar

from .errors import RateLimitExceeded, RetryExhausted, TransferError, http_status_of

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Fixed backoff schedule: BASE_DELAY * BACKOFF_FACTOR ** attempt
BASE_DELAY = 1
BACKOFF_FACTOR = 2


class RetryExecutor:
    """Runs a fallible operation with bounded exponential backoff.

    Only the retry ceiling is configurable per call. The wait between
    attempts is the single blocking point; pass a different ``sleep``
    callable (or patch ``time.sleep``) to make it instant in tests.

    Example:
        >>> executor = RetryExecutor()
        >>> process = executor.execute(
        ...     lambda: api.upload("123.abc", options),
        ...     max_retries=5,
        ...     description="upload locales/en.yml",
        ... )
    """

    def __init__(self, sleep: Optional[Callable[[float], None]] = None):
        """Initialize the executor.

        Args:
            sleep: Callable used to wait between attempts (default: time.sleep)
        """
        self._sleep = sleep

    def delay_for(self, attempt: int) -> int:
        """Return the delay in seconds before retrying after ``attempt``."""
        return BASE_DELAY * BACKOFF_FACTOR ** attempt

    def execute(
        self,
        operation: Callable[[], T],
        max_retries: int,
        description: str = "perform operation"
    ) -> T:
        """Execute ``operation``, retrying on rate limit errors.

        Args:
            operation: Zero-argument callable to run
            max_retries: Additional attempts allowed after the first one
            description: What is being attempted (used in errors and logs)

        Returns:
            The return value of ``operation``

        Raises:
            RetryExhausted: If every one of the max_retries + 1 attempts hit
                the rate limit
            TransferError: For any other failure, raised immediately with the
                original exception attached
            ValueError: If max_retries is negative
        """
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")

        for attempt in range(max_retries + 1):
            try:
                return operation()
            except Exception as e:
                if not is_rate_limit_error(e):
                    # Not a rate limit error - fail fast
                    raise TransferError(description, str(e), original=e) from e

                if attempt >= max_retries:
                    logger.error(
                        f"Rate limit persisted after {max_retries} retries "
                        f"while trying to {description}, giving up"
                    )
                    raise RetryExhausted(description, max_retries, e) from e

                wait_time = self.delay_for(attempt)
                logger.info(
                    f"Rate limit hit, retrying in {wait_time}s "
                    f"(retry {attempt + 1}/{max_retries})"
                )
                self._wait(wait_time)

        # range() above always returns or raises
        raise AssertionError("unreachable")

    def _wait(self, seconds: float) -> None:
        # Looked up at call time so patching time.sleep works in tests
        if self._sleep is not None:
            self._sleep(seconds)
        else:
            time.sleep(seconds)


def is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit (429) error.

    Recognizes our own RateLimitExceeded, python-lokalise-api's
    TooManyRequests, and any HTTP error exposing status 429. The
    "too many requests" message is only trusted when no status is exposed.

    Args:
        exception: The exception to check

    Returns:
        True if this is a rate limit error, False otherwise
    """
    if isinstance(exception, RateLimitExceeded):
        return True

    if type(exception).__name__ == 'TooManyRequests':
        return True

    status = http_status_of(exception)
    if status is not None:
        return status == 429

    # Message check only for errors that carry no status code
    return 'too many requests' in str(exception).lower()
