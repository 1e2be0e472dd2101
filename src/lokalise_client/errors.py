"""Typed exception hierarchy for Lokalise-related errors.

This module defines the exceptions raised at the remote-service edge of the
sync tool. All exceptions inherit from SyncError so callers can catch any
application-level failure, and transfer failures keep the underlying
exception available through ``original`` and ``kind``.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all lokalise-sync errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class LokaliseError(SyncError):
    """Base exception for all Lokalise-related errors."""
    pass


class InvalidCredentialsError(LokaliseError):
    """Raised when the API client cannot be created from the given token."""

    def __init__(self, reason: str = "API token is missing or empty"):
        super().__init__(f"Invalid Lokalise credentials: {reason}")
        self.reason = reason


class TransferError(LokaliseError):
    """Raised when an upload, download or bundle fetch fails.

    The original exception is kept so the failure kind stays
    distinguishable after context has been added.

    Attributes:
        operation: Description of what was being attempted
        reason: Human-readable failure reason
        original: Underlying exception (None if there was none)
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        original: Optional[BaseException] = None
    ):
        super().__init__(f"Error while trying to {operation}: {reason}")
        self.operation = operation
        self.reason = reason
        self.original = original

    @property
    def kind(self) -> str:
        """Class name of the underlying failure (or of this error)."""
        if self.original is not None:
            return type(self.original).__name__
        return type(self).__name__

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status code of the underlying failure, if it exposes one."""
        return http_status_of(self.original) if self.original else None


class RateLimitExceeded(TransferError):
    """Raised when the Lokalise API answers with HTTP 429."""

    def __init__(
        self,
        operation: str,
        original: Optional[BaseException] = None
    ):
        super().__init__(operation, "Too many requests", original)


class RetryExhausted(TransferError):
    """Raised when a rate-limited operation still fails after all retries.

    Attributes:
        retries: Number of retries performed after the first attempt
        last_error: Exception raised by the final attempt
    """

    def __init__(self, operation: str, retries: int, last_error: BaseException):
        super().__init__(
            operation,
            f"Gave up after {retries} retries ({last_error})",
            last_error
        )
        self.retries = retries
        self.last_error = last_error


def http_status_of(exception: BaseException) -> Optional[int]:
    """Extract an HTTP status code from an exception, if it carries one.

    Checks the attribute names used by requests (``response.status_code``),
    python-lokalise-api (``code``) and generic HTTP errors (``status_code``).

    Args:
        exception: The exception to inspect

    Returns:
        The integer status code, or None if none can be found
    """
    for attr in ('status_code', 'code'):
        value = getattr(exception, attr, None)
        if isinstance(value, int):
            return value

    response = getattr(exception, 'response', None)
    if response is not None:
        value = getattr(response, 'status_code', None)
        if isinstance(value, int):
            return value

    return None
