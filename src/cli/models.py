"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed (a declined safe-mode import included)
    - GENERAL_ERROR (1): Configuration, filesystem or bundle format errors
    - AUTH_ERROR (3): The API rejected the credentials (HTTP 401/403)
    - NETWORK_ERROR (4): Network failures and exhausted rate-limit retries

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
