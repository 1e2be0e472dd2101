"""Typed exception hierarchy for sync task errors.

This module defines the exceptions raised by the export and import tasks.
All exceptions inherit from TaskError (and therefore SyncError) and include
the file path, bundle location or archive entry that was being processed.
"""

from typing import Optional

from src.lokalise_client.errors import SyncError


class TaskError(SyncError):
    """Base exception for all sync task errors."""
    pass


class ConfigurationError(TaskError):
    """Raised when the task configuration misses a required value."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        super().__init__(message)
        self.config_field = config_field


class FilesystemError(TaskError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class BundleFormatError(TaskError):
    """Raised when a downloaded bundle is not a readable archive."""

    def __init__(self, location: str, reason: str):
        super().__init__(f"Bundle at {location} is not a valid archive: {reason}")
        self.location = location
        self.reason = reason


class EntryProcessingError(BundleFormatError):
    """Raised when a single archive entry cannot be decoded or placed."""

    def __init__(self, location: str, entry_name: str, reason: str):
        TaskError.__init__(
            self,
            f"Error when trying to process {entry_name} from {location}: {reason}"
        )
        self.location = location
        self.entry_name = entry_name
        self.reason = reason
