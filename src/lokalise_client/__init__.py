"""Lokalise client library for translation file sync.

This package provides the remote-service edge of lokalise-sync: the typed
error hierarchy, credential loading, the rate-limit retry executor and a
thin wrapper over the python-lokalise-api client.
"""

from .errors import (
    SyncError,
    LokaliseError,
    InvalidCredentialsError,
    TransferError,
    RateLimitExceeded,
    RetryExhausted,
)
from .models import UploadOptions, BundleDescriptor

__all__ = [
    "SyncError",
    "LokaliseError",
    "InvalidCredentialsError",
    "TransferError",
    "RateLimitExceeded",
    "RetryExhausted",
    "UploadOptions",
    "BundleDescriptor",
]
