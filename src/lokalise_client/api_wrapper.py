"""API wrapper for the Lokalise API v2.

This module wraps the python-lokalise-api client behind the two calls the
sync tasks need (upload and download) and translates rate limit failures
into RateLimitExceeded so the RetryExecutor can retry them. Every other
failure propagates unchanged and is given context by the caller.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import lokalise

from .errors import InvalidCredentialsError, RateLimitExceeded
from .models import BundleDescriptor, UploadOptions
from .retry_logic import is_rate_limit_error

logger = logging.getLogger(__name__)


class TranslationsAPI(Protocol):
    """Capability interface of the remote translation service."""

    def upload(self, project_identifier: str, options: UploadOptions) -> Any:
        """Queue an upload and return the resulting process."""
        ...

    def download(
        self,
        project_identifier: str,
        extra_options: Mapping[str, Any]
    ) -> BundleDescriptor:
        """Request a translation bundle and describe where it lives."""
        ...


class APIWrapper:
    """Wrapper around the python-lokalise-api client.

    Provides a thin layer over the Lokalise client that:
    1. Creates the client lazily (API token or OAuth2 token)
    2. Enables response compression and the configured timeouts
    3. Translates HTTP 429 responses into RateLimitExceeded
    4. Converts download responses into BundleDescriptor objects

    Example:
        >>> api = APIWrapper("token")
        >>> bundle = api.download("123.abc", {"format": "ruby_yaml"})
        >>> bundle.location
        'https://s3-eu-west-1.amazonaws.com/.../bundle.zip'
    """

    def __init__(
        self,
        api_token: str,
        use_oauth2_token: bool = False,
        connect_timeout: Optional[float] = None,
        read_timeout: Optional[float] = None,
    ):
        """Initialize the wrapper.

        Args:
            api_token: Lokalise API token (or OAuth2 token)
            use_oauth2_token: Use the OAuth2 client instead of the token client
            connect_timeout: Connection timeout in seconds (None: SDK default)
            read_timeout: Read timeout in seconds (None: SDK default)
        """
        self._api_token = api_token
        self._use_oauth2_token = use_oauth2_token
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._client = None

    def _get_client(self):
        """Get or create the Lokalise API client.

        Returns:
            Initialized python-lokalise-api client

        Raises:
            InvalidCredentialsError: If the token is missing or empty
        """
        if self._client is None:
            if not self._api_token or not str(self._api_token).strip():
                raise InvalidCredentialsError()

            client_class = lokalise.OAuthClient if self._use_oauth2_token else lokalise.Client
            self._client = client_class(
                self._api_token,
                connect_timeout=self._connect_timeout,
                read_timeout=self._read_timeout,
                enable_compression=True,
            )
        return self._client

    def upload(self, project_identifier: str, options: UploadOptions) -> Any:
        """Upload a single translation file.

        Args:
            project_identifier: Project ID, optionally suffixed with ``:branch``
            options: Upload options for the file

        Returns:
            The queued process returned by Lokalise

        Raises:
            RateLimitExceeded: If the API answered with HTTP 429
            Exception: Any other SDK or network failure, unchanged
        """
        operation = f"upload {options.filename}"
        try:
            process = self._get_client().upload_file(
                project_identifier, options.to_params()
            )
        except Exception as e:
            translated = self._translate_error(e, operation)
            if translated is e:
                raise
            raise translated from e

        logger.debug(f"Queued upload of {options.filename} to {project_identifier}")
        return process

    def download(
        self,
        project_identifier: str,
        extra_options: Mapping[str, Any]
    ) -> BundleDescriptor:
        """Request a translation bundle.

        Args:
            project_identifier: Project ID, optionally suffixed with ``:branch``
            extra_options: Download parameters (format, placeholders, ...)

        Returns:
            BundleDescriptor pointing at the generated bundle

        Raises:
            RateLimitExceeded: If the API answered with HTTP 429
            Exception: Any other SDK or network failure, unchanged
        """
        params: Dict[str, Any] = dict(extra_options)
        try:
            response = self._get_client().download_files(project_identifier, params)
        except Exception as e:
            translated = self._translate_error(e, "download translation bundle")
            if translated is e:
                raise
            raise translated from e

        descriptor = BundleDescriptor(
            project_id=str(response['project_id']),
            location=str(response['bundle_url']),
        )
        logger.debug(f"Bundle for {descriptor.project_id} available at {descriptor.location}")
        return descriptor

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate rate limit failures; return everything else unchanged.

        Args:
            exception: The original exception from the SDK
            operation: Description of the operation that failed

        Returns:
            Exception: RateLimitExceeded or the original exception
        """
        if is_rate_limit_error(exception):
            logger.debug(f"Rate limited during {operation}")
            return RateLimitExceeded(operation, original=exception)
        return exception
