"""Shared plumbing for the export and import tasks."""

import logging
from typing import Optional

from rich.console import Console

from src.lokalise_client.api_wrapper import APIWrapper, TranslationsAPI
from src.lokalise_client.retry_logic import RetryExecutor

from .config import TaskConfig
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class BaseTask:
    """Common state of a sync task.

    Holds the immutable configuration, the retry executor and the console
    used for user-facing notices. The API client is created lazily, after
    the configuration has been validated, unless one is injected.
    """

    def __init__(
        self,
        config: TaskConfig,
        api_client: Optional[TranslationsAPI] = None,
        retry_executor: Optional[RetryExecutor] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the task.

        Args:
            config: Task configuration
            api_client: Client implementing upload/download (default: APIWrapper)
            retry_executor: Executor used for API calls (default: RetryExecutor())
            console: Rich console for user-facing output (default: Console())
        """
        self.config = config
        self._api_client = api_client
        self.retry_executor = retry_executor or RetryExecutor()
        self.console = console or Console()

    @property
    def api_client(self) -> TranslationsAPI:
        """API client, created from the configuration on first use."""
        if self._api_client is None:
            self._api_client = APIWrapper(
                self.config.api_token,
                use_oauth2_token=self.config.use_oauth2_token,
                connect_timeout=self.config.connect_timeout,
                read_timeout=self.config.read_timeout,
            )
        return self._api_client

    def check_options_errors(self) -> None:
        """Validate required configuration before any I/O.

        Raises:
            ConfigurationError: If the API token or project ID is missing
        """
        if not self.config.api_token or not str(self.config.api_token).strip():
            raise ConfigurationError("API token is not set", 'api_token')

        if not self.config.project_id or not str(self.config.project_id).strip():
            raise ConfigurationError("Project ID is not set", 'project_id')

    @property
    def project_id_with_branch(self) -> str:
        return self.config.project_id_with_branch
