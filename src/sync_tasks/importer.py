"""Import of translation bundles from Lokalise."""

import logging
from typing import Optional

from rich.console import Console

from src.lokalise_client.api_wrapper import TranslationsAPI
from src.lokalise_client.models import BundleDescriptor
from src.lokalise_client.retry_logic import RetryExecutor

from .base import BaseTask
from .bundle_processor import BundleProcessor
from .config import TaskConfig
from .safe_mode import SafeModeGate
from .strategies import ConsoleConfirmer

logger = logging.getLogger(__name__)


class Importer(BaseTask):
    """Downloads a translation bundle and extracts it into the locales root.

    Workflow:
        1. Validate the API token and project ID
        2. In safe mode, ask before touching a non-empty locales directory
        3. Request the bundle (RetryExecutor, ``config.max_retries_import``)
        4. Fetch and extract the bundle with the BundleProcessor

    Example:
        >>> Importer(config).import_()
        True
    """

    def __init__(
        self,
        config: TaskConfig,
        api_client: Optional[TranslationsAPI] = None,
        retry_executor: Optional[RetryExecutor] = None,
        console: Optional[Console] = None,
        safe_mode_gate: Optional[SafeModeGate] = None,
        bundle_processor: Optional[BundleProcessor] = None,
    ):
        super().__init__(config, api_client, retry_executor, console)
        self.safe_mode_gate = safe_mode_gate
        self.bundle_processor = bundle_processor or BundleProcessor(config)

    def import_(self) -> bool:
        """Run the import.

        Returns:
            True if the bundle was extracted, False if the user declined the
            safe-mode confirmation (nothing is downloaded in that case)

        Raises:
            ConfigurationError: If the API token or project ID is missing
            RetryExhausted: If the download request stays rate limited
            TransferError: If the download request or bundle fetch fails
            BundleFormatError: If the bundle or one of its entries is malformed
        """
        self.check_options_errors()

        if self.config.import_safe_mode and not self._safe_mode_gate().confirm(self.config.locales_path):
            logger.info("Import cancelled, local files left untouched")
            return False

        bundle = self.download_files()
        return self.bundle_processor.process(bundle)

    def run(self) -> bool:
        return self.import_()

    def download_files(self) -> BundleDescriptor:
        """Request the translation bundle, retrying on rate limits."""
        project_identifier = self.project_id_with_branch
        options = self.config.download_options

        logger.info(f"Requesting translation bundle for {project_identifier}")
        return self.retry_executor.execute(
            lambda: self.api_client.download(project_identifier, options),
            self.config.max_retries_import,
            "download translation bundle",
        )

    def _safe_mode_gate(self) -> SafeModeGate:
        if self.safe_mode_gate is None:
            self.safe_mode_gate = SafeModeGate(ConsoleConfirmer(self.console))
        return self.safe_mode_gate
