"""Export of local translation files to Lokalise."""

import logging
from typing import Any, List

from .base import BaseTask
from .export_options import ExportOptionsBuilder
from .file_walker import FileWalker
from .models import CandidateFile

logger = logging.getLogger(__name__)


class Exporter(BaseTask):
    """Uploads every selected translation file and collects the processes.

    Files are uploaded one at a time in FileWalker order. Each upload goes
    through the RetryExecutor with ``config.max_retries_export``. The first
    file that fails (rate limit exhausted or any other error) aborts the
    export; uploads already queued for earlier files are not rolled back.

    Example:
        >>> processes = Exporter(config).export()
        Task complete!
        >>> processes[0].status
        'queued'
    """

    def export(self) -> List[Any]:
        """Upload all translation files.

        Returns:
            Queued processes, in the same order as the files were uploaded

        Raises:
            ConfigurationError: If the API token or project ID is missing
            FilesystemError: If a file cannot be read
            RetryExhausted: If an upload stays rate limited
            TransferError: If an upload fails for any other reason
        """
        self.check_options_errors()

        walker = FileWalker(self.config)
        builder = ExportOptionsBuilder(self.config)

        queued_processes: List[Any] = []
        for candidate in walker.enumerate():
            queued_processes.append(self._upload(builder, candidate))

        logger.info(f"Queued {len(queued_processes)} upload(s) for {self.project_id_with_branch}")

        if not self.config.silent_mode:
            self.console.print("Task complete!")

        return queued_processes

    def run(self) -> List[Any]:
        return self.export()

    def _upload(self, builder: ExportOptionsBuilder, candidate: CandidateFile) -> Any:
        """Upload a single file, applying exponential backoff on rate limits."""
        options = builder.build(candidate.absolute_path, candidate.relative_path)
        project_identifier = self.project_id_with_branch

        logger.info(f"Uploading {candidate.relative_path} ({options.lang_iso})")
        return self.retry_executor.execute(
            lambda: self.api_client.upload(project_identifier, options),
            self.config.max_retries_export,
            f"upload {candidate.absolute_path}",
        )
