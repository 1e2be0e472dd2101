"""Upload option generation for exported files."""

import base64
import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Union

from src.lokalise_client.models import REQUIRED_UPLOAD_KEYS, UploadOptions

from .config import TaskConfig
from .errors import FilesystemError

logger = logging.getLogger(__name__)


class ExportOptionsBuilder:
    """Builds the upload options for a single translation file.

    The file content is stripped and base64-encoded, the language is inferred
    from the raw content by ``config.lang_iso_inferer``, and
    ``config.export_opts`` is layered on top. Extra options may replace
    ``filename`` or ``lang_iso`` but never ``data``, and a None value never
    removes a required key.
    """

    def __init__(self, config: TaskConfig):
        self.config = config

    def build(
        self,
        absolute_path: Path,
        relative_path: Union[PurePosixPath, str]
    ) -> UploadOptions:
        """Generate upload options for a file.

        Args:
            absolute_path: Full path of the file to read
            relative_path: Path relative to the locales root (sent as filename)

        Returns:
            UploadOptions for the file

        Raises:
            FilesystemError: If the file cannot be read
        """
        try:
            content = Path(absolute_path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(str(absolute_path), 'read', str(e)) from e

        data = base64.b64encode(content.strip().encode('utf-8')).decode('ascii')
        filename = PurePosixPath(relative_path).as_posix()
        lang_iso = self.config.lang_iso_inferer.infer(content)

        return UploadOptions(
            data=data,
            filename=filename,
            lang_iso=lang_iso,
            extra=self._extra_options(filename),
        )

    def _extra_options(self, filename: str) -> Dict[str, Any]:
        extra: Dict[str, Any] = {}
        for key, value in self.config.export_opts.items():
            if key == 'data':
                logger.warning(f"Ignoring export option 'data' for {filename}: file content is always sent")
                continue
            if key in REQUIRED_UPLOAD_KEYS and value is None:
                continue
            extra[key] = value
        return extra
