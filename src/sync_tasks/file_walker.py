"""Enumeration of local translation files for export.

The walker collects every path under the locales root, sorts the paths by
their full string form and only then filters them, so two walks over the
same tree always yield the same files in the same order.
"""

import logging
from pathlib import Path, PurePosixPath
from typing import Iterator, Optional

from .config import TaskConfig
from .errors import FilesystemError
from .models import CandidateFile

logger = logging.getLogger(__name__)


class FileWalker:
    """Finds the translation files to export under the locales root.

    A path is yielded when it is a regular file, its extension is in
    ``config.file_ext`` and ``config.skip_file_export`` does not reject it.

    Example:
        >>> for candidate in FileWalker(config).enumerate():
        ...     print(candidate.relative_path)
        en.yml
        nested/ru.yml
    """

    def __init__(self, config: TaskConfig):
        self.config = config

    def enumerate(self, root: Optional[Path] = None) -> Iterator[CandidateFile]:
        """Lazily yield candidate files in deterministic order.

        Args:
            root: Directory to walk (default: config.locales_path)

        Yields:
            CandidateFile for every file selected for export

        Raises:
            FilesystemError: If root exists but is not a directory
        """
        root = Path(root) if root is not None else self.config.locales_path

        if not root.exists():
            logger.warning(f"Locales path {root} does not exist - nothing to export")
            return

        if not root.is_dir():
            raise FilesystemError(str(root), 'walk', 'Path exists but is not a directory')

        for path in sorted(root.rglob('*'), key=str):
            if not self._matches_criteria(path):
                continue

            relative_path = PurePosixPath(path.relative_to(root).as_posix())
            yield CandidateFile(absolute_path=path, relative_path=relative_path)

    def _matches_criteria(self, path: Path) -> bool:
        """Check whether a path has to be exported.

        Args:
            path: Absolute path found under the root

        Returns:
            True if the file is selected for export
        """
        if not path.is_file() or not self.config.has_accepted_ext(path.name):
            return False

        if self.config.skip_file_export.should_skip(path):
            logger.debug(f"Skipping {path} (rejected by skip predicate)")
            return False

        return True
