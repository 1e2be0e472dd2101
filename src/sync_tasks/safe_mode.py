"""Safe-mode confirmation before importing into a non-empty directory."""

import logging
from pathlib import Path
from typing import Optional

from .strategies import Confirmer, ConsoleConfirmer

logger = logging.getLogger(__name__)


class SafeModeGate:
    """Blocks an import until the user agrees to overwrite local files.

    An empty (or missing) destination passes without interaction. Any
    regular file anywhere under the destination makes it non-empty.
    """

    def __init__(self, confirmer: Optional[Confirmer] = None):
        self.confirmer = confirmer or ConsoleConfirmer()

    def confirm(self, root: Path) -> bool:
        """Decide whether the import may proceed.

        Args:
            root: Destination directory of the import

        Returns:
            True to proceed, False if the user declined
        """
        if not self.has_files(root):
            return True

        logger.info(f"The target directory {root} is not empty")
        proceed = self.confirmer.confirm(f"The target directory {root} is not empty!")
        if not proceed:
            logger.info("Import declined by user")
        return proceed

    @staticmethod
    def has_files(root: Path) -> bool:
        root = Path(root)
        if not root.is_dir():
            return False
        return any(path.is_file() for path in root.rglob('*'))
