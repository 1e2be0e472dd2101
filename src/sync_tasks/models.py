"""Data models for sync tasks.

This module defines the transient data models produced while walking the
locales directory and reading translation bundles.
"""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath


@dataclass(frozen=True)
class CandidateFile:
    """A local translation file selected for export.

    Attributes:
        absolute_path: Full path to the file on disk
        relative_path: Path relative to the locales root, always POSIX style
    """
    absolute_path: Path
    relative_path: PurePosixPath


@dataclass(frozen=True)
class ArchiveEntry:
    """A single file read from a downloaded translation bundle.

    Attributes:
        name: Entry path inside the archive
        content: Raw entry bytes
    """
    name: str
    content: bytes
