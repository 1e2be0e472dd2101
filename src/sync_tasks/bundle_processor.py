"""Download and extraction of translation bundles.

A bundle is a zip archive produced by Lokalise in which every entry is a
YAML document (one language tree per entry). Processing happens in three
phases so that a bad bundle never leaves a partially imported tree behind:

1. Fetch the archive bytes (HTTP(S) URL or local path)
2. Open the archive and decode every selected entry in memory
3. Write the decoded entries under the locales root
"""

import io
import logging
import os
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple
from urllib.parse import urlparse

import requests
import yaml

from src.lokalise_client.errors import TransferError
from src.lokalise_client.models import BundleDescriptor

from .config import TaskConfig
from .errors import BundleFormatError, EntryProcessingError, FilesystemError
from .models import ArchiveEntry

logger = logging.getLogger(__name__)

# Timeout for bundle downloads when the config sets no read timeout
DEFAULT_FETCH_TIMEOUT = 60


class BundleProcessor:
    """Fetches a translation bundle and extracts it into the locales root.

    Example:
        >>> processor = BundleProcessor(config)
        >>> processor.process(BundleDescriptor("123.abc", "https://.../bundle.zip"))
        True
    """

    def __init__(self, config: TaskConfig, session: Optional[requests.Session] = None):
        """Initialize the processor.

        Args:
            config: Task configuration (locales root, loader, converter, ...)
            session: Optional requests session used for HTTP(S) bundles
        """
        self.config = config
        self._session = session

    def process(self, bundle: BundleDescriptor) -> bool:
        """Fetch, decode and write every entry of a bundle.

        Args:
            bundle: Descriptor returned by the download call

        Returns:
            True once every entry has been written

        Raises:
            TransferError: If the archive cannot be fetched
            BundleFormatError: If the payload is not a readable archive
            EntryProcessingError: If an entry cannot be decoded or escapes the
                locales root (nothing is written in that case)
            FilesystemError: If a decoded entry cannot be written
        """
        location = bundle.location
        logger.info(f"Processing bundle for project {bundle.project_id} from {location}")

        payload = self.fetch(location)
        entries = self.read_entries(location, payload)

        decoded: List[Tuple[Path, str]] = []
        for entry in entries:
            target = self._target_path(location, entry.name)
            decoded.append((target, self._decode(location, entry)))

        for target, text in decoded:
            self._write(target, text)

        logger.info(f"Imported {len(decoded)} file(s) into {self.config.locales_path}")
        return True

    def fetch(self, location: str) -> bytes:
        """Read the archive bytes from a URL or a local path.

        Args:
            location: HTTP(S) URL, ``file://`` URL or filesystem path

        Returns:
            Raw archive bytes

        Raises:
            TransferError: If the location cannot be read
        """
        operation = f"fetch bundle from {location}"
        parsed = urlparse(location)

        if parsed.scheme in ('http', 'https'):
            timeout = self.config.read_timeout or DEFAULT_FETCH_TIMEOUT
            session = self._session or requests
            try:
                response = session.get(location, timeout=timeout)
                response.raise_for_status()
            except requests.exceptions.RequestException as e:
                raise TransferError(operation, str(e), original=e) from e
            return response.content

        path = Path(parsed.path) if parsed.scheme == 'file' else Path(location)
        try:
            return path.read_bytes()
        except OSError as e:
            raise TransferError(operation, str(e), original=e) from e

    def read_entries(self, location: str, payload: bytes) -> List[ArchiveEntry]:
        """Open the payload as a zip archive and read the selected entries.

        Directories and files whose extension is not accepted are ignored.

        Args:
            location: Where the payload came from (for error messages)
            payload: Raw archive bytes

        Returns:
            Entries sorted by name

        Raises:
            BundleFormatError: If the payload is not a valid zip archive or an
                entry cannot be decompressed
        """
        try:
            with zipfile.ZipFile(io.BytesIO(payload)) as archive:
                entries = []
                for info in sorted(archive.infolist(), key=lambda i: i.filename):
                    if info.is_dir():
                        continue
                    if not self.config.has_accepted_ext(info.filename):
                        logger.debug(f"Ignoring bundle entry {info.filename} (extension not accepted)")
                        continue
                    entries.append(ArchiveEntry(name=info.filename, content=archive.read(info)))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError, NotImplementedError) as e:
            # Corrupt entry data or an unsupported compression method
            raise BundleFormatError(location, str(e)) from e

        if not entries:
            logger.warning(f"Bundle at {location} contains no translation files")
        return entries

    def _decode(self, location: str, entry: ArchiveEntry) -> str:
        """Decode an entry with the configured loader and render it for disk.

        Raises:
            EntryProcessingError: If the entry is not valid plain YAML (this
                includes tags that would build Python objects)
        """
        try:
            raw = entry.content.decode('utf-8')
            data = self.config.translations_loader.load(raw)
            return self.config.translations_converter.convert(data)
        except (UnicodeDecodeError, yaml.YAMLError, ValueError, TypeError) as e:
            raise EntryProcessingError(location, entry.name, str(e)) from e

    def _target_path(self, location: str, entry_name: str) -> Path:
        """Map an entry name onto a path under the locales root.

        Raises:
            EntryProcessingError: If the entry would land outside the root
        """
        relative = PurePosixPath(entry_name)
        if relative.is_absolute() or '..' in relative.parts:
            raise EntryProcessingError(
                location, entry_name, 'Path traversal detected: entry escapes the locales root'
            )

        root = self.config.locales_path
        target = root.joinpath(*relative.parts)

        real_root = os.path.realpath(root)
        real_target = os.path.realpath(target)
        if not real_target.startswith(real_root + os.sep):
            raise EntryProcessingError(
                location, entry_name, 'Path traversal detected: entry escapes the locales root'
            )
        return target

    def _write(self, target: Path, text: str) -> None:
        """Write one decoded entry, creating intermediate directories."""
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding='utf-8')
        except OSError as e:
            raise FilesystemError(str(target), 'write', str(e)) from e
        logger.debug(f"Wrote {target}")
