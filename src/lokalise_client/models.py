"""Data models exchanged with the Lokalise API client.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Keys every upload request carries; extra options are layered on top
REQUIRED_UPLOAD_KEYS = ('data', 'filename', 'lang_iso')


@dataclass(frozen=True)
class UploadOptions:
    """Per-file upload metadata sent to the Lokalise upload endpoint.

    Attributes:
        data: Base64-encoded (stripped) file content
        filename: Path of the file relative to the locales root, POSIX style
        lang_iso: Language code inferred from the file content
        extra: User-supplied extra upload options (never contains ``data``)
    """
    data: str
    filename: str
    lang_iso: Optional[str]
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_params(self) -> Dict[str, Any]:
        """Render the request parameters for the upload call.

        Extra options are applied over ``filename`` and ``lang_iso`` but can
        never replace ``data``.

        Returns:
            Dictionary of upload parameters
        """
        params: Dict[str, Any] = {
            'data': self.data,
            'filename': self.filename,
            'lang_iso': self.lang_iso,
        }
        params.update(self.extra)
        params['data'] = self.data
        return params


@dataclass(frozen=True)
class BundleDescriptor:
    """Result of a download request: where the translation bundle lives.

    Attributes:
        project_id: Lokalise project the bundle was built for
        location: Bundle URL (http/https) or local path
    """
    project_id: str
    location: str
