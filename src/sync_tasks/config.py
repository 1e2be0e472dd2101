"""Immutable task configuration.

TaskConfig is constructed once per task invocation (by the CLI or by a
library caller) and threaded explicitly through every component. It is
never mutated; use ``with_overrides`` to derive a modified copy.
"""

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from .strategies import (
    FirstKeyLangIsoInferer,
    LangIsoInferer,
    NeverSkip,
    SafeYamlLoader,
    SkipPredicate,
    TranslationsConverter,
    TranslationsLoader,
    YamlConverter,
)

DEFAULT_MAX_RETRIES = 5

DEFAULT_FILE_EXT: Tuple[str, ...] = ('.yml', '.yaml')

# Download parameters sent unless overridden through import_opts
DEFAULT_IMPORT_OPTS: Mapping[str, Any] = MappingProxyType({
    'format': 'ruby_yaml',
    'placeholder_format': 'icu',
    'yaml_include_root': True,
    'original_filenames': True,
    'directory_prefix': '',
    'indentation': '2sp',
})


def _default_locales_path() -> Path:
    return Path.cwd() / 'locales'


@dataclass(frozen=True)
class TaskConfig:
    """Configuration shared by the export and import tasks.

    Attributes:
        api_token: Lokalise API token (required)
        project_id: Lokalise project ID (required)
        locales_path: Root directory of the local translation files
        branch: Optional Lokalise branch name
        file_ext: Accepted file extensions (case-insensitive)
        skip_file_export: Strategy deciding which files to leave out of export
        lang_iso_inferer: Strategy inferring a file's language from its content
        translations_loader: Strategy decoding downloaded entries
        translations_converter: Strategy rendering decoded entries to text
        max_retries_export: Retries per upload after a rate limit hit
        max_retries_import: Retries for the download after a rate limit hit
        import_safe_mode: Ask before importing into a non-empty directory
        silent_mode: Suppress the export completion notice
        export_opts: Extra upload parameters
        import_opts: Download parameters, merged over DEFAULT_IMPORT_OPTS
        use_oauth2_token: Treat api_token as an OAuth2 token
        connect_timeout: API connection timeout in seconds
        read_timeout: API (and bundle fetch) read timeout in seconds

    Example:
        >>> config = TaskConfig(api_token="token", project_id="123.abc", branch="develop")
        >>> config.project_id_with_branch
        '123.abc:develop'
    """
    api_token: Optional[str] = None
    project_id: Optional[str] = None
    locales_path: Path = field(default_factory=_default_locales_path)
    branch: str = ""
    file_ext: Tuple[str, ...] = DEFAULT_FILE_EXT
    skip_file_export: SkipPredicate = field(default_factory=NeverSkip)
    lang_iso_inferer: LangIsoInferer = field(default_factory=FirstKeyLangIsoInferer)
    translations_loader: TranslationsLoader = field(default_factory=SafeYamlLoader)
    translations_converter: TranslationsConverter = field(default_factory=YamlConverter)
    max_retries_export: int = DEFAULT_MAX_RETRIES
    max_retries_import: int = DEFAULT_MAX_RETRIES
    import_safe_mode: bool = False
    silent_mode: bool = False
    export_opts: Mapping[str, Any] = field(default_factory=dict)
    import_opts: Mapping[str, Any] = field(default_factory=dict)
    use_oauth2_token: bool = False
    connect_timeout: Optional[float] = None
    read_timeout: Optional[float] = None

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'locales_path', Path(self.locales_path))
        object.__setattr__(self, 'branch', (self.branch or "").strip())
        object.__setattr__(
            self,
            'file_ext',
            tuple(self._normalize_ext(ext) for ext in self.file_ext)
        )
        object.__setattr__(self, 'export_opts', MappingProxyType(dict(self.export_opts)))
        object.__setattr__(self, 'import_opts', MappingProxyType(dict(self.import_opts)))

        for name in ('max_retries_export', 'max_retries_import'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @staticmethod
    def _normalize_ext(ext: str) -> str:
        ext = ext.strip().lower()
        return ext if ext.startswith('.') else f'.{ext}'

    @property
    def project_id_with_branch(self) -> str:
        """Project identifier sent to the API: ``project_id`` or ``project_id:branch``."""
        if self.branch:
            return f"{self.project_id}:{self.branch}"
        return str(self.project_id)

    @property
    def download_options(self) -> Mapping[str, Any]:
        """Download parameters: DEFAULT_IMPORT_OPTS overlaid with import_opts."""
        merged = dict(DEFAULT_IMPORT_OPTS)
        merged.update(self.import_opts)
        return MappingProxyType(merged)

    def has_accepted_ext(self, path: str) -> bool:
        """Check whether a file name ends with one of the accepted extensions."""
        return str(path).lower().endswith(self.file_ext)

    def with_overrides(self, **changes: Any) -> "TaskConfig":
        """Return a copy of this configuration with the given fields replaced."""
        return dataclasses.replace(self, **changes)
