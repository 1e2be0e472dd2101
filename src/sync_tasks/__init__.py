"""Sync tasks: export local translation files and import Lokalise bundles.

This package contains the transfer orchestration core: deterministic file
enumeration, upload option generation, bundle extraction, the safe-mode
confirmation gate and the Exporter/Importer tasks that tie them together.
"""

from .config import TaskConfig, DEFAULT_IMPORT_OPTS
from .errors import (
    TaskError,
    ConfigurationError,
    FilesystemError,
    BundleFormatError,
    EntryProcessingError,
)
from .models import CandidateFile, ArchiveEntry
from .strategies import (
    SkipPredicate,
    LangIsoInferer,
    TranslationsLoader,
    TranslationsConverter,
    Confirmer,
    NeverSkip,
    SkipByPattern,
    FirstKeyLangIsoInferer,
    SafeYamlLoader,
    YamlConverter,
    ConsoleConfirmer,
)
from .file_walker import FileWalker
from .export_options import ExportOptionsBuilder
from .bundle_processor import BundleProcessor
from .safe_mode import SafeModeGate
from .exporter import Exporter
from .importer import Importer

__all__ = [
    'TaskConfig',
    'DEFAULT_IMPORT_OPTS',
    'TaskError',
    'ConfigurationError',
    'FilesystemError',
    'BundleFormatError',
    'EntryProcessingError',
    'CandidateFile',
    'ArchiveEntry',
    'SkipPredicate',
    'LangIsoInferer',
    'TranslationsLoader',
    'TranslationsConverter',
    'Confirmer',
    'NeverSkip',
    'SkipByPattern',
    'FirstKeyLangIsoInferer',
    'SafeYamlLoader',
    'YamlConverter',
    'ConsoleConfirmer',
    'FileWalker',
    'ExportOptionsBuilder',
    'BundleProcessor',
    'SafeModeGate',
    'Exporter',
    'Importer',
]
