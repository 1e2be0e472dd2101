"""Command-line interface for lokalise-sync.

This package provides the `lokalise-sync` CLI tool that runs the export and
import tasks from the command line, merging the YAML configuration file,
environment credentials and command-line options, with colored output and
meaningful exit codes.
"""

from .config import ConfigLoader
from .models import ExitCode
from .output import OutputHandler
from .errors import (
    CLIError,
    ConfigNotFoundError,
    ConfigFileError,
)

__all__ = [
    'ConfigLoader',
    'ExitCode',
    'OutputHandler',
    'CLIError',
    'ConfigNotFoundError',
    'ConfigFileError',
]
