"""Main CLI entry point for the lokalise-sync command.

This module provides the Typer application that serves as the entry point
for the lokalise-sync command-line tool. It exposes two commands, export
(local files -> Lokalise) and import (Lokalise bundle -> local files), and
translates task failures into meaningful exit codes.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.errors import CLIError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.lokalise_client.auth import Authenticator
from src.lokalise_client.errors import (
    InvalidCredentialsError,
    RetryExhausted,
    SyncError,
    TransferError,
)
from src.sync_tasks.config import TaskConfig
from src.sync_tasks.exporter import Exporter
from src.sync_tasks.importer import Importer

__version__ = "0.1.0"

app = typer.Typer(
    name="lokalise-sync",
    help="""Exchange translation files between a local directory and Lokalise.

QUICK START:
  lokalise-sync export                       # Upload ./locales to Lokalise
  lokalise-sync import                       # Download and extract the bundle
  lokalise-sync import --safe-mode           # Ask before overwriting local files

Credentials are read from LOKALISE_API_TOKEN and LOKALISE_PROJECT_ID
(a .env file is honoured). Other settings live in .lokalise-sync.yaml.""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)

# Status codes meaning the API rejected the credentials
AUTH_STATUS_CODES = (401, 403)
AUTH_ERROR_KINDS = ('Unauthorized', 'Forbidden')


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    # Configure app-specific logger (not root) to avoid affecting libraries
    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"lokalise-sync_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _exit_code_for(error: Exception) -> ExitCode:
    """Map a task failure to a CLI exit code.

    Args:
        error: Exception raised by a task

    Returns:
        ExitCode matching the failure kind
    """
    if isinstance(error, InvalidCredentialsError):
        return ExitCode.AUTH_ERROR

    if isinstance(error, RetryExhausted):
        return ExitCode.NETWORK_ERROR

    if isinstance(error, TransferError):
        if error.status_code in AUTH_STATUS_CODES or error.kind in AUTH_ERROR_KINDS:
            return ExitCode.AUTH_ERROR
        if isinstance(error.original, InvalidCredentialsError):
            return ExitCode.AUTH_ERROR
        return ExitCode.NETWORK_ERROR

    return ExitCode.GENERAL_ERROR


def _load_task_config(
    config_path: Optional[str],
    overrides: Dict[str, Any],
    output: OutputHandler
) -> TaskConfig:
    """Load the config file, merge credentials and overrides.

    Raises:
        typer.Exit: With GENERAL_ERROR if the configuration is invalid
    """
    try:
        file_values = ConfigLoader.load(config_path)
        credentials = Authenticator().get_credentials()
        return ConfigLoader.build(file_values, credentials, overrides)
    except CLIError as e:
        logger.error(f"Invalid configuration: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lokalise-sync version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Exchange translation files between a local directory and Lokalise."""


@app.command("export")
def export_command(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the YAML configuration file (default: .lokalise-sync.yaml)",
        metavar="FILE",
    ),
    locales: Optional[str] = typer.Option(
        None,
        "--locales",
        help="Directory holding the translation files (default: ./locales)",
        metavar="DIR",
    ),
    project_id: Optional[str] = typer.Option(
        None,
        "--project-id",
        help="Lokalise project ID (overrides LOKALISE_PROJECT_ID)",
    ),
    branch: Optional[str] = typer.Option(
        None,
        "--branch",
        help="Lokalise branch to upload to",
    ),
    max_retries: Optional[int] = typer.Option(
        None,
        "--max-retries",
        min=0,
        help="Retries per file when the API rate limit is hit",
    ),
    skip: Optional[List[str]] = typer.Option(
        None,
        "--skip",
        help="Shell-style pattern of files to leave out (can be used multiple times)",
        metavar="PATTERN",
    ),
    silent: bool = typer.Option(
        False,
        "--silent",
        help="Do not print the completion notice",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Upload local translation files to Lokalise."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    overrides: Dict[str, Any] = {
        'locales_path': locales,
        'project_id': project_id,
        'branch': branch,
        'max_retries_export': max_retries,
        'skip_patterns': list(skip) if skip else None,
        'silent_mode': True if silent else None,
    }
    task_config = _load_task_config(config, overrides, output)
    output.info(f"Exporting {task_config.locales_path} to {task_config.project_id_with_branch}")

    try:
        processes = Exporter(task_config, console=output.console).export()
    except SyncError as e:
        logger.error(f"Export failed: {e}")
        output.error(f"Export failed: {e}")
        raise typer.Exit(_exit_code_for(e))
    except Exception as e:
        logger.exception("Unexpected error during export")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not task_config.silent_mode:
        output.print_export_summary(processes, task_config.project_id_with_branch)
    raise typer.Exit(ExitCode.SUCCESS)


@app.command("import")
def import_command(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the YAML configuration file (default: .lokalise-sync.yaml)",
        metavar="FILE",
    ),
    locales: Optional[str] = typer.Option(
        None,
        "--locales",
        help="Directory the bundle is extracted into (default: ./locales)",
        metavar="DIR",
    ),
    project_id: Optional[str] = typer.Option(
        None,
        "--project-id",
        help="Lokalise project ID (overrides LOKALISE_PROJECT_ID)",
    ),
    branch: Optional[str] = typer.Option(
        None,
        "--branch",
        help="Lokalise branch to download from",
    ),
    max_retries: Optional[int] = typer.Option(
        None,
        "--max-retries",
        min=0,
        help="Retries when the API rate limit is hit",
    ),
    safe_mode: Optional[bool] = typer.Option(
        None,
        "--safe-mode/--no-safe-mode",
        help="Ask for confirmation before importing into a non-empty directory",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Download the translation bundle from Lokalise and extract it locally."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    overrides: Dict[str, Any] = {
        'locales_path': locales,
        'project_id': project_id,
        'branch': branch,
        'max_retries_import': max_retries,
        'import_safe_mode': safe_mode,
    }
    task_config = _load_task_config(config, overrides, output)
    output.info(f"Importing {task_config.project_id_with_branch} into {task_config.locales_path}")

    try:
        imported = Importer(task_config, console=output.console).import_()
    except SyncError as e:
        logger.error(f"Import failed: {e}")
        output.error(f"Import failed: {e}")
        raise typer.Exit(_exit_code_for(e))
    except Exception as e:
        logger.exception("Unexpected error during import")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.print_import_summary(imported, str(task_config.locales_path))
    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
