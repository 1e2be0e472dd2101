"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for colored output and formatted summaries, and exposes
the underlying Console so the sync tasks print through the same stream.
Supports verbosity levels and the --no-color flag.
"""

from typing import Any, List

from rich.console import Console


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Export queued")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print_export_summary(self, processes: List[Any], project_identifier: str) -> None:
        """Display the processes queued by an export.

        Args:
            processes: Queued processes returned by the export
            project_identifier: Project ID (with branch) the files went to
        """
        if not processes:
            self.console.print("\n[yellow]No translation files to export[/yellow]")
            return

        self.console.print(f"\n[bold]Export Summary ({project_identifier}):[/bold]")
        self.console.print(f"  [green]↑[/green] Queued: {len(processes)} file(s)")

        if self.verbosity >= 1:
            for process in processes:
                process_id = getattr(process, 'process_id', None) or '?'
                status = getattr(process, 'status', None) or 'unknown'
                self.console.print(f"  • {process_id} ({status})")

    def print_import_summary(self, imported: bool, locales_path: str) -> None:
        """Display the outcome of an import.

        Args:
            imported: Result of the import (False if the user declined)
            locales_path: Destination directory
        """
        if imported:
            self.console.print(f"\n[green]↓ Translations imported into {locales_path}[/green]")
        else:
            self.console.print("\n[yellow]Import cancelled, local files left untouched[/yellow]")
