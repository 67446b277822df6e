#!/usr/bin/env python3
"""
NoteBox CLI.

Command-line client for the local note collection.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                                  # Show help

    # Notes
    python cli.py notes add "Buy milk"                    # Add a note
    python cli.py notes list                              # Newest first
    python cli.py notes list -s milk --status open        # Search and filter
    python cli.py notes list --sort alphabetical          # Sort A-Z
    python cli.py notes done 3f2a9c1e                     # Toggle done/open
    python cli.py notes delete 3f2a9c1e                   # Delete a note
    python cli.py notes stats                             # Totals and completion rate
    python cli.py notes clear --yes                       # Delete everything

    # System info
    python cli.py system info                             # Show app info
    python cli.py system config                           # Show configuration
    python cli.py system version                          # Show version

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notebox.cli.commands import notes_app, system_app  # noqa: E402

# Create main app
app = typer.Typer(
    name="notebox",
    help="NoteBox CLI - Create, search, filter and summarize local notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(notes_app, name="notes")
app.add_typer(system_app, name="system")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    NoteBox CLI.

    Notes are stored in the configured key-value store (config/settings/storage.yaml).
    """
    from notebox.backend.core.config import validate_project_root
    from notebox.backend.core.logging import setup_logging

    validate_project_root()

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()


if __name__ == "__main__":
    app()
