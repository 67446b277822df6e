"""
CLI Module.

Command-line client built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- All note logic lives in notebox.backend
- Each command builds a NoteService via notebox.backend.core.dependencies

Usage:
    python cli.py --help
    python cli.py notes add "Buy milk"
    python cli.py notes list --status open
"""
