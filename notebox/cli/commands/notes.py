"""
Note Commands.

Commands for adding, toggling, deleting and browsing notes.
"""

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from notebox.backend.core.dependencies import get_note_service
from notebox.backend.core.exceptions import ApplicationError
from notebox.backend.core.logging import get_logger, log_with_source
from notebox.backend.schemas.note import Note, SortCriterion, StatusFilter

app = typer.Typer(help="Note commands")
console = Console()
logger = get_logger(__name__)

ID_DISPLAY_LENGTH = 8


def _fail(error: ApplicationError) -> NoReturn:
    """Print an application error and exit with status 1."""
    console.print(f"[red]Error: {error.message}[/red]")
    raise typer.Exit(1)


def _short_id(note: Note) -> str:
    return note.id[:ID_DISPLAY_LENGTH]


@app.command()
def add(
    text: str = typer.Argument(..., help="Note text"),
) -> None:
    """
    Add a new note.

    Examples:
        cli.py notes add "Buy milk"
    """
    service = get_note_service()
    try:
        note = service.add(text)
    except ApplicationError as e:
        _fail(e)

    log_with_source(logger, "cli", "info", "Note added", note_id=note.id)
    console.print(f"[green]Added[/green] [dim]{_short_id(note)}[/dim] {escape(note.text)}")


@app.command("list")
def list_notes(
    search: str = typer.Option("", "--search", "-s", help="Case-insensitive text search"),
    status: StatusFilter = typer.Option(StatusFilter.ALL, "--status", help="Filter by status"),
    sort: SortCriterion = typer.Option(SortCriterion.DATE, "--sort", help="Sort order"),
) -> None:
    """
    List notes, optionally searched, filtered and sorted.

    Examples:
        cli.py notes list
        cli.py notes list --search milk --status open --sort alphabetical
    """
    service = get_note_service()
    notes = service.view(query=search, status=status, sort=sort)

    if not notes:
        if search.strip():
            console.print(f'[yellow]No notes found for "{escape(search)}"[/yellow]')
        else:
            console.print("[yellow]No notes to show. Add your first note with 'notes add'.[/yellow]")
        return

    table = Table(title="Notes", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Status")
    table.add_column("Text")
    table.add_column("Created", style="cyan")

    for note in notes:
        table.add_row(
            _short_id(note),
            "[green]done[/green]" if note.done else "[yellow]open[/yellow]",
            f"[strike]{escape(note.text)}[/strike]" if note.done else escape(note.text),
            note.created_at,
        )

    console.print(table)


@app.command()
def done(
    note_id: str = typer.Argument(..., help="Note id or unique id prefix"),
) -> None:
    """
    Toggle a note between done and open.

    Examples:
        cli.py notes done 3f2a9c1e
    """
    service = get_note_service()
    try:
        note = service.toggle(note_id)
    except ApplicationError as e:
        _fail(e)

    state = "[green]done[/green]" if note.done else "[yellow]open[/yellow]"
    console.print(f"Marked {state}: {escape(note.text)}")


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note id or unique id prefix"),
) -> None:
    """
    Delete a note.

    Examples:
        cli.py notes delete 3f2a9c1e
    """
    service = get_note_service()
    try:
        note = service.delete(note_id)
    except ApplicationError as e:
        _fail(e)

    log_with_source(logger, "cli", "info", "Note deleted", note_id=note.id)
    console.print(f"[red]Deleted[/red] [dim]{_short_id(note)}[/dim] {escape(note.text)}")


@app.command()
def stats() -> None:
    """
    Show note statistics.
    """
    service = get_note_service()
    summary = service.stats()

    console.print(Panel(
        f"Total: [bold]{summary.total}[/bold]\n"
        f"Pending: [bold yellow]{summary.pending}[/bold yellow]\n"
        f"Completed: [bold green]{summary.completed}[/bold green]\n"
        f"Completion rate: [bold]{summary.completion_rate}%[/bold]",
        title="Note Statistics",
    ))


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete all notes.
    """
    if not yes and not typer.confirm("Delete all notes?"):
        console.print("[dim]Aborted.[/dim]")
        raise typer.Exit(1)

    get_note_service().reset()
    log_with_source(logger, "cli", "warning", "All notes deleted")
    console.print("[red]All notes deleted.[/red]")
