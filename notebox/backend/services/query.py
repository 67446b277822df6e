"""
Note Query Engine.

Pure functions that create, transform and derive views from a note
collection. They perform no I/O and never mutate their arguments:
transformations return new Note values and new lists.

Usage:
    from notebox.backend.services.query import create_note, process_notes

    note = create_note("  Buy milk  ")
    visible = process_notes(notes, query="milk", status="open", criterion="date")
"""

import unicodedata
from collections.abc import Callable
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import TypeVar

from notebox.backend.core.exceptions import ValidationError
from notebox.backend.core.utils import generate_id, parse_timestamp, utc_now_iso
from notebox.backend.schemas.note import Note, NoteStats, SortCriterion, StatusFilter

E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: type[E], value: E | str, default: E) -> E:
    """Map a raw option value onto enum_cls, falling back to default."""
    try:
        return enum_cls(value)
    except ValueError:
        return default


def create_note(
    text: str,
    *,
    id_factory: Callable[[], str] = generate_id,
    clock: Callable[[], str] = utc_now_iso,
) -> Note:
    """
    Create a new open note.

    Args:
        text: Note text; leading and trailing whitespace is removed
        id_factory: Produces the note identifier
        clock: Produces the creation instant as an ISO 8601 UTC string

    Returns:
        New note with done=False

    Raises:
        ValidationError: If text is blank after trimming
    """
    trimmed = text.strip()
    if not trimmed:
        raise ValidationError(
            "Note text must not be blank",
            details={"text": "Text is empty after trimming"},
        )
    return Note(id=id_factory(), text=trimmed, done=False, created_at=clock())


def toggle_note(note: Note) -> Note:
    """Return a copy of note with its done flag flipped."""
    return note.model_copy(update={"done": not note.done})


def search_notes(notes: list[Note], query: str) -> list[Note]:
    """
    Select notes whose text contains query, ignoring case.

    A blank query returns notes unchanged. Relative order is preserved.
    """
    term = query.strip().lower()
    if not term:
        return notes
    return [note for note in notes if term in note.text.lower()]


def _created_key(note: Note) -> datetime:
    return parse_timestamp(note.created_at)


def _collation_key(note: Note) -> tuple[str, str]:
    # Accent- and case-insensitive primary key. Ties put lowercase first.
    decomposed = unicodedata.normalize("NFKD", note.text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), note.text.swapcase()


def sort_notes(notes: list[Note], criterion: SortCriterion | str) -> list[Note]:
    """
    Return a new list of notes in the requested order.

    Criteria:
        date         - newest first (default, also used for unknown values)
        alphabetical - text ascending, case and accent insensitive
        status       - open notes first, newest first within each group

    Sorting is stable; the input list is not modified.
    """
    criterion = _coerce(SortCriterion, criterion, SortCriterion.DATE)

    if criterion is SortCriterion.ALPHABETICAL:
        return sorted(notes, key=_collation_key)

    by_date = sorted(notes, key=_created_key, reverse=True)
    if criterion is SortCriterion.STATUS:
        return sorted(by_date, key=lambda note: note.done)
    return by_date


def filter_notes_by_status(notes: list[Note], status: StatusFilter | str) -> list[Note]:
    """
    Select notes by completion status.

    'all' and unrecognized values return notes unchanged.
    """
    status = _coerce(StatusFilter, status, StatusFilter.ALL)

    if status is StatusFilter.OPEN:
        return [note for note in notes if not note.done]
    if status is StatusFilter.DONE:
        return [note for note in notes if note.done]
    return notes


def calculate_stats(notes: list[Note]) -> NoteStats:
    """
    Summarize a collection.

    completion_rate is the done percentage rounded half up to an integer,
    or 0 for an empty collection.
    """
    total = len(notes)
    completed = sum(1 for note in notes if note.done)

    completion_rate = 0
    if total:
        rate = Decimal(completed * 100) / Decimal(total)
        completion_rate = int(rate.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    return NoteStats(
        total=total,
        completed=completed,
        pending=total - completed,
        completion_rate=completion_rate,
    )


def process_notes(
    notes: list[Note],
    query: str = "",
    status: StatusFilter | str = StatusFilter.ALL,
    criterion: SortCriterion | str = SortCriterion.DATE,
) -> list[Note]:
    """Derive the presented list: search, then status filter, then sort."""
    result = search_notes(notes, query)
    result = filter_notes_by_status(result, status)
    return sort_notes(result, criterion)
