"""
Note Service.

Owns the in-memory note collection for one session. Loads it once from
the repository, applies mutations by composing query engine functions,
and writes the full collection back after every mutation.
"""

from collections.abc import Callable

from notebox.backend.core.exceptions import ConflictError, NotFoundError
from notebox.backend.core.utils import generate_id, utc_now_iso
from notebox.backend.repositories.note import NoteRepository
from notebox.backend.schemas.note import Note, NoteStats, SortCriterion, StatusFilter
from notebox.backend.services.base import BaseService
from notebox.backend.services.query import (
    calculate_stats,
    create_note,
    process_notes,
    toggle_note,
)


class NoteService(BaseService):
    """
    Service for note business logic.

    The collection is never mutated in place: every change builds a new
    list and replaces the current one before it is saved.
    """

    def __init__(
        self,
        repository: NoteRepository,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self.repo = repository
        self._id_factory = id_factory or generate_id
        self._clock = clock or utc_now_iso
        self._notes: list[Note] | None = None

    @property
    def notes(self) -> list[Note]:
        """Current collection, loaded from the repository on first access."""
        if self._notes is None:
            self._notes = self.repo.load()
            self._log_debug("Notes loaded", count=len(self._notes))
        return self._notes

    def _commit(self, notes: list[Note]) -> None:
        self._notes = notes
        self.repo.save(notes)

    def add(self, text: str) -> Note:
        """
        Create a note and put it at the front of the collection.

        Args:
            text: Note text, trimmed before storing

        Returns:
            Created note

        Raises:
            ValidationError: If text is blank
        """
        self._validate_required({"text": text}, ["text"])

        note = create_note(text, id_factory=self._id_factory, clock=self._clock)
        self._log_operation("Adding note", note_id=note.id)
        self._commit([note, *self.notes])
        return note

    def find(self, note_id: str) -> Note:
        """
        Resolve a note by exact id or unique id prefix.

        Raises:
            NotFoundError: If no note matches
            ConflictError: If the prefix matches more than one note
        """
        for note in self.notes:
            if note.id == note_id:
                return note

        matches = [note for note in self.notes if note_id and note.id.startswith(note_id)]
        if not matches:
            raise NotFoundError(f"Note not found: {note_id}")
        if len(matches) > 1:
            raise ConflictError(
                f"Note id prefix '{note_id}' is ambiguous ({len(matches)} matches)"
            )
        return matches[0]

    def toggle(self, note_id: str) -> Note:
        """
        Flip the done flag of a note.

        Returns:
            The toggled note

        Raises:
            NotFoundError: If note not found
        """
        target = self.find(note_id)
        toggled = toggle_note(target)

        self._log_operation("Toggling note", note_id=target.id, done=toggled.done)
        self._commit([toggled if note.id == target.id else note for note in self.notes])
        return toggled

    def delete(self, note_id: str) -> Note:
        """
        Remove a note from the collection.

        Returns:
            The removed note

        Raises:
            NotFoundError: If note not found
        """
        target = self.find(note_id)

        self._log_operation("Deleting note", note_id=target.id)
        self._commit([note for note in self.notes if note.id != target.id])
        return target

    def view(
        self,
        query: str = "",
        status: StatusFilter | str = StatusFilter.ALL,
        sort: SortCriterion | str = SortCriterion.DATE,
    ) -> list[Note]:
        """
        Derive the presented list from the current collection.

        Args:
            query: Case-insensitive text search, blank for no search
            status: all, open or done
            sort: date, alphabetical or status
        """
        self._log_debug("Viewing notes", query=query, status=status, sort=sort)
        return process_notes(self.notes, query=query, status=status, criterion=sort)

    def stats(self) -> NoteStats:
        """Statistics over the whole collection."""
        return calculate_stats(self.notes)

    def reset(self) -> None:
        """Remove all persisted notes and empty the in-memory collection."""
        self._log_operation("Resetting notes")
        self.repo.clear()
        self._notes = []
