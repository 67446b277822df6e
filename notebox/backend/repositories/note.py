"""
Note Repository.

Data access layer for the note collection. The whole collection is stored
as one JSON array under a single key and replaced on every save.

Every operation degrades instead of raising: a missing, unreadable, or
corrupted payload loads as an empty collection, and failed writes are
logged and dropped.
"""

from pydantic import ValidationError as PydanticValidationError

from notebox.backend.core.logging import get_logger, log_with_source
from notebox.backend.repositories.store import KeyValueStore
from notebox.backend.schemas.note import LoadResult, LoadStatus, Note, NoteList

NOTES_STORAGE_KEY = "notes.v1"


class NoteRepository:
    """
    Repository for the note collection.

    Usage:
        repo = NoteRepository(InMemoryKeyValueStore())
        repo.save([note])
        notes = repo.load()
    """

    def __init__(self, store: KeyValueStore, key: str = NOTES_STORAGE_KEY) -> None:
        self._store = store
        self._key = key
        self._logger = get_logger(self.__class__.__module__)

    @property
    def store(self) -> KeyValueStore:
        """Get the underlying key-value store."""
        return self._store

    @property
    def key(self) -> str:
        """Get the key the collection is stored under."""
        return self._key

    def load(self) -> list[Note]:
        """
        Load the persisted collection.

        Returns:
            Stored notes, or an empty list if nothing is stored, the store
            cannot be read, or the payload is not a valid note sequence
        """
        return self.load_result().notes

    def load_result(self) -> LoadResult:
        """
        Load the persisted collection and report how the load went.

        Returns:
            LoadResult with status LOADED, EMPTY, CORRUPTED or UNAVAILABLE
        """
        try:
            stored = self._store.get_item(self._key)
        except Exception as e:
            log_with_source(
                self._logger,
                "repository",
                "warning",
                "Failed to load notes from store",
                extra={"key": self._key, "error": str(e), "error_type": type(e).__name__},
            )
            return LoadResult(notes=[], status=LoadStatus.UNAVAILABLE)

        if not stored:
            return LoadResult(notes=[], status=LoadStatus.EMPTY)

        try:
            notes = NoteList.validate_json(stored)
        except PydanticValidationError as e:
            log_with_source(
                self._logger,
                "repository",
                "warning",
                "Failed to load notes from store",
                extra={"key": self._key, "error": str(e), "error_type": type(e).__name__},
            )
            return LoadResult(notes=[], status=LoadStatus.CORRUPTED)

        return LoadResult(notes=notes, status=LoadStatus.LOADED)

    def save(self, notes: list[Note]) -> None:
        """
        Replace the persisted collection with notes.

        Failures are logged at error level and not raised.

        Args:
            notes: Full collection to persist
        """
        try:
            payload = NoteList.dump_json(notes, by_alias=True).decode("utf-8")
            self._store.set_item(self._key, payload)
        except Exception as e:
            log_with_source(
                self._logger,
                "repository",
                "error",
                "Failed to save notes to store",
                extra={"key": self._key, "count": len(notes), "error": str(e)},
            )

    def clear(self) -> None:
        """
        Remove the persisted collection.

        Failures are logged at error level and not raised.
        """
        try:
            self._store.remove_item(self._key)
        except Exception as e:
            log_with_source(
                self._logger,
                "repository",
                "error",
                "Failed to clear notes from store",
                extra={"key": self._key, "error": str(e)},
            )
