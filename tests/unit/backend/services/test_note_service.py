"""
Unit Tests for Note Service.

Tests the NoteService business logic with a mocked repository, plus a few
flows against the in-memory store.
"""

import pytest

from notebox.backend.core.exceptions import ConflictError, NotFoundError, ValidationError
from notebox.backend.repositories.note import NoteRepository
from notebox.backend.repositories.store import InMemoryKeyValueStore
from notebox.backend.schemas.note import Note
from notebox.backend.services.note import NoteService


class TestNoteServiceLoad:
    """Tests for lazy collection loading."""

    def test_loads_once_on_first_access(self, mock_repository, sample_notes):
        """Should load from the repository only once."""
        mock_repository.load.return_value = sample_notes
        service = NoteService(mock_repository)

        assert service.notes == sample_notes
        assert service.notes == sample_notes
        mock_repository.load.assert_called_once_with()

    def test_does_not_load_on_init(self, mock_repository):
        """Should not touch the repository until notes are needed."""
        NoteService(mock_repository)

        mock_repository.load.assert_not_called()


class TestNoteServiceAdd:
    """Tests for adding notes."""

    @pytest.fixture
    def service(self, mock_repository, sample_notes, id_factory, clock):
        """Create NoteService with mocked repository and fixed collaborators."""
        mock_repository.load.return_value = sample_notes
        return NoteService(mock_repository, id_factory=id_factory, clock=clock)

    def test_add_prepends_and_saves(self, service, mock_repository, sample_notes):
        """Should put the new note first and save the whole collection."""
        note = service.add("  Buy milk  ")

        assert note == Note(
            id="note-1", text="Buy milk", done=False, created_at="2024-01-01T00:00:00.000Z"
        )
        assert service.notes == [note, *sample_notes]
        mock_repository.save.assert_called_once_with([note, *sample_notes])

    def test_add_does_not_mutate_previous_collection(self, service, sample_notes):
        """Should build a new list instead of inserting into the old one."""
        before = service.notes

        service.add("Another")

        assert before == sample_notes
        assert service.notes is not before

    def test_add_blank_text_raises(self, service, mock_repository):
        """Should reject blank text and save nothing."""
        with pytest.raises(ValidationError) as exc_info:
            service.add("   ")

        assert exc_info.value.details == {"missing_fields": ["text"]}
        mock_repository.save.assert_not_called()


class TestNoteServiceFind:
    """Tests for resolving notes by id."""

    @pytest.fixture
    def service(self, mock_repository):
        mock_repository.load.return_value = [
            Note(id="abc-1", text="one", done=False, created_at="2023-01-01T10:00:00.000Z"),
            Note(id="abc-2", text="two", done=False, created_at="2023-01-01T11:00:00.000Z"),
            Note(id="xyz-3", text="three", done=True, created_at="2023-01-01T12:00:00.000Z"),
        ]
        return NoteService(mock_repository)

    def test_exact_id(self, service):
        assert service.find("abc-2").text == "two"

    def test_unique_prefix(self, service):
        assert service.find("xy").text == "three"

    def test_unknown_id_raises_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.find("nope")

    def test_empty_id_raises_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.find("")

    def test_ambiguous_prefix_raises_conflict(self, service):
        with pytest.raises(ConflictError) as exc_info:
            service.find("abc")

        assert "ambiguous" in exc_info.value.message


class TestNoteServiceToggle:
    """Tests for toggling notes."""

    @pytest.fixture
    def service(self, mock_repository, sample_notes):
        mock_repository.load.return_value = sample_notes
        return NoteService(mock_repository)

    def test_toggle_replaces_note_in_place_of_order(self, service, mock_repository, sample_notes):
        """Should swap in the toggled copy at the same position."""
        toggled = service.toggle("1")

        assert toggled.done is True
        assert [n.id for n in service.notes] == ["1", "2", "3"]
        assert service.notes[0] is toggled
        mock_repository.save.assert_called_once_with(service.notes)

    def test_toggle_leaves_original_note_untouched(self, service, sample_notes):
        service.toggle("1")

        assert sample_notes[0].done is False

    def test_toggle_unknown_raises(self, service, mock_repository):
        with pytest.raises(NotFoundError):
            service.toggle("missing")

        mock_repository.save.assert_not_called()


class TestNoteServiceDelete:
    """Tests for deleting notes."""

    @pytest.fixture
    def service(self, mock_repository, sample_notes):
        mock_repository.load.return_value = sample_notes
        return NoteService(mock_repository)

    def test_delete_removes_and_saves(self, service, mock_repository):
        removed = service.delete("2")

        assert removed.text == "Walk the dog"
        assert [n.id for n in service.notes] == ["1", "3"]
        mock_repository.save.assert_called_once_with(service.notes)

    def test_delete_unknown_raises(self, service, mock_repository):
        with pytest.raises(NotFoundError):
            service.delete("missing")

        mock_repository.save.assert_not_called()


class TestNoteServiceViewAndStats:
    """Tests for derived views."""

    @pytest.fixture
    def service(self, mock_repository, sample_notes):
        mock_repository.load.return_value = sample_notes
        return NoteService(mock_repository)

    def test_view_defaults_to_newest_first(self, service):
        assert [n.id for n in service.view()] == ["3", "2", "1"]

    def test_view_applies_search_status_and_sort(self, service):
        result = service.view(query="i", status="open", sort="alphabetical")

        assert [n.text for n in result] == ["Buy groceries", "Finish project"]

    def test_stats_cover_whole_collection(self, service):
        stats = service.stats()

        assert (stats.total, stats.completed, stats.pending, stats.completion_rate) == (3, 1, 2, 33)


class TestNoteServiceReset:
    """Tests for resetting all data."""

    def test_reset_clears_repository_and_memory(self, mock_repository, sample_notes):
        mock_repository.load.return_value = sample_notes
        service = NoteService(mock_repository)

        service.reset()

        mock_repository.clear.assert_called_once_with()
        assert service.notes == []


class TestNoteServiceWithStore:
    """Flows against a real in-memory store."""

    def test_changes_survive_a_new_session(self, memory_store, id_factory, clock):
        """A second service over the same store sees the saved collection."""
        first = NoteService(NoteRepository(memory_store), id_factory=id_factory, clock=clock)
        first.add("Buy milk")
        walk = first.add("Walk dog")
        first.toggle(walk.id)

        second = NoteService(NoteRepository(memory_store))

        assert [(n.text, n.done) for n in second.notes] == [("Walk dog", True), ("Buy milk", False)]

    def test_failed_save_keeps_memory_state(self, id_factory, clock):
        """A rejected write is logged by the repository; the session continues."""
        store = InMemoryKeyValueStore(quota_bytes=10)
        service = NoteService(NoteRepository(store), id_factory=id_factory, clock=clock)

        note = service.add("Too big for the quota")

        assert service.notes == [note]
        assert store.get_item("notes.v1") is None
