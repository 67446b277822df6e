"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Store Configuration:
    Tests never touch the configured store. Unit tests use the in-memory
    key-value store; integration tests point NOTEBOX_STORAGE_URL at a
    SQLite file under tmp_path.
"""

from collections.abc import Callable, Iterator
from itertools import count

import pytest

from notebox.backend.repositories.note import NoteRepository
from notebox.backend.repositories.store import InMemoryKeyValueStore
from notebox.backend.schemas.note import Note


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
def sample_notes() -> list[Note]:
    """
    Three notes created an hour apart, the middle one done.

    Order is creation order (oldest first).
    """
    return [
        Note(id="1", text="Buy groceries", done=False, created_at="2023-01-01T10:00:00.000Z"),
        Note(id="2", text="Walk the dog", done=True, created_at="2023-01-01T11:00:00.000Z"),
        Note(id="3", text="Finish project", done=False, created_at="2023-01-01T12:00:00.000Z"),
    ]


# =============================================================================
# Deterministic Collaborators
# =============================================================================


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Sequential ids: note-1, note-2, ..."""
    counter = count(1)
    return lambda: f"note-{next(counter)}"


@pytest.fixture
def clock() -> Callable[[], str]:
    """Clock that advances one second per call from 2024-01-01T00:00:00Z."""
    counter = count(0)
    return lambda: f"2024-01-01T00:00:{next(counter):02d}.000Z"


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def note_repository(memory_store: InMemoryKeyValueStore) -> NoteRepository:
    """NoteRepository over the in-memory store."""
    return NoteRepository(memory_store)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """
    Clear lru_cache on config accessors and drop the cached engine.

    Use in tests that change config/settings or NOTEBOX_* variables.
    """
    from notebox.backend.core.config import get_app_config, get_settings
    from notebox.backend.core.database import dispose_engine

    get_settings.cache_clear()
    get_app_config.cache_clear()
    dispose_engine()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()
    dispose_engine()
