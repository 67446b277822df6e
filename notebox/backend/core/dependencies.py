"""
Shared Dependencies.

Builds the configured repository and service for entry points.
Commands call these instead of wiring stores themselves, so tests can
patch a single function to substitute an in-memory store.
"""

from notebox.backend.core.config import get_app_config
from notebox.backend.core.logging import get_logger
from notebox.backend.repositories.note import NoteRepository
from notebox.backend.repositories.store import create_key_value_store
from notebox.backend.services.note import NoteService

logger = get_logger(__name__)


def get_note_repository() -> NoteRepository:
    """Create a NoteRepository over the configured store and key."""
    store = create_key_value_store()
    key = get_app_config().storage.key
    logger.debug("Note repository created", extra={"store": type(store).__name__, "key": key})
    return NoteRepository(store, key=key)


def get_note_service() -> NoteService:
    """Create a NoteService bound to the configured repository."""
    return NoteService(get_note_repository())
