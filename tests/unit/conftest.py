"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching the configured store.
"""

from unittest.mock import MagicMock

import pytest


# =============================================================================
# Store Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_store() -> MagicMock:
    """
    Mock key-value store for unit tests.

    Usage:
        def test_repository(mock_store: MagicMock):
            mock_store.get_item.side_effect = StorageError("Access denied")
            repo = NoteRepository(mock_store)
    """
    store = MagicMock()
    store.get_item = MagicMock(return_value=None)
    store.set_item = MagicMock(return_value=None)
    store.remove_item = MagicMock(return_value=None)
    return store


@pytest.fixture
def mock_repository() -> MagicMock:
    """
    Mock NoteRepository.

    Usage:
        def test_service(mock_repository):
            mock_repository.load.return_value = [note]
            service = NoteService(mock_repository)
    """
    repository = MagicMock()
    repository.load = MagicMock(return_value=[])
    repository.save = MagicMock(return_value=None)
    repository.clear = MagicMock(return_value=None)
    return repository
