"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real SQLite file and real services.
"""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture
def sqlite_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clear_config_cache: None) -> str:
    """
    Point the configured store at a SQLite file under tmp_path.

    Usage:
        def test_persists(sqlite_url):
            runner.invoke(app, ["notes", "add", "Buy milk"])
    """
    url = f"sqlite:///{tmp_path / 'notes.db'}"
    monkeypatch.setenv("NOTEBOX_STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("NOTEBOX_STORAGE_URL", url)
    return url


@pytest.fixture
def fresh_process(clear_config_cache: None):
    """
    Drop cached config and engine, as if the CLI were started again.

    Returns a callable to invoke between CLI runs.
    """
    from notebox.backend.core.config import get_app_config, get_settings
    from notebox.backend.core.database import dispose_engine

    def restart() -> None:
        get_settings.cache_clear()
        get_app_config.cache_clear()
        dispose_engine()

    return restart


@pytest.fixture(autouse=True)
def _no_logging_setup() -> Iterator[None]:
    """Keep the CLI callback from reconfiguring root logging."""
    with patch("notebox.backend.core.logging.setup_logging"):
        yield
