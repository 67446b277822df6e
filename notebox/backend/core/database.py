"""
Database Configuration.

SQLAlchemy engine management for the SQL key-value store.
Uses lazy initialization to prevent import-time failures when the
configuration is not available.
"""

from pathlib import Path
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

from notebox.backend.core.logging import get_logger
from notebox.backend.models.base import Base
from notebox.backend.models.kv_entry import KeyValueEntry  # noqa: F401  (registers kv_entries)

logger = get_logger(__name__)

# Module-level state for lazy initialization
_engine: Engine | None = None


def _sqlite_file(engine: Engine) -> Path | None:
    """Filesystem path of a file-backed SQLite database, else None."""
    url = engine.url
    database = url.database
    if url.get_backend_name() != "sqlite" or not database or database == ":memory:":
        return None
    if database.startswith("file:"):
        return None
    return Path(database)


def create_store_engine(url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for the key-value store.

    No connection is opened here. In-memory SQLite uses a StaticPool so
    every session sees the same database.

    Args:
        url: SQLAlchemy database URL
        echo: Whether to echo SQL statements

    Returns:
        SQLAlchemy engine
    """
    parsed = make_url(url)
    kwargs: dict[str, Any] = {"echo": echo}

    if parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_engine(url, **kwargs)
    logger.debug("Store engine created", extra={"backend": parsed.get_backend_name()})
    return engine


def init_store_schema(engine: Engine) -> None:
    """
    Make sure the kv_entries table exists.

    File-backed SQLite databases get their parent directory created first.

    Raises:
        OSError: If the database directory cannot be created
        SQLAlchemyError: If the database cannot be opened or written
    """
    path = _sqlite_file(engine)
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(engine)

def get_engine() -> Engine:
    """
    Get the store engine, creating it on first use.

    Returns:
        SQLAlchemy engine instance bound to the configured storage URL
    """
    global _engine
    if _engine is None:
        from notebox.backend.core.config import get_app_config, get_storage_url

        _engine = create_store_engine(
            get_storage_url(),
            echo=get_app_config().storage.echo,
        )
    return _engine


def dispose_engine() -> None:
    """Dispose the cached engine, if any."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
