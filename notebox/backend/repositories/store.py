"""
Key-Value Stores.

The persistence boundary underneath NoteRepository. A store maps string
keys to opaque string values and raises StorageError when the backing
medium refuses a read, write, or delete.

Backends:
    InMemoryKeyValueStore - process-local dict, optional byte quota
    SqlKeyValueStore      - one row per key in the kv_entries table
"""

from collections.abc import Callable
from typing import Protocol, TypeVar

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from notebox.backend.core.database import init_store_schema
from notebox.backend.core.exceptions import StorageError
from notebox.backend.core.logging import get_logger
from notebox.backend.models.kv_entry import KeyValueEntry

logger = get_logger(__name__)

T = TypeVar("T")


class KeyValueStore(Protocol):
    """Minimal string key-value store interface."""

    def get_item(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove key. Removing a missing key is not an error."""
        ...


class InMemoryKeyValueStore:
    """
    Dict-backed store.

    When quota_bytes is set, a write that would grow the total UTF-8 size
    of all keys and values beyond the quota raises StorageError and leaves
    the previous value in place.
    """

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(
                _size(k) + _size(v) for k, v in self._items.items() if k != key
            )
            if used + _size(key) + _size(value) > self.quota_bytes:
                raise StorageError(
                    f"Storage quota exceeded ({self.quota_bytes} bytes)"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


def _size(text: str) -> int:
    return len(text.encode("utf-8"))


class SqlKeyValueStore:
    """
    Store backed by a SQL database through SQLAlchemy.

    The kv_entries table is created on first use, so a database that
    cannot be opened surfaces from the first call instead of the
    constructor. Every call runs in its own short transaction. SQLAlchemy
    and filesystem errors are converted to StorageError.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(engine, expire_on_commit=False)
        self._schema_ready = False

    @property
    def engine(self) -> Engine:
        """Get the database engine."""
        return self._engine

    def _execute(self, operation: str, work: Callable[[Session], T]) -> T:
        """
        Run work inside a transaction with error handling.

        Raises:
            StorageError: If the database operation fails
        """
        try:
            if not self._schema_ready:
                init_store_schema(self._engine)
                self._schema_ready = True
            with self._session_factory.begin() as session:
                return work(session)
        except (SQLAlchemyError, OSError) as e:
            logger.debug(
                "Store operation failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise StorageError(f"Store operation failed: {operation}") from e

    def get_item(self, key: str) -> str | None:
        def work(session: Session) -> str | None:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry is not None else None

        return self._execute("get_item", work)

    def set_item(self, key: str, value: str) -> None:
        def work(session: Session) -> None:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value

        self._execute("set_item", work)

    def remove_item(self, key: str) -> None:
        def work(session: Session) -> None:
            entry = session.get(KeyValueEntry, key)
            if entry is not None:
                session.delete(entry)

        self._execute("remove_item", work)


def create_key_value_store(backend: str | None = None) -> KeyValueStore:
    """
    Create the store for the configured backend.

    Args:
        backend: 'sqlite' or 'memory'. Defaults to the configured backend.

    Returns:
        A KeyValueStore instance

    Raises:
        ValueError: If the backend name is not recognized
    """
    from notebox.backend.core.config import get_storage_backend
    from notebox.backend.core.database import get_engine

    backend = backend or get_storage_backend()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "sqlite":
        return SqlKeyValueStore(get_engine())
    raise ValueError(f"Unknown storage backend: {backend}")
