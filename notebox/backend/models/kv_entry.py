"""
Key-Value Entry Model.

Database model backing the SQL key-value store. Each row holds one
opaque string value under a unique key.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notebox.backend.models.base import Base, TimestampMixin


class KeyValueEntry(TimestampMixin, Base):
    """
    Key-value entry database model.

    The note collection is stored as a single entry under the
    configured key (``notes.v1``).
    """

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
    )
    value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntry(key={self.key!r}, size={len(self.value)})>"
