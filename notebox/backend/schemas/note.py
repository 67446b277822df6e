"""
Note Schemas.

Pydantic schemas for the note entity, its persisted representation,
query options, statistics and repository load results.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from notebox.backend.core.utils import parse_timestamp


class Note(BaseModel):
    """
    A single note.

    Immutable: status changes produce a new Note via toggle_note().
    Serialized with camelCase ``createdAt`` so persisted records carry
    exactly the fields id, text, done, createdAt.
    """

    id: str = Field(description="Opaque unique identifier")
    text: str = Field(description="Note text, trimmed at creation")
    done: bool = Field(description="Completion flag")
    created_at: str = Field(
        alias="createdAt",
        description="Creation instant, ISO 8601 UTC with millisecond precision",
        examples=["2023-01-01T10:00:00.000Z"],
    )

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
    )

    @field_validator("created_at")
    @classmethod
    def _validate_created_at(cls, value: str) -> str:
        parse_timestamp(value)
        return value


NoteList = TypeAdapter(list[Note])
"""Serializer for a whole note collection (the persisted payload)."""


class SortCriterion(str, Enum):
    """Ordering applied by sort_notes()."""

    DATE = "date"
    ALPHABETICAL = "alphabetical"
    STATUS = "status"


class StatusFilter(str, Enum):
    """Subset selected by filter_notes_by_status()."""

    ALL = "all"
    OPEN = "open"
    DONE = "done"


class NoteStats(BaseModel):
    """Aggregate statistics over a note collection."""

    total: int = Field(description="Number of notes")
    completed: int = Field(description="Number of done notes")
    pending: int = Field(description="Number of open notes")
    completion_rate: int = Field(
        alias="completionRate",
        description="Percentage of done notes, rounded half up",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LoadStatus(str, Enum):
    """Why a repository load produced the notes it did."""

    LOADED = "loaded"
    EMPTY = "empty"
    CORRUPTED = "corrupted"
    UNAVAILABLE = "unavailable"


class LoadResult(BaseModel):
    """Notes returned by a repository load plus the reason for the outcome."""

    notes: list[Note]
    status: LoadStatus

    model_config = ConfigDict(frozen=True)

    @property
    def degraded(self) -> bool:
        """True when data existed or may exist but could not be read."""
        return self.status in (LoadStatus.CORRUPTED, LoadStatus.UNAVAILABLE)
