# Pydantic schemas package
from notebox.backend.schemas.note import (
    LoadResult,
    LoadStatus,
    Note,
    NoteList,
    NoteStats,
    SortCriterion,
    StatusFilter,
)

__all__ = [
    "LoadResult",
    "LoadStatus",
    "Note",
    "NoteList",
    "NoteStats",
    "SortCriterion",
    "StatusFilter",
]
