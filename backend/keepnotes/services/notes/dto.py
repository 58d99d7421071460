# keepnotes/services/notes/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from keepnotes.models.note import Note


@dataclass(frozen=True, slots=True)
class NoteCreateIn:
    """
    Input DTO for note creation.

    :param owner_id: Authenticated user creating the note.
    :param title: Required, at most 255 characters.
    :param content: Free text; may be empty.
    """

    owner_id: int
    title: str
    content: str = ""


@dataclass(frozen=True, slots=True)
class NoteUpdateIn:
    """
    Partial update. ``None`` means "leave unchanged"; at least one field must be set.
    """

    owner_id: int
    note_id: int
    title: str | None = None
    content: str | None = None

    def changes(self) -> dict[str, str]:
        fields = {"title": self.title, "content": self.content}
        return {k: v for k, v in fields.items() if v is not None}


@dataclass(frozen=True, slots=True)
class NoteOut:
    id: int
    title: str
    content: str
    owner_id: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, note: Note) -> NoteOut:
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            owner_id=note.owner_id,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )
