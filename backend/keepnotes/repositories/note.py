"""Note repository scoped by owner."""

from __future__ import annotations

from sqlalchemy import select

from keepnotes.models.note import Note
from keepnotes.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """Persistence-only repository for :class:`Note`."""

    model = Note

    def _updatable_fields(self) -> set[str]:
        return {"title", "content"}

    def list_for_owner(self, owner_id: int) -> list[Note]:
        """Return the owner's notes, newest first (id breaks timestamp ties)."""
        stmt = (
            select(Note)
            .where(Note.owner_id == owner_id)
            .order_by(Note.created_at.desc(), Note.id.desc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def get_owned(self, note_id: int, owner_id: int) -> Note | None:
        """Return the note only if ``owner_id`` owns it."""
        stmt = select(Note).where(Note.id == note_id, Note.owner_id == owner_id)
        return self.session.execute(stmt).scalars().first()
