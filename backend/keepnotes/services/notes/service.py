# keepnotes/services/notes/service.py
from __future__ import annotations

import logging

from keepnotes.core.logger import log_event
from keepnotes.models.note import Note
from keepnotes.services._shared.base import BaseService
from keepnotes.services._shared.errors import InvalidInputError, NotFoundError
from keepnotes.services.notes.dto import NoteCreateIn, NoteOut, NoteUpdateIn

logger = logging.getLogger(__name__)


class NoteService(BaseService):
    """
    CRUD over notes, scoped to the owner.

    A note owned by someone else is reported exactly like a missing one
    (:class:`NotFoundError`), so ids of other users' notes are not disclosed.
    """

    def create(self, dto: NoteCreateIn) -> NoteOut:
        try:
            note = Note(owner_id=dto.owner_id, title=dto.title, content=dto.content)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        with self.rw_uow() as uow:
            uow.notes.add(note)
            out = NoteOut.from_model(note)

        log_event(logger, "notes.create", user_id=dto.owner_id, note_id=out.id)
        return out

    def list_for_owner(self, owner_id: int) -> list[NoteOut]:
        """Return the caller's notes, newest first."""
        with self.ro_uow() as uow:
            return [NoteOut.from_model(n) for n in uow.notes.list_for_owner(owner_id)]

    def get(self, *, owner_id: int, note_id: int) -> NoteOut:
        """:raises NotFoundError: If absent or not owned by ``owner_id``."""
        with self.ro_uow() as uow:
            note = uow.notes.get_owned(note_id, owner_id)
            if note is None:
                raise NotFoundError("Note", note_id)
            return NoteOut.from_model(note)

    def update(self, dto: NoteUpdateIn) -> NoteOut:
        """
        Apply a partial update.

        :raises InvalidInputError: If neither ``title`` nor ``content`` is given,
            or the new title is blank or too long.
        :raises NotFoundError: If absent or not owned.
        """
        changes = dto.changes()
        if not changes:
            raise InvalidInputError("Provide at least one of: title, content.")

        with self.rw_uow() as uow:
            note = uow.notes.get_owned(dto.note_id, dto.owner_id)
            if note is None:
                raise NotFoundError("Note", dto.note_id)
            try:
                uow.notes.assign_updates(note, changes)
            except ValueError as exc:
                raise InvalidInputError(str(exc)) from exc
            out = NoteOut.from_model(note)

        log_event(logger, "notes.update", user_id=dto.owner_id, note_id=out.id)
        return out

    def delete(self, *, owner_id: int, note_id: int) -> None:
        """:raises NotFoundError: If absent or not owned."""
        with self.rw_uow() as uow:
            note = uow.notes.get_owned(note_id, owner_id)
            if note is None:
                raise NotFoundError("Note", note_id)
            uow.notes.delete(note)

        log_event(logger, "notes.delete", user_id=owner_id, note_id=note_id)
