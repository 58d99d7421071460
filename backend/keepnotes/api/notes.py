"""Note CRUD endpoints, scoped to the authenticated user."""

from __future__ import annotations

from flask import Blueprint

from keepnotes.api.deps import (
    current_identity,
    get_note_service,
    json_body,
    json_response,
    require_auth,
    timing,
)
from keepnotes.schemas import NoteCreateSchema, NoteSchema, NoteUpdateSchema
from keepnotes.services.notes.dto import NoteCreateIn, NoteUpdateIn

bp = Blueprint("notes", __name__)

create_schema = NoteCreateSchema()
update_schema = NoteUpdateSchema()
note_schema = NoteSchema()
notes_schema = NoteSchema(many=True)


@bp.post("")
@require_auth
@timing
def create_note():
    data = create_schema.load(json_body())
    note = get_note_service().create(
        NoteCreateIn(owner_id=current_identity().user_id, **data)
    )
    return json_response(note_schema.dump(note), status=201)


@bp.get("")
@require_auth
@timing
def list_notes():
    """Return the caller's notes as a bare JSON list, newest first."""

    notes = get_note_service().list_for_owner(current_identity().user_id)
    return json_response(notes_schema.dump(notes))


@bp.get("/<int:note_id>")
@require_auth
@timing
def get_note(note_id: int):
    note = get_note_service().get(owner_id=current_identity().user_id, note_id=note_id)
    return json_response(note_schema.dump(note))


@bp.put("/<int:note_id>")
@require_auth
@timing
def update_note(note_id: int):
    data = update_schema.load(json_body())
    note = get_note_service().update(
        NoteUpdateIn(owner_id=current_identity().user_id, note_id=note_id, **data)
    )
    return json_response(note_schema.dump(note))


@bp.delete("/<int:note_id>")
@require_auth
@timing
def delete_note(note_id: int):
    get_note_service().delete(owner_id=current_identity().user_id, note_id=note_id)
    return json_response({"message": "Note deleted successfully"})
