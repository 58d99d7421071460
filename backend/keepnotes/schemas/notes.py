"""Note Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema

from keepnotes.models.note import TITLE_MAX_LENGTH

_title_length = validate.Length(min=1, max=TITLE_MAX_LENGTH)


class NoteCreateSchema(Schema):
    """Input payload for creating a note."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=_title_length)
    content = fields.String(load_default="")


class NoteUpdateSchema(Schema):
    """Partial update; at least one field is required."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(validate=_title_length)
    content = fields.String()

    @validates_schema
    def require_one_field(self, data: dict[str, Any], **_: Any) -> None:
        if "title" not in data and "content" not in data:
            raise ValidationError("At least one field (title or content) must be provided.")


class NoteSchema(Schema):
    """Public note representation."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    content = fields.String()
    user_id = fields.Integer(attribute="owner_id")
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
