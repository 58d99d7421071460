"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AuthResponseSchema,
    LoginSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from .notes import NoteCreateSchema, NoteSchema, NoteUpdateSchema

__all__ = [
    "AuthResponseSchema",
    "LoginSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "UserSchema",
    "NoteCreateSchema",
    "NoteSchema",
    "NoteUpdateSchema",
]
