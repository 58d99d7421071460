"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from keepnotes.repositories.base import BaseRepository
from keepnotes.repositories.note import NoteRepository
from keepnotes.repositories.refresh_token import RefreshTokenRepository
from keepnotes.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "NoteRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
