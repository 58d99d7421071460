"""Note model owned by a single user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from keepnotes.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User

TITLE_MAX_LENGTH = 255


class Note(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """A titled free-text note. Visible only to its owner."""

    __tablename__ = "notes"

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")

    owner: Mapped[User] = relationship(back_populates="notes")

    @validates("title")
    def _validate_title(self, key: str, value: str) -> str:
        """
        Trim the title and enforce presence and length.

        :raises ValueError: If blank or longer than 255 characters.
        """
        v = (value or "").strip()
        if not v:
            raise ValueError("Title is required.")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title must be at most {TITLE_MAX_LENGTH} characters.")
        return v

    @validates("content")
    def _validate_content(self, key: str, value: str | None) -> str:
        return value or ""
