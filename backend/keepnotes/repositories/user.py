"""User repository for persistence and credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from keepnotes.models.user import User
from keepnotes.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Emails are matched exactly as stored (case-sensitive, surrounding
    whitespace trimmed). Password checks and token issuing live in the auth service.
    """

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email.

        :param email: Email address to search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.strip())
        return bool(self.session.execute(stmt).first())

