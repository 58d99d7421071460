"""Repository for refresh token records."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import select, update

from keepnotes.models.refresh_token import RefreshToken
from keepnotes.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only access to :class:`RefreshToken` rows, keyed by hash."""

    model = RefreshToken

    def create(self, *, token_hash: str, user_id: int, expires_at: datetime) -> RefreshToken:
        """Insert a new, non-revoked record and flush it."""
        return self.add(
            RefreshToken(
                token_hash=token_hash,
                user_id=user_id,
                expires_at=expires_at,
                revoked=False,
            )
        )

    def get_by_hash(self, token_hash: str) -> RefreshToken | None:
        stmt = select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def revoke_if_active(self, record_id: int) -> bool:
        """
        Flip ``revoked`` to ``True`` only if it is still ``False``.

        Runs as a single conditional ``UPDATE`` so that of two concurrent
        callers at most one observes ``True``.

        :returns: ``True`` if this call performed the revocation.
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.id == record_id, RefreshToken.revoked.is_(False))
            .values(revoked=True)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return bool(result.rowcount)
