"""Opaque refresh tokens: issue, validate, rotate and revoke.

Raw tokens are 64 random bytes, URL-safe encoded. Only their SHA-256 hex
digest reaches the store, so a leaked table cannot be replayed.
"""

from __future__ import annotations

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

from keepnotes.services._shared.errors import (
    RefreshTokenExpiredOrRevokedError,
    RefreshTokenNotFoundError,
)
from keepnotes.services._shared.ports import (
    RefreshTokenStore,
    RefreshTokenView,
    RotationResult,
)
from keepnotes.services.auth.dto import IssuedRefreshToken

TOKEN_BYTES = 64


class RefreshTokenManager:
    """
    Refresh token lifecycle on top of a :class:`RefreshTokenStore`.

    Holds no token state of its own; every check goes to the store.

    :param store: Persistence port (relational in production, in-memory in tests).
    :param ttl: Lifetime of each issued token.
    """

    def __init__(self, *, store: RefreshTokenStore, ttl: timedelta) -> None:
        self.store = store
        self.ttl = ttl

    @staticmethod
    def generate() -> str:
        return secrets.token_urlsafe(TOKEN_BYTES)

    @staticmethod
    def hash_token(raw: str) -> str:
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    def issue(self, user_id: int, *, now: datetime | None = None) -> IssuedRefreshToken:
        """Create and persist a new token for ``user_id``; return the raw value."""
        now = now or datetime.now(UTC)
        raw = self.generate()
        view = self.store.register(
            token_hash=self.hash_token(raw),
            user_id=user_id,
            expires_at=now + self.ttl,
        )
        return IssuedRefreshToken(token=raw, user_id=view.user_id, expires_at=view.expires_at)

    def validate(self, raw: str | None, *, now: datetime | None = None) -> RefreshTokenView:
        """
        Return the stored record for ``raw`` if it is still usable.

        :raises RefreshTokenNotFoundError: No record matches.
        :raises RefreshTokenExpiredOrRevokedError: Record revoked or ``expires_at <= now``.
        """
        if not raw:
            raise RefreshTokenNotFoundError()
        now = now or datetime.now(UTC)
        view = self.store.get(self.hash_token(raw))
        if view is None:
            raise RefreshTokenNotFoundError()
        if view.revoked or view.expires_at <= now:
            raise RefreshTokenExpiredOrRevokedError()
        return view

    def rotate(self, raw: str | None, *, now: datetime | None = None) -> IssuedRefreshToken:
        """
        Revoke ``raw`` and issue its successor for the same user.

        Both steps happen in one store transaction. When two callers rotate
        the same token concurrently, the loser gets
        :class:`RefreshTokenExpiredOrRevokedError`.
        """
        if not raw:
            raise RefreshTokenNotFoundError()
        now = now or datetime.now(UTC)
        new_raw = self.generate()
        result, view = self.store.rotate(
            old_hash=self.hash_token(raw),
            new_hash=self.hash_token(new_raw),
            now=now,
            new_expires_at=now + self.ttl,
        )
        if result is RotationResult.NOT_FOUND:
            raise RefreshTokenNotFoundError()
        if result is not RotationResult.OK or view is None:
            raise RefreshTokenExpiredOrRevokedError()
        return IssuedRefreshToken(token=new_raw, user_id=view.user_id, expires_at=view.expires_at)

    def revoke(self, raw: str | None) -> bool:
        """
        Revoke ``raw`` if it exists.

        :returns: ``True`` when a record was found. Unknown tokens are not an error.
        """
        if not raw:
            return False
        return self.store.mark_revoked(self.hash_token(raw))
