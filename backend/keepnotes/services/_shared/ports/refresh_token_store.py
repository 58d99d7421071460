from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum, auto
from typing import Protocol


class RotationResult(Enum):
    """Outcome of an atomic refresh rotation attempt."""

    OK = auto()
    NOT_FOUND = auto()
    EXPIRED = auto()
    REVOKED = auto()


@dataclass(frozen=True, slots=True)
class RefreshTokenView:
    """
    Read-model for a stored refresh token.

    :ivar token_hash: SHA-256 hex digest of the raw token.
    :ivar user_id: Owner user id.
    :ivar expires_at: Absolute expiration (UTC).
    :ivar revoked: Whether the token was superseded or logged out.
    """

    token_hash: str
    user_id: int
    expires_at: datetime
    revoked: bool


class RefreshTokenStore(Protocol):
    """
    Stateful store for refresh tokens, keyed by token hash.

    Rotation MUST be atomic: of two concurrent rotations of the same hash at
    most one returns ``RotationResult.OK``.
    """

    def register(self, *, token_hash: str, user_id: int, expires_at: datetime) -> RefreshTokenView:
        """Persist a brand-new, non-revoked token."""
        ...

    def get(self, token_hash: str) -> RefreshTokenView | None:
        """Fetch a single token snapshot (if present)."""
        ...

    def rotate(
        self,
        *,
        old_hash: str,
        new_hash: str,
        now: datetime,
        new_expires_at: datetime,
    ) -> tuple[RotationResult, RefreshTokenView | None]:
        """
        Revoke ``old_hash`` and register ``new_hash`` for the same user, atomically.

        :returns: ``(OK, new_view)`` on success, otherwise ``(failure, None)``.
        """
        ...

    def mark_revoked(self, token_hash: str) -> bool:
        """Mark a single token as revoked. :returns: True if it existed."""
        ...


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    In-memory refresh token store with atomic rotation behavior.

    .. note::
       Uses a threading lock to simulate atomicity in unit tests.
    """

    def __init__(self) -> None:
        self._by_hash: dict[str, RefreshTokenView] = {}
        self._lock = threading.Lock()

    def register(self, *, token_hash: str, user_id: int, expires_at: datetime) -> RefreshTokenView:
        view = RefreshTokenView(
            token_hash=token_hash, user_id=user_id, expires_at=expires_at, revoked=False
        )
        with self._lock:
            self._by_hash[token_hash] = view
        return view

    def get(self, token_hash: str) -> RefreshTokenView | None:
        with self._lock:
            return self._by_hash.get(token_hash)

    def rotate(
        self,
        *,
        old_hash: str,
        new_hash: str,
        now: datetime,
        new_expires_at: datetime,
    ) -> tuple[RotationResult, RefreshTokenView | None]:
        with self._lock:
            old = self._by_hash.get(old_hash)
            if old is None:
                return RotationResult.NOT_FOUND, None
            if old.revoked:
                return RotationResult.REVOKED, None
            if old.expires_at <= now:
                return RotationResult.EXPIRED, None

            self._by_hash[old_hash] = replace(old, revoked=True)
            new = RefreshTokenView(
                token_hash=new_hash,
                user_id=old.user_id,
                expires_at=new_expires_at,
                revoked=False,
            )
            self._by_hash[new_hash] = new
            return RotationResult.OK, new

    def mark_revoked(self, token_hash: str) -> bool:
        with self._lock:
            view = self._by_hash.get(token_hash)
            if view is None:
                return False
            self._by_hash[token_hash] = replace(view, revoked=True)
            return True
