# keepnotes/infra/sqlalchemy/refresh_token_store.py
from __future__ import annotations

from datetime import datetime

from keepnotes.models.base import as_utc
from keepnotes.models.refresh_token import RefreshToken
from keepnotes.services._shared.ports import (
    RefreshTokenStore,
    RefreshTokenView,
    RotationResult,
)
from keepnotes.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


def _view(record: RefreshToken) -> RefreshTokenView:
    return RefreshTokenView(
        token_hash=record.token_hash,
        user_id=record.user_id,
        expires_at=as_utc(record.expires_at),
        revoked=record.revoked,
    )


class SQLAlchemyRefreshTokenStore(RefreshTokenStore):
    """
    Relational refresh token store.

    Each call runs in its own read-write unit of work. Rotation revokes the
    old row with a conditional ``UPDATE ... WHERE revoked = false`` and
    inserts the successor in the same transaction; a zero rowcount means a
    concurrent rotation or logout got there first.

    .. note::
       Requires an active Flask app context (Flask-SQLAlchemy session).
    """

    def register(self, *, token_hash: str, user_id: int, expires_at: datetime) -> RefreshTokenView:
        with SQLAlchemyUnitOfWork() as uow:
            record = uow.refresh_tokens.create(
                token_hash=token_hash, user_id=user_id, expires_at=expires_at
            )
            return _view(record)

    def get(self, token_hash: str) -> RefreshTokenView | None:
        with SQLAlchemyUnitOfWork() as uow:
            record = uow.refresh_tokens.get_by_hash(token_hash)
            return _view(record) if record is not None else None

    def rotate(
        self,
        *,
        old_hash: str,
        new_hash: str,
        now: datetime,
        new_expires_at: datetime,
    ) -> tuple[RotationResult, RefreshTokenView | None]:
        with SQLAlchemyUnitOfWork() as uow:
            repo = uow.refresh_tokens
            old = repo.get_by_hash(old_hash)
            if old is None:
                return RotationResult.NOT_FOUND, None
            if old.revoked:
                return RotationResult.REVOKED, None
            if as_utc(old.expires_at) <= now:
                return RotationResult.EXPIRED, None

            user_id = old.user_id
            if not repo.revoke_if_active(old.id):
                # Lost the race against another rotation or a logout
                return RotationResult.REVOKED, None

            new = repo.create(token_hash=new_hash, user_id=user_id, expires_at=new_expires_at)
            return RotationResult.OK, _view(new)

    def mark_revoked(self, token_hash: str) -> bool:
        with SQLAlchemyUnitOfWork() as uow:
            record = uow.refresh_tokens.get_by_hash(token_hash)
            if record is None:
                return False
            uow.refresh_tokens.revoke_if_active(record.id)
            return True
