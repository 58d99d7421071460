"""Tests for :class:`RefreshTokenRepository`."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from keepnotes.repositories.refresh_token import RefreshTokenRepository
from sqlalchemy.exc import IntegrityError

from tests.factories.user import UserFactory

EXPIRES = datetime(2026, 1, 8, tzinfo=UTC)


class TestRefreshTokenRepository:
    def test_create_and_get_by_hash(self, db, session):
        user = UserFactory()
        repo = RefreshTokenRepository(session)

        record = repo.create(token_hash="a" * 64, user_id=user.id, expires_at=EXPIRES)
        session.commit()

        found = repo.get_by_hash("a" * 64)
        assert found is not None
        assert found.id == record.id
        assert found.revoked is False
        assert found.created_at is not None

    def test_token_hash_is_unique(self, db, session):
        user = UserFactory()
        repo = RefreshTokenRepository(session)
        repo.create(token_hash="a" * 64, user_id=user.id, expires_at=EXPIRES)

        with pytest.raises(IntegrityError):
            repo.create(token_hash="a" * 64, user_id=user.id, expires_at=EXPIRES)
        session.rollback()

    def test_revoke_if_active_succeeds_only_once(self, db, session):
        user = UserFactory()
        repo = RefreshTokenRepository(session)
        record = repo.create(token_hash="a" * 64, user_id=user.id, expires_at=EXPIRES)

        assert repo.revoke_if_active(record.id) is True
        assert repo.revoke_if_active(record.id) is False
        session.commit()

        assert repo.get_by_hash("a" * 64).revoked is True
