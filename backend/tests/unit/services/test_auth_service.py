# tests/unit/services/test_auth_service.py
from __future__ import annotations

from datetime import timedelta

import pytest
from keepnotes.infra.jwt.flask_jwt_token_codec import JWTAccessTokenCodec
from keepnotes.models.user import User
from keepnotes.security.passwords import PasswordHasher
from keepnotes.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InvalidInputError,
    InvalidTokenError,
    NotFoundError,
)
from keepnotes.services._shared.ports import InMemoryRefreshTokenStore
from keepnotes.services.auth.dto import (
    AuthResultOut,
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RegisterIn,
)
from keepnotes.services.auth.refresh_tokens import RefreshTokenManager
from keepnotes.services.auth.service import AuthService
from sqlalchemy.exc import OperationalError

from tests.factories.user import UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


@pytest.fixture()
def service(db, store) -> AuthService:
    """AuthService wired to the real JWT codec and an in-memory refresh store."""
    cfg = AuthTokenConfig(access_expires=timedelta(minutes=15), refresh_expires=timedelta(days=7))
    return AuthService(
        codec=JWTAccessTokenCodec(ttl=cfg.access_expires),
        refresh_tokens=RefreshTokenManager(store=store, ttl=cfg.refresh_expires),
        hasher=PasswordHasher(method="pbkdf2:sha256:1000"),
        token_cfg=cfg,
    )


# ------------------------------ Register ---------------------------------- #
def test_register_creates_user_and_signs_in(service):
    result = service.register(RegisterIn(email="a@b.com", password="secret1"))

    assert isinstance(result, AuthResultOut)
    assert result.access_token and result.refresh_token
    assert result.user.email == "a@b.com"
    assert service.authenticate_bearer(result.access_token).user_id == result.user.id


def test_register_then_login(service):
    service.register(RegisterIn(email="a@b.com", password="secret1"))
    result = service.login(LoginIn(email="a@b.com", password="secret1"))
    assert result.user.email == "a@b.com"


def test_register_duplicate_email_conflicts(service):
    service.register(RegisterIn(email="a@b.com", password="secret1"))
    with pytest.raises(ConflictError):
        service.register(RegisterIn(email="a@b.com", password="other-pass"))


def test_register_rejects_over_long_password(service):
    with pytest.raises(InvalidInputError):
        service.register(RegisterIn(email="a@b.com", password="x" * 129))


def test_register_never_stores_plaintext(service, session):
    result = service.register(RegisterIn(email="a@b.com", password="secret1"))
    user = session.get(User, result.user.id)
    assert user.password_hash != "secret1"
    assert "secret1" not in user.password_hash


# -------------------------------- Login ----------------------------------- #
def test_login_wrong_password_and_unknown_email_fail_alike(service):
    UserFactory(email="a@b.com", password="secret1")

    with pytest.raises(AuthenticationError) as wrong:
        service.login(LoginIn(email="a@b.com", password="nope"))
    with pytest.raises(AuthenticationError) as unknown:
        service.login(LoginIn(email="missing@b.com", password="secret1"))

    assert str(wrong.value) == str(unknown.value)


def test_login_email_is_case_sensitive(service):
    UserFactory(email="a@b.com", password="secret1")
    with pytest.raises(AuthenticationError):
        service.login(LoginIn(email="A@B.com", password="secret1"))


def test_login_registers_one_refresh_token(service, store):
    UserFactory(email="a@b.com", password="secret1")
    result = service.login(LoginIn(email="a@b.com", password="secret1"))

    view = store.get(RefreshTokenManager.hash_token(result.refresh_token))
    assert view is not None
    assert view.user_id == result.user.id
    assert view.revoked is False


# ------------------------------- Refresh ---------------------------------- #
def test_refresh_rotates_and_blocks_replay(service):
    first = service.register(RegisterIn(email="a@b.com", password="secret1"))

    second = service.refresh(RefreshIn(refresh_token=first.refresh_token))
    assert second.refresh_token != first.refresh_token
    assert service.authenticate_bearer(second.access_token).email == "a@b.com"

    with pytest.raises(AuthenticationError):
        service.refresh(RefreshIn(refresh_token=first.refresh_token))

    third = service.refresh(RefreshIn(refresh_token=second.refresh_token))
    assert third.refresh_token not in {first.refresh_token, second.refresh_token}


@pytest.mark.parametrize("token", [None, "", "never-issued"])
def test_refresh_with_missing_or_unknown_token_is_unauthorized(service, token):
    with pytest.raises(AuthenticationError):
        service.refresh(RefreshIn(refresh_token=token))


def test_refresh_after_logout_is_unauthorized(service):
    result = service.register(RegisterIn(email="a@b.com", password="secret1"))
    service.logout(LogoutIn(refresh_token=result.refresh_token))

    with pytest.raises(AuthenticationError):
        service.refresh(RefreshIn(refresh_token=result.refresh_token))


# -------------------------------- Logout ---------------------------------- #
@pytest.mark.parametrize("token", [None, "", "never-issued"])
def test_logout_never_fails(service, token):
    service.logout(LogoutIn(refresh_token=token))


def test_logout_swallows_store_failures(service, store, monkeypatch):
    def _boom(token_hash):
        raise OperationalError("UPDATE refresh_tokens", {}, Exception("db down"))

    monkeypatch.setattr(store, "mark_revoked", _boom)
    service.logout(LogoutIn(refresh_token="anything"))


@pytest.mark.parametrize("error", [RuntimeError("store unreachable"), TimeoutError()])
def test_logout_swallows_any_store_failure(service, store, monkeypatch, caplog, error):
    def _boom(token_hash):
        raise error

    monkeypatch.setattr(store, "mark_revoked", _boom)
    service.logout(LogoutIn(refresh_token="anything"))

    assert any(r.getMessage() == "auth.logout.revoke_failed" for r in caplog.records)


# --------------------------------- Gate ----------------------------------- #
def test_authenticate_bearer_accepts_with_and_without_prefix(service):
    result = service.register(RegisterIn(email="a@b.com", password="secret1"))

    with_prefix = service.authenticate_bearer(f"Bearer {result.access_token}")
    bare = service.authenticate_bearer(result.access_token)

    assert with_prefix == bare
    assert with_prefix.user_id == result.user.id
    assert with_prefix.email == "a@b.com"


@pytest.mark.parametrize("header", [None, "", "Bearer ", "Bearer garbage", "Basic abc"])
def test_authenticate_bearer_rejects_invalid_headers(service, header):
    with pytest.raises(InvalidTokenError):
        service.authenticate_bearer(header)


def test_whoami(service):
    result = service.register(RegisterIn(email="a@b.com", password="secret1"))
    assert service.whoami(result.user.id).email == "a@b.com"
    with pytest.raises(NotFoundError):
        service.whoami(999_999)
