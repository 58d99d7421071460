"""Unit tests for the Flask-JWT-Extended access token codec."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from flask_jwt_extended import create_refresh_token
from freezegun import freeze_time
from keepnotes.infra.jwt.flask_jwt_token_codec import JWTAccessTokenCodec
from keepnotes.services._shared.errors import InvalidTokenError

TTL = timedelta(minutes=15)


@pytest.fixture()
def codec(app):
    with app.app_context():
        yield JWTAccessTokenCodec(ttl=TTL)


def test_issue_then_verify_returns_claims(codec):
    token = codec.issue(user_id=42, email="a@b.com")
    claims = codec.verify(token)
    assert claims.user_id == 42
    assert claims.email == "a@b.com"
    assert claims.expires_at - claims.issued_at == TTL


def test_token_is_valid_until_ttl_and_invalid_after(codec):
    with freeze_time("2026-01-01 12:00:00") as frozen:
        token = codec.issue(user_id=1, email="a@b.com")

        frozen.tick(TTL - timedelta(seconds=1))
        assert codec.verify(token).user_id == 1

        frozen.tick(timedelta(seconds=2))
        with pytest.raises(InvalidTokenError):
            codec.verify(token)


def test_tampered_token_is_rejected(codec):
    token = codec.issue(user_id=1, email="a@b.com")
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])
    with pytest.raises(InvalidTokenError):
        codec.verify(forged)


def test_token_signed_with_another_key_is_rejected(codec):
    foreign = jwt.encode(
        {"sub": "1", "type": "access", "user_id": 1, "email": "a@b.com"},
        "another-secret-key-that-is-long-enough-0123456789",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenError):
        codec.verify(foreign)


@pytest.mark.parametrize("garbage", ["", "not.a.jwt", "abc"])
def test_malformed_tokens_are_rejected(codec, garbage):
    with pytest.raises(InvalidTokenError):
        codec.verify(garbage)


def test_refresh_type_jwt_is_rejected(codec):
    token = create_refresh_token(identity="1", additional_claims={"user_id": 1, "email": "a@b.com"})
    with pytest.raises(InvalidTokenError):
        codec.verify(token)


def test_expired_and_malformed_raise_the_same_error(codec):
    with freeze_time("2026-01-01 12:00:00") as frozen:
        token = codec.issue(user_id=1, email="a@b.com")
        frozen.tick(TTL + timedelta(minutes=1))
        with pytest.raises(InvalidTokenError) as expired:
            codec.verify(token)
    with pytest.raises(InvalidTokenError) as malformed:
        codec.verify("abc")
    assert type(expired.value) is type(malformed.value)
    assert str(expired.value) == str(malformed.value)
