"""Unit tests for the werkzeug-backed password hasher."""

from __future__ import annotations

import pytest
from keepnotes.security.passwords import (
    DEFAULT_MAX_LENGTH,
    PasswordHasher,
    PasswordPolicyError,
    hasher_from_config,
)


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PasswordHasher(method="pbkdf2:sha256:1000")


def test_verify_accepts_the_hashed_password(hasher):
    digest = hasher.hash("correct horse")
    assert hasher.verify("correct horse", digest) is True


def test_verify_rejects_a_wrong_password(hasher):
    digest = hasher.hash("correct horse")
    assert hasher.verify("battery staple", digest) is False


def test_hash_is_salted(hasher):
    assert hasher.hash("same") != hasher.hash("same")


def test_digest_does_not_contain_plaintext(hasher):
    assert "s3cr3t-value" not in hasher.hash("s3cr3t-value")


def test_max_length_password_is_accepted(hasher):
    pw = "a" * DEFAULT_MAX_LENGTH
    assert hasher.verify(pw, hasher.hash(pw)) is True


def test_over_long_password_is_rejected_on_hash(hasher):
    with pytest.raises(PasswordPolicyError):
        hasher.hash("a" * (DEFAULT_MAX_LENGTH + 1))


def test_over_long_candidate_never_verifies(hasher):
    """A long candidate sharing the stored password as prefix must not match."""
    pw = "a" * DEFAULT_MAX_LENGTH
    digest = hasher.hash(pw)
    assert hasher.verify(pw + "b", digest) is False


def test_empty_password_is_rejected_on_hash(hasher):
    with pytest.raises(PasswordPolicyError):
        hasher.hash("")


@pytest.mark.parametrize("digest", ["", None, "not-a-hash", "unknown$salt$value"])
def test_verify_returns_false_for_malformed_digests(hasher, digest):
    assert hasher.verify("anything", digest) is False


def test_hasher_from_config_follows_app_config(app):
    hasher = hasher_from_config(app.config)
    assert hasher.method == app.config["PASSWORD_HASH_METHOD"]
    assert hasher.max_length == app.config["PASSWORD_MAX_LENGTH"]


def test_hasher_from_config_defaults_to_scrypt():
    hasher = hasher_from_config({})
    assert hasher.method == "scrypt"
    assert hasher.max_length == DEFAULT_MAX_LENGTH
