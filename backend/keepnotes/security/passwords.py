"""Password hashing built on :mod:`werkzeug.security`.

Plaintext length is capped at :data:`DEFAULT_MAX_LENGTH` characters. Longer
inputs are rejected when hashing and never verify, so two passwords sharing a
long prefix can never collide through truncation.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_METHOD = "scrypt"
DEFAULT_MAX_LENGTH = 128


class PasswordPolicyError(ValueError):
    """Raised when a plaintext password cannot be hashed (empty or too long)."""


class PasswordHasher:
    """
    Salted, adaptive one-way password hashing.

    :param method: Werkzeug method string, e.g. ``"scrypt"`` or
        ``"pbkdf2:sha256:600000"``.
    :param max_length: Longest accepted plaintext, in characters.
    """

    def __init__(self, method: str = DEFAULT_METHOD, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self.method = method
        self.max_length = int(max_length)

    def hash(self, plaintext: str) -> str:
        """
        Hash ``plaintext`` with a fresh random salt.

        :raises PasswordPolicyError: If empty or longer than ``max_length``.
        """
        if not plaintext:
            raise PasswordPolicyError("Password must not be empty.")
        if len(plaintext) > self.max_length:
            raise PasswordPolicyError(
                f"Password must be at most {self.max_length} characters."
            )
        return generate_password_hash(plaintext, method=self.method)

    def verify(self, plaintext: str, digest: str | None) -> bool:
        """
        Return ``True`` only when ``plaintext`` matches ``digest``.

        Over-long candidates and empty or malformed digests yield ``False``.
        """
        if not digest or not plaintext or len(plaintext) > self.max_length:
            return False
        try:
            return check_password_hash(digest, plaintext)
        except ValueError:
            # unknown method prefix or missing "$" separators
            return False


def hasher_from_config(config) -> PasswordHasher:
    """Build a hasher from a Flask-style config mapping."""
    return PasswordHasher(
        method=config.get("PASSWORD_HASH_METHOD", DEFAULT_METHOD),
        max_length=config.get("PASSWORD_MAX_LENGTH", DEFAULT_MAX_LENGTH),
    )


__all__ = [
    "DEFAULT_MAX_LENGTH",
    "PasswordHasher",
    "PasswordPolicyError",
    "hasher_from_config",
]
