# keepnotes/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from keepnotes.models.user import User

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param email: User email, kept as submitted (trimmed).
    :param password: Raw password (hashed before persistence).
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Opaque refresh token as handed to the client.
    :type refresh_token: str | None
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Opaque refresh token to revoke, when the client sent one.
    :type refresh_token: str | None
    """

    refresh_token: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserOut:
    """Public view of a user. Never carries the password hash."""

    id: int
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Signed access token.
    :type access_token: str
    :param refresh_token: Opaque refresh token.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class AuthResultOut:
    """Token pair plus the authenticated user (register and login)."""

    access_token: str
    refresh_token: str
    user: UserOut


@dataclass(frozen=True, slots=True)
class AuthIdentity:
    """Identity attached to an authenticated request."""

    user_id: int
    email: str


@dataclass(frozen=True, slots=True)
class IssuedRefreshToken:
    """A freshly issued refresh token. ``token`` is the raw value; never log it."""

    token: str
    user_id: int
    expires_at: datetime


# ------------------------------ Config DTO -------------------------------- #

DEFAULT_ACCESS_EXPIRES = timedelta(minutes=15)
DEFAULT_REFRESH_EXPIRES = timedelta(days=7)
DEFAULT_COOKIE_NAME = "refresh_token"


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration, built once per application.

    :param access_expires: Access token lifetime.
    :param refresh_expires: Refresh token lifetime.
    :param cookie_name: Name of the refresh token cookie.
    :param cookie_secure: Whether the cookie carries ``Secure``.
    :param cookie_samesite: ``SameSite`` attribute of the cookie.
    :param cookie_path: ``Path`` attribute of the cookie.
    """

    access_expires: timedelta = DEFAULT_ACCESS_EXPIRES
    refresh_expires: timedelta = DEFAULT_REFRESH_EXPIRES
    cookie_name: str = DEFAULT_COOKIE_NAME
    cookie_secure: bool = False
    cookie_samesite: str = "Lax"
    cookie_path: str = "/"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Read the token settings from a Flask config mapping."""
        return cls(
            access_expires=config.get("JWT_ACCESS_TOKEN_EXPIRES", DEFAULT_ACCESS_EXPIRES),
            refresh_expires=config.get("REFRESH_TOKEN_EXPIRES", DEFAULT_REFRESH_EXPIRES),
            cookie_name=config.get("REFRESH_TOKEN_COOKIE_NAME", DEFAULT_COOKIE_NAME),
            cookie_secure=bool(config.get("REFRESH_TOKEN_COOKIE_SECURE", False)),
            cookie_samesite=config.get("REFRESH_TOKEN_COOKIE_SAMESITE", "Lax"),
        )
