"""
Domain-level exceptions used within the service layer.

These exceptions never depend on Flask or HTTP. They are the stable contract
between repositories, adapters and application services; the translation to
RFC 7807 responses happens in :func:`keepnotes.services._shared.base.translate_service_error`.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them to ``APIError`` centrally.
    """


# --------------------------------------------------------------------------- #
# Resource errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is absent, or not visible to the caller.

    :param entity: Entity name (e.g., "Note").
    :param key: Identifier or search key.
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    entity: str
    detail: str

    def __str__(self) -> str:  # pragma: no cover
        return f"Conflict on {self.entity}: {self.detail}"


class InvalidInputError(ServiceError):
    """Raised for well-formed requests the service still cannot act on."""


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """Credentials or tokens were rejected. Always rendered as a generic 401."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """An access token failed verification (bad signature, malformed, expired, wrong type)."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class InvalidRefreshTokenError(AuthenticationError):
    """Base class for refresh token failures."""

    def __init__(self, message: str = "Invalid refresh token") -> None:
        super().__init__(message)


class RefreshTokenNotFoundError(InvalidRefreshTokenError):
    """No record matches the presented refresh token."""


class RefreshTokenExpiredOrRevokedError(InvalidRefreshTokenError):
    """The record exists but is revoked, superseded or past its expiry."""
