"""
keepnotes.services._shared.ports
================================

Ports (hexagonal interfaces) for the authentication infrastructure.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.AccessTokenCodec` and :class:`~.AccessTokenClaims`,
    the abstraction for signing and verifying access tokens.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore`, :class:`~.RotationResult`
    and :class:`~.RefreshTokenView`, the abstractions for refresh token
    persistence and atomic rotation.

Concrete adapters live under ``keepnotes.infra``.
"""

from __future__ import annotations

from .refresh_token_store import (
    InMemoryRefreshTokenStore,
    RefreshTokenStore,
    RefreshTokenView,
    RotationResult,
)
from .token_codec import AccessTokenClaims, AccessTokenCodec

__all__ = [
    "AccessTokenClaims",
    "AccessTokenCodec",
    "InMemoryRefreshTokenStore",
    "RefreshTokenStore",
    "RefreshTokenView",
    "RotationResult",
]
