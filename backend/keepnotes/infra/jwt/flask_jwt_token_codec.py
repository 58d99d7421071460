# keepnotes/infra/jwt/flask_jwt_token_codec.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from keepnotes.services._shared.errors import InvalidTokenError
from keepnotes.services._shared.ports import AccessTokenClaims, AccessTokenCodec

ACCESS_TOKEN_TYPE = "access"


@dataclass(slots=True)
class JWTAccessTokenCodec(AccessTokenCodec):
    """
    Access token codec backed by Flask-JWT-Extended (HS256 by default).

    Tokens carry ``sub`` (stringified user id) plus ``user_id`` and ``email``
    claims; ``iat`` and ``exp`` come from the library.

    .. note::
       Requires an active Flask app context with ``JWT_SECRET_KEY`` set.
    """

    ttl: timedelta

    def issue(self, *, user_id: int, email: str) -> str:
        return cast(
            str,
            create_access_token(
                identity=str(user_id),
                additional_claims={"user_id": user_id, "email": email},
                expires_delta=self.ttl,
            ),
        )

    def verify(self, token: str) -> AccessTokenClaims:
        if not token:
            raise InvalidTokenError()
        try:
            decoded = cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError() from exc

        if decoded.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError()
        try:
            return AccessTokenClaims(
                user_id=int(decoded["user_id"]),
                email=str(decoded["email"]),
                issued_at=datetime.fromtimestamp(int(decoded["iat"]), tz=UTC),
                expires_at=datetime.fromtimestamp(int(decoded["exp"]), tz=UTC),
            )
        except (KeyError, TypeError, ValueError) as exc:
            # Signed by us but missing identity claims
            raise InvalidTokenError() from exc
