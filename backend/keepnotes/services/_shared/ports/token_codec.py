from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class AccessTokenClaims:
    """
    Identity carried by a verified access token.

    :ivar user_id: Owner user id.
    :ivar email: Email at issuance time.
    :ivar issued_at: Issue instant (UTC).
    :ivar expires_at: Expiry instant (UTC).
    """

    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


class AccessTokenCodec(Protocol):
    """Port for issuing and verifying stateless access tokens."""

    def issue(self, *, user_id: int, email: str) -> str:
        """Return a signed token valid for the configured access TTL from now."""
        ...

    def verify(self, token: str) -> AccessTokenClaims:
        """
        Return the claims of a valid token.

        :raises InvalidTokenError: For any failure; expired and malformed
            tokens are not told apart.
        """
        ...
