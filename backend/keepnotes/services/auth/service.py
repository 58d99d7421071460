# keepnotes/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from keepnotes.core.logger import log_event
from keepnotes.models.user import User
from keepnotes.security.passwords import PasswordHasher, PasswordPolicyError
from keepnotes.services._shared.base import BaseService
from keepnotes.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InvalidInputError,
    InvalidRefreshTokenError,
    NotFoundError,
)
from keepnotes.services._shared.ports import AccessTokenCodec
from keepnotes.services.auth.dto import (
    AuthIdentity,
    AuthResultOut,
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
    UserOut,
)
from keepnotes.services.auth.refresh_tokens import RefreshTokenManager

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer"


class AuthService(BaseService):
    """
    Authentication lifecycle: register, login, refresh, logout and the
    bearer-token gate used by protected endpoints.

    Access tokens are stateless and come from the :class:`AccessTokenCodec`.
    Refresh tokens are opaque and rotated through the
    :class:`RefreshTokenManager`; any refresh failure is reported as the same
    :class:`AuthenticationError`.
    """

    def __init__(
        self,
        *,
        codec: AccessTokenCodec,
        refresh_tokens: RefreshTokenManager,
        hasher: PasswordHasher,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        :param codec: Adapter for issuing/verifying access tokens.
        :param refresh_tokens: Refresh token lifecycle manager.
        :param hasher: Password hasher used for registration and login.
        :param token_cfg: Token lifetimes and cookie settings.
        """
        self.codec = codec
        self.refresh_tokens = refresh_tokens
        self.hasher = hasher
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Register / Login
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthResultOut:
        """
        Create a user and sign them in.

        :raises ConflictError: If the email is already registered.
        :raises InvalidInputError: If the password violates the hashing policy.
        """
        try:
            digest = self.hasher.hash(dto.password)
        except PasswordPolicyError as exc:
            raise InvalidInputError(str(exc)) from exc

        try:
            with self.rw_uow() as uow:
                if uow.users.exists_by_email(dto.email):
                    raise ConflictError("User", "email already registered")
                user = uow.users.add(User(email=dto.email, password_hash=digest))
                user_out = UserOut.from_model(user)
        except IntegrityError as exc:
            # Lost a race against a concurrent registration of the same email
            raise ConflictError("User", "email already registered") from exc

        log_event(logger, "auth.register", user_id=user_out.id)
        return self._sign_in(user_out)

    def login(self, dto: LoginIn) -> AuthResultOut:
        """
        Verify credentials and issue a token pair.

        :raises AuthenticationError: Unknown email or wrong password (same error).
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_email(dto.email)
            if user is None or not self.hasher.verify(dto.password, user.password_hash):
                log_event(logger, "auth.login.failed", level=logging.WARNING)
                raise AuthenticationError()
            user_out = UserOut.from_model(user)

        log_event(logger, "auth.login", user_id=user_out.id)
        return self._sign_in(user_out)

    # ------------------------------------------------------------------ #
    # Refresh / Logout
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Rotate the refresh token and mint a new access token.

        :raises AuthenticationError: Missing, unknown, expired, revoked or
            already-rotated refresh token.
        """
        try:
            issued = self.refresh_tokens.rotate(dto.refresh_token)
        except InvalidRefreshTokenError as exc:
            log_event(logger, "auth.refresh.failed", level=logging.WARNING)
            raise AuthenticationError() from exc

        with self.ro_uow() as uow:
            user = uow.users.get(issued.user_id)
            if user is None:
                raise AuthenticationError()
            email = user.email

        access = self.codec.issue(user_id=issued.user_id, email=email)
        log_event(logger, "auth.refresh", user_id=issued.user_id)
        return TokenPairOut(access_token=access, refresh_token=issued.token)

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke the refresh token if one was supplied. Never fails.

        The store is a pluggable port, so any failure it raises is logged
        and dropped; logout is best-effort cleanup.
        """
        try:
            found = self.refresh_tokens.revoke(dto.refresh_token)
        except Exception:
            logger.exception("auth.logout.revoke_failed")
            return
        log_event(logger, "auth.logout", count=int(found))

    # ------------------------------------------------------------------ #
    # Request authentication
    # ------------------------------------------------------------------ #

    def authenticate_bearer(self, header: str | None) -> AuthIdentity:
        """
        Resolve an ``Authorization`` header value to an identity.

        The ``Bearer`` scheme prefix is optional.

        :raises InvalidTokenError: Missing, malformed, forged or expired token.
        """
        token = (header or "").strip()
        scheme, _, rest = token.partition(" ")
        if rest and scheme.lower() == BEARER_PREFIX:
            token = rest.strip()
        claims = self.codec.verify(token)
        return AuthIdentity(user_id=claims.user_id, email=claims.email)

    def whoami(self, user_id: int) -> UserOut:
        """
        :raises NotFoundError: If the user no longer exists.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserOut.from_model(user)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _sign_in(self, user: UserOut) -> AuthResultOut:
        access = self.codec.issue(user_id=user.id, email=user.email)
        issued = self.refresh_tokens.issue(user.id)
        return AuthResultOut(access_token=access, refresh_token=issued.token, user=user)
