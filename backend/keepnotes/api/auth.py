"""Authentication endpoints: register, login, refresh, logout and whoami."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, request

from keepnotes.api.deps import (
    current_identity,
    get_auth_service,
    json_body,
    json_response,
    require_auth,
    timing,
)
from keepnotes.core.errors import Unauthorized
from keepnotes.core.extensions import limiter
from keepnotes.schemas import (
    AuthResponseSchema,
    LoginSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from keepnotes.services.auth.dto import LoginIn, LogoutIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
auth_response_schema = AuthResponseSchema()
token_pair_schema = TokenPairSchema()
user_schema = UserSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "10 per minute"))


def _set_refresh_cookie(response: Response, token: str) -> None:
    cfg = get_auth_service().cfg
    response.set_cookie(
        cfg.cookie_name,
        token,
        max_age=int(cfg.refresh_expires.total_seconds()),
        path=cfg.cookie_path,
        secure=cfg.cookie_secure,
        httponly=True,
        samesite=cfg.cookie_samesite,
    )


def _clear_refresh_cookie(response: Response) -> None:
    cfg = get_auth_service().cfg
    response.delete_cookie(
        cfg.cookie_name,
        path=cfg.cookie_path,
        secure=cfg.cookie_secure,
        httponly=True,
        samesite=cfg.cookie_samesite,
    )


def _presented_refresh_token() -> str | None:
    """Cookie first; the JSON body is only read when no cookie was sent.

    A non-string ``refresh_token`` in the body counts as absent.
    """
    cookie = request.cookies.get(get_auth_service().cfg.cookie_name)
    if cookie:
        return cookie
    value = json_body().get("refresh_token")
    return value if isinstance(value, str) and value else None


@bp.post("/register")
@timing
def register():
    """Create an account and sign it in (201)."""

    data = register_schema.load(json_body())
    result = get_auth_service().register(RegisterIn(email=data["email"], password=data["password"]))
    response = json_response(auth_response_schema.dump(result), status=201)
    _set_refresh_cookie(response, result.refresh_token)
    return response


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue access + refresh tokens."""

    data = login_schema.load(json_body())
    result = get_auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    response = json_response(auth_response_schema.dump(result))
    _set_refresh_cookie(response, result.refresh_token)
    return response


@bp.post("/refresh")
@timing
def refresh():
    """Rotate the refresh token (cookie preferred, body fallback)."""

    token = _presented_refresh_token()
    if token is None:
        raise Unauthorized("Refresh token required")
    pair = get_auth_service().refresh(RefreshIn(refresh_token=token))
    response = json_response(token_pair_schema.dump(pair))
    _set_refresh_cookie(response, pair.refresh_token)
    return response


@bp.post("/logout")
@timing
def logout():
    """Revoke the refresh token if present and clear the cookie. Always 200."""

    token = _presented_refresh_token()
    get_auth_service().logout(LogoutIn(refresh_token=token))
    response = json_response({"message": "logged out"})
    _clear_refresh_cookie(response)
    return response


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user."""

    user = get_auth_service().whoami(current_identity().user_id)
    return json_response(user_schema.dump(user))
