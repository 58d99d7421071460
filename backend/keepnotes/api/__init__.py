"""API blueprint package and service wiring."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask

from keepnotes.api.deps import AUTH_SERVICE_KEY, NOTE_SERVICE_KEY


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, typically ``"/api"``.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.

    Notes
    -----
    Empty relative prefixes mount a blueprint at the base prefix itself.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.rstrip("/"), rel_prefix.strip("/")] if segment
        )
        full_prefix = "/" + full_prefix if not full_prefix.startswith("/") else full_prefix
        app.register_blueprint(bp, url_prefix=full_prefix)


def init_services(app: Flask) -> None:
    """Build the auth and note services once and store them on ``app.extensions``."""

    from keepnotes.infra.jwt.flask_jwt_token_codec import JWTAccessTokenCodec
    from keepnotes.infra.sqlalchemy.refresh_token_store import SQLAlchemyRefreshTokenStore
    from keepnotes.security.passwords import hasher_from_config
    from keepnotes.services.auth.dto import AuthTokenConfig
    from keepnotes.services.auth.refresh_tokens import RefreshTokenManager
    from keepnotes.services.auth.service import AuthService
    from keepnotes.services.notes.service import NoteService

    cfg = AuthTokenConfig.from_config(app.config)
    app.extensions[AUTH_SERVICE_KEY] = AuthService(
        codec=JWTAccessTokenCodec(ttl=cfg.access_expires),
        refresh_tokens=RefreshTokenManager(
            store=SQLAlchemyRefreshTokenStore(), ttl=cfg.refresh_expires
        ),
        hasher=hasher_from_config(app.config),
        token_cfg=cfg,
    )
    app.extensions[NOTE_SERVICE_KEY] = NoteService()


def init_app(app: Flask) -> None:
    """Wire services and register the API blueprints on the Flask app."""

    init_services(app)

    from keepnotes.api.auth import bp as auth_bp
    from keepnotes.api.health import bp as health_bp
    from keepnotes.api.notes import bp as notes_bp

    # Each tuple: (blueprint, url_prefix_relative_to_api_base)
    registry: list[tuple[Blueprint, str]] = [
        (health_bp, ""),  # -> /api/health
        (auth_bp, ""),  # -> /api/register, /api/login, /api/me, ...
        (notes_bp, "/notes"),  # -> /api/notes
    ]
    register_blueprint_group(
        app, base_prefix=app.config.get("API_BASE_PREFIX", "/api"), entries=registry
    )


__all__ = ["init_app", "init_services", "register_blueprint_group"]
