"""Shared API helpers: JSON responses, timing, service lookup and the auth gate."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from keepnotes.core.errors import Unauthorized
from keepnotes.services._shared.errors import InvalidTokenError
from keepnotes.services.auth.dto import AuthIdentity
from keepnotes.services.auth.service import AuthService
from keepnotes.services.notes.service import NoteService

F = TypeVar("F", bound=Callable[..., Any])

AUTH_SERVICE_KEY = "keepnotes.auth_service"
NOTE_SERVICE_KEY = "keepnotes.note_service"


def get_auth_service() -> AuthService:
    """Return the :class:`AuthService` wired for the current application."""

    return cast(AuthService, current_app.extensions[AUTH_SERVICE_KEY])


def get_note_service() -> NoteService:
    return cast(NoteService, current_app.extensions[NOTE_SERVICE_KEY])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def json_body() -> dict[str, Any]:
    """Return the JSON object body, or ``{}`` when absent or not an object."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


def require_auth(func: F) -> F:
    """
    Ensure the request carries a valid access token.

    Reads ``Authorization`` (the ``Bearer`` prefix is optional), verifies it
    and stores the identity on ``flask.g`` before the handler runs. Any
    failure aborts with 401.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        header = request.headers.get("Authorization")
        if not header:
            raise Unauthorized("Authorization header required")
        try:
            g.identity = get_auth_service().authenticate_bearer(header)
        except InvalidTokenError as exc:
            raise Unauthorized("Invalid token") from exc
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_identity() -> AuthIdentity:
    """Return the identity attached by :func:`require_auth`."""

    identity = g.get("identity")
    if identity is None:
        # Handler not wrapped by require_auth
        raise Unauthorized()
    return cast(AuthIdentity, identity)
