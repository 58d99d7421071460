# tests/unit/core/test_error_translation.py
from __future__ import annotations

import pytest
from keepnotes.core.errors import APIError, Conflict, NotFound, Unauthorized
from keepnotes.services._shared.base import translate_service_error
from keepnotes.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InvalidInputError,
    InvalidTokenError,
    NotFoundError,
    RefreshTokenExpiredOrRevokedError,
)


@pytest.mark.parametrize(
    ("exc", "status", "kind"),
    [
        (NotFoundError("Note", 3), 404, NotFound),
        (ConflictError("User", "email already registered"), 409, Conflict),
        (AuthenticationError(), 401, Unauthorized),
        (InvalidTokenError(), 401, Unauthorized),
        (RefreshTokenExpiredOrRevokedError(), 401, Unauthorized),
        (InvalidInputError("title required"), 400, APIError),
    ],
)
def test_service_errors_map_to_http(exc, status, kind):
    err = translate_service_error(exc)
    assert isinstance(err, kind)
    assert err.status_code == status


def test_authentication_failures_share_one_message():
    messages = {
        translate_service_error(e).message
        for e in (AuthenticationError(), InvalidTokenError(), RefreshTokenExpiredOrRevokedError())
    }
    assert len(messages) == 1


def test_problem_document_shape(app):
    with app.test_request_context("/api/notes/1"):
        problem = NotFound("Note not found: 1").to_problem()

    assert problem["status"] == 404
    assert problem["title"] == "Not Found"
    assert problem["code"] == "not_found"
    assert problem["instance"] == "/api/notes/1"
    assert problem["request_id"]
