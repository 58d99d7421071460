"""Helpers for exercising the auth endpoints from API tests."""

from __future__ import annotations

from typing import Any

DEFAULT_PASSWORD = "secret1"


def bearer(token: str) -> dict[str, str]:
    """Return an ``Authorization`` header for ``token``."""
    return {"Authorization": f"Bearer {token}"}


def register(client, email: str, password: str = DEFAULT_PASSWORD) -> dict[str, Any]:
    """Register through the API and return the JSON body, asserting 201."""
    resp = client.post("/api/register", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def refresh_cookie(resp, name: str = "refresh_token") -> str | None:
    """Return the ``Set-Cookie`` header line for the refresh cookie, if any."""
    for header in resp.headers.getlist("Set-Cookie"):
        if header.startswith(f"{name}="):
            return header
    return None
