"""Expose the application factory at package level.

Provide convenient access to :func:`keepnotes.factory.create_app` so callers
(and gunicorn: ``gunicorn 'keepnotes:create_app()'``) can import it directly.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
