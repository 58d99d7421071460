"""Pytest fixtures: a testing app, a fresh in-memory schema per test, clients.

Each test gets its own ``create_all``/``drop_all`` cycle. Services under test
commit and roll back through real units of work, so factories commit as well
and nothing relies on an enclosing transaction.
"""

from __future__ import annotations

import os

import pytest
from keepnotes.core.config import TestingConfig
from keepnotes.core.extensions import db as _db  # Flask-SQLAlchemy instance
from keepnotes.factory import create_app  # application factory under test


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured with :class:`TestingConfig`."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestingConfig, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture()
def db(app):
    """Create all tables inside an app context and drop them afterwards.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session used by units of work."""
    return db.session


@pytest.fixture()
def client(app, db):
    """Flask test client that keeps cookies between requests."""
    return app.test_client()


@pytest.fixture()
def cookieless_client(app, db):
    """Test client that never stores cookies, so only the JSON body carries tokens."""
    return app.test_client(use_cookies=False)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the Flask-SQLAlchemy session ----------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    from tests.factories import SQLAlchemySession

    if "db" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
