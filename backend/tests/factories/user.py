"""Factory Boy definition for :class:`keepnotes.models.user.User`."""

from __future__ import annotations

import factory
from keepnotes.models.user import User
from keepnotes.security.passwords import PasswordHasher

from tests.factories import BaseFactory

# Cheap method; tests never need production hashing cost
_hasher = PasswordHasher(method="pbkdf2:sha256:1000")

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`User` instances.

    Pass ``password=...`` to choose the plaintext; only its hash is stored.
    """

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password_hash = factory.LazyAttribute(lambda o: _hasher.hash(o.password))
