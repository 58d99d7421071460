"""Tests for :class:`NoteRepository`."""

from __future__ import annotations

import pytest
from keepnotes.repositories.note import NoteRepository

from tests.factories.note import NoteFactory
from tests.factories.user import UserFactory


class TestNoteRepository:
    def test_list_for_owner_is_scoped_and_newest_first(self, db, session):
        alice, bob = UserFactory(), UserFactory()
        first = NoteFactory(owner=alice)
        second = NoteFactory(owner=alice)
        NoteFactory(owner=bob)

        notes = NoteRepository(session).list_for_owner(alice.id)

        assert [n.id for n in notes] == [second.id, first.id]

    def test_get_owned_hides_other_users_notes(self, db, session):
        alice, bob = UserFactory(), UserFactory()
        note = NoteFactory(owner=alice)
        repo = NoteRepository(session)

        assert repo.get_owned(note.id, alice.id).id == note.id
        assert repo.get_owned(note.id, bob.id) is None

    def test_assign_updates_rejects_unknown_fields(self, db, session):
        note = NoteFactory()
        repo = NoteRepository(session)

        with pytest.raises(ValueError):
            repo.assign_updates(note, {"owner_id": 123})

    def test_assign_updates_applies_whitelisted_fields(self, db, session):
        note = NoteFactory(title="Old")
        repo = NoteRepository(session)

        repo.assign_updates(note, {"title": "New", "content": "body"})
        session.commit()

        reloaded = repo.get(note.id)
        assert reloaded.title == "New"
        assert reloaded.content == "body"
