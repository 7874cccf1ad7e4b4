"""Unit tests for IdentityRepository."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from mediqueue.models.user import Role
from mediqueue.repositories.base import parse_sort_tokens
from mediqueue.repositories.user import IdentityRepository
from tests.factories.user import DoctorFactory, IdentityFactory


class TestIdentityRepository:
    """Lookups plus the atomic session-field statements."""

    @pytest.fixture()
    def repo(self, app):
        return IdentityRepository()

    def test_get_by_email_is_case_insensitive(self, repo, session):
        identity = IdentityFactory(email="alice@example.com")
        fetched = repo.get_by_email("  ALICE@example.com")
        assert fetched is not None
        assert fetched.id == identity.id

    def test_exists_by_email(self, repo, session):
        IdentityFactory(email="bob@example.com")
        assert repo.exists_by_email("bob@example.com")
        assert not repo.exists_by_email("nobody@example.com")

    def test_update_rejects_non_whitelisted_fields(self, repo, session):
        identity = IdentityFactory()
        with pytest.raises(ValueError):
            repo.update(identity, role=Role.ADMIN)
        with pytest.raises(ValueError):
            repo.update(identity, refresh_token_digest="x")
        repo.update(identity, name="Renamed")
        assert identity.name == "Renamed"

    def test_set_and_clear_session(self, repo, session):
        identity = IdentityFactory()
        now = datetime.now(tz=UTC)

        assert repo.set_session(identity.id, "a" * 64, now) is True
        session.commit()
        assert repo.get_session_digest(identity.id) == "a" * 64

        assert repo.clear_session(identity.id) is True
        session.commit()
        assert repo.get_session_digest(identity.id) is None
        # Clearing an already cleared session reports no change
        assert repo.clear_session(identity.id) is False

    def test_set_session_unknown_identity(self, repo, session):
        assert repo.set_session(9999, "a" * 64, datetime.now(tz=UTC)) is False

    def test_swap_session_is_compare_and_swap(self, repo, session):
        identity = IdentityFactory()
        now = datetime.now(tz=UTC)
        repo.set_session(identity.id, "old", now)

        assert repo.swap_session(identity.id, "old", "new", now) is True
        # Presenting the consumed digest again loses
        assert repo.swap_session(identity.id, "old", "newer", now) is False
        assert repo.get_session_digest(identity.id) == "new"


class TestListing:
    def test_descending_sort_and_unknown_tokens(self, session):
        DoctorFactory(name="Dr. Amy")
        DoctorFactory(name="Dr. Zed")
        repo = IdentityRepository()

        rows = repo.list(filters={"role": Role.DOCTOR}, sort=["-name", "password_hash"])

        assert [r.name for r in rows] == ["Dr. Zed", "Dr. Amy"]

    def test_non_whitelisted_filters_are_ignored(self, session):
        IdentityFactory()
        DoctorFactory()
        repo = IdentityRepository()

        assert len(repo.list(filters={"password_hash": "x"})) == 2


def test_parse_sort_tokens():
    assert parse_sort_tokens(["-created_at", "name", " ", "-"]) == [
        ("created_at", True),
        ("name", False),
    ]
