"""Unit tests for :class:`UserRepository` credential lookups."""

from __future__ import annotations

from sessionauth.repositories import UserRepository
from tests.factories.user import UserFactory


class TestUserRepository:
    def test_get_by_email_is_case_insensitive(self, session):
        user = UserFactory(email="erin@example.com")
        session.flush()

        repo = UserRepository(session=session)
        assert repo.get_by_email(" ERIN@example.com") is user
        assert repo.get_by_email("missing@example.com") is None

    def test_authenticate_accepts_matching_password(self, session):
        user = UserFactory(email="ivy@example.com", password="pw-123456")
        session.flush()

        assert UserRepository(session=session).authenticate("ivy@example.com", "pw-123456") is user

    def test_authenticate_skips_inactive_users(self, session):
        UserFactory(email="frank@example.com", password="pw-123456", is_active=False)
        session.flush()

        repo = UserRepository(session=session)
        assert repo.authenticate("frank@example.com", "pw-123456") is None
