"""Unit tests for the :class:`User` credential record."""

from __future__ import annotations

import pytest

from sessionauth.models.user import User
from tests.factories.user import UserFactory


class TestUserModel:
    def test_password_is_hashed_and_write_only(self, session):
        user = UserFactory(password="s3cret-pass")
        session.flush()

        assert user.password_hash != "s3cret-pass"
        assert user.verify_password("s3cret-pass") is True
        assert user.verify_password("nope") is False
        with pytest.raises(AttributeError):
            _ = user.password

    def test_email_is_normalized(self, session):
        user = UserFactory(email="  MiXeD@Example.COM ")
        session.flush()
        assert user.email == "mixed@example.com"

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValueError):
            User(email="not-an-email", password_hash="x")

    def test_subject_id_is_string(self, session):
        user = UserFactory()
        session.flush()
        assert user.subject_id == str(user.id)
