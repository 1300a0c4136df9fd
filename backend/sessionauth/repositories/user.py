"""User repository for credential lookups."""

from __future__ import annotations

from typing import cast

from sessionauth.models.user import User
from sessionauth.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER handles tokens or sessions; only credential lookups.
    """

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = self._select().where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate an active user by email and password.

        :param email: Email address to authenticate.
        :type email: str
        :param password: Raw password to verify.
        :type password: str
        :returns: Authenticated user or ``None`` when credentials fail or the
            account is disabled.
        :rtype: User | None
        """
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        if not user.is_active:
            return None
        return user
