from __future__ import annotations

from sessionauth.services._shared.base import BaseService
from sessionauth.services._shared.ports.credential_verifier import CredentialVerifier


class SQLAlchemyCredentialVerifier(BaseService, CredentialVerifier):
    """
    Credential check against the relational ``users`` table.

    Runs inside a read-only unit of work; requires an active Flask app
    context (Flask-SQLAlchemy scoped session).
    """

    def verify(self, email: str, password: str) -> str | None:
        with self.ro_uow() as uow:
            user = uow.users.authenticate(email, password)
            return user.subject_id if user is not None else None
