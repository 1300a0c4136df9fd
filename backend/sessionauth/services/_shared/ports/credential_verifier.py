from __future__ import annotations

from typing import Protocol


class CredentialVerifier(Protocol):
    """
    Port for the external credential check performed during login.

    Implementations read the credential store and never write to it.
    """

    def verify(self, email: str, password: str) -> str | None:
        """
        :returns: Subject id of the authenticated principal, or ``None`` when
            the credential is rejected.
        """
        ...


class InMemoryCredentialVerifier(CredentialVerifier):
    """Dictionary-backed verifier used in unit tests."""

    def __init__(self, accounts: dict[str, tuple[str, str]] | None = None) -> None:
        # email -> (password, subject_id)
        self._accounts = dict(accounts or {})

    def add(self, email: str, password: str, subject_id: str) -> None:
        self._accounts[email.strip().lower()] = (password, subject_id)

    def verify(self, email: str, password: str) -> str | None:
        account = self._accounts.get(email.strip().lower())
        if account is None or account[0] != password:
            return None
        return account[1]
