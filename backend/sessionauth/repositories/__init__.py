"""Repository package exposing read-only access to credential records."""

from __future__ import annotations

from sessionauth.repositories.base import BaseRepository
from sessionauth.repositories.user import UserRepository

__all__ = ["BaseRepository", "UserRepository"]
