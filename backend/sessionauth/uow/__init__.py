"""Unit of Work abstractions and the read-only SQLAlchemy implementation."""

from .base import UnitOfWork
from .sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork

__all__ = [
    "UnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
]
