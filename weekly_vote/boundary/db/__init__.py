"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, IntegerIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - VoteSessionModel, VoteModel, UserModel: Domain entities
  - VoteSessionCRUD, vote_session_crud: CRUD operations
  - SqlAlchemySessionRepository: SessionRepository implementation

Dependencies: sqlalchemy, weekly_vote.configs
System role: Database adapter providing persistent storage for weekly
vote sessions.
"""

from weekly_vote.boundary.db.base import Base, IntegerIDMixin, TimestampMixin
from weekly_vote.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from weekly_vote.boundary.db.models import UserModel, VoteModel, VoteSessionModel
from weekly_vote.boundary.db.CRUD import BaseCRUD, VoteSessionCRUD, vote_session_crud
from weekly_vote.boundary.db.repository import SqlAlchemySessionRepository

__all__ = [
    # Base classes
    "Base",
    "IntegerIDMixin",
    "TimestampMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "UserModel",
    "VoteModel",
    "VoteSessionModel",
    # CRUD
    "BaseCRUD",
    "VoteSessionCRUD",
    "vote_session_crud",
    # Repository
    "SqlAlchemySessionRepository",
]
