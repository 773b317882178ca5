"""
User ORM model.

Minimal projection of the team member table: only the columns the vote
session read path exposes (id, name).

Dependencies: sqlalchemy, weekly_vote.boundary.db.base
System role: Member lookup for vote listings
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from weekly_vote.boundary.db.base import Base, IntegerIDMixin, TimestampMixin


class UserModel(Base, IntegerIDMixin, TimestampMixin):
    """Team member."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
