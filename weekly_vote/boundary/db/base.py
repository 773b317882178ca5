"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins
for common fields (timestamps, integer identities).

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class IntegerIDMixin:
    """
    Mixin providing an autoincrement integer primary key.

    Ids are allocated by the database in insertion order, which the vote
    session lifecycle relies on to decide which of two rows is newer.

    Attributes:
        id: Integer primary key, assigned on insert
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )


class TimestampMixin:
    """
    Mixin providing automatic timestamp tracking to all models.

    created_at is set once on row creation and never changes.
    updated_at is refreshed on every update via onupdate hook.
    Both use UTC timezone for consistency across deployments.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
        updated_at: Last modification timestamp (UTC, auto-updated)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
