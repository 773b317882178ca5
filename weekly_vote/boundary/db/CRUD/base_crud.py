"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update operations that can be inherited
and extended by model-specific CRUD classes. Rows are never deleted by
this service, so no delete helper is offered.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from weekly_vote.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any SQLAlchemy model.
    Subclasses should specify the model class and can override or extend
    these methods for model-specific behavior.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def update_by_id(
        self,
        session: AsyncSession,
        id: int,
        **kwargs,
    ) -> ModelT | None:
        """
        Update a record by primary key.

        Loads the row through the identity map and assigns attributes, so
        instances already held by the caller see the new values.

        Args:
            session: Async database session
            id: Integer primary key
            **kwargs: Fields to update with new values

        Returns:
            Updated model instance if found, None otherwise
        """
        instance = await session.get(self.model, id)
        if instance is None:
            return None
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await session.flush()
        return instance
