"""
Base Repository

This module provides a generic base repository with common CRUD operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)          → Fetch single record by UUID
- get_by_ids()     → Fetch multiple records by UUIDs
- exists()         → Check if record exists
- create()         → Create new record
- update()         → Update existing record
- delete()         → Hard delete record
- delete_where()   → Bulk delete by criteria (used by cascades)

Generic Type Pattern:
=====================
The BaseRepository uses Python generics to be type-safe:

    class VideoRepository(BaseRepository[Video]):
        pass

    repo = VideoRepository(db)
    video = await repo.get(id)  # Returns Video, not Any!

Reads that shape data for clients (counts, owner projections, viewer flags)
do not live here: they are compiled by vidshare.shared.views. Repositories
own lookups and writes.

flush() vs commit():
====================
- flush(): Sends SQL to database but doesn't commit transaction
  - Changes are visible within the same session
  - Can be rolled back if error occurs later

- commit(): Permanently saves all changes
  - Called by get_db() after request handler completes
  - Repository methods use flush() to allow request-level transactions
"""

from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete as sql_delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from vidshare.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session

    Example:
        class UserRepository(BaseRepository[User]):
            def __init__(self, session: AsyncSession):
                super().__init__(User, session)

            async def get_by_email(self, email: str) -> Optional[User]:
                ...
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., User, Video, Comment)
            session: Async database session from get_db()
        """
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """
        Get a single record by its UUID.

        Args:
            record_id: The UUID of the record to fetch

        Returns:
            The model instance if found, None otherwise

        SQL Generated:
            SELECT * FROM videos WHERE id = '7c9e6679-...'
        """
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: list[UUID]) -> list[ModelType]:
        """
        Get multiple records by their UUIDs in a single IN query.

        Returns:
            List of model instances (may be fewer than requested if some not found)
        """
        if not ids:
            return []

        result = await self.session.execute(select(self.model).where(self.model.id.in_(ids)))
        return list(result.scalars().all())

    async def exists(self, record_id: UUID) -> bool:
        """
        Check if a record exists without loading it.

        Args:
            record_id: The UUID to check

        Returns:
            True if exists, False otherwise
        """
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == record_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Field values for the new record

        Returns:
            Created model instance with database-generated values

        SQL Generated:
            INSERT INTO videos (title, owner_id, ...)
            VALUES ('...', '...', ...)
        """
        instance = self.model(**kwargs)

        # Add to session (marks as pending insert)
        self.session.add(instance)

        # Flush: send INSERT to database (but don't commit yet)
        await self.session.flush()

        # Refresh: reload server defaults
        await self.session.refresh(instance)

        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # UPDATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def update(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """
        Apply field changes to a loaded record.

        Only updates fields that are provided and not None, so callers can
        pass a partial update straight through.

        Args:
            instance: Loaded model instance (ownership already checked)
            **kwargs: Fields to update (None values are ignored)

        Returns:
            The updated instance
        """
        for field, value in kwargs.items():
            if hasattr(instance, field) and value is not None:
                setattr(instance, field, value)

        await self.session.flush()
        await self.session.refresh(instance)

        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # DELETE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def delete(self, instance: ModelType) -> None:
        """
        Hard delete a loaded record.

        SQL Generated:
            DELETE FROM videos WHERE id = '...'
        """
        await self.session.delete(instance)
        await self.session.flush()

    async def delete_where(self, *criteria: ColumnElement[bool]) -> int:
        """
        Bulk delete every row matching the criteria.

        Used for explicit cascades, where loading each dependent row would
        be wasteful.

        Returns:
            Number of rows deleted
        """
        result = await self.session.execute(sql_delete(self.model).where(*criteria))
        return result.rowcount or 0
