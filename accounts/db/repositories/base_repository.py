"""
Base repository - generic data access shared by model repositories.
Unique-constraint violations surface as DuplicateIdentityError, never as raw driver errors.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from accounts.db.base import Base
from accounts.errors import DuplicateIdentityError

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Fetch single entity by primary key."""
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        self.session.add(entity)
        await self.flush()
        await self.session.refresh(entity)
        return entity

    async def flush(self) -> None:
        """Flush pending writes, mapping unique-constraint failures to a retryable error.
        The session must be rolled back by its owner afterwards."""
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateIdentityError(str(exc.orig)) from exc

    async def delete(self, entity: ModelType) -> None:
        """Remove entity from DB."""
        await self.session.delete(entity)
