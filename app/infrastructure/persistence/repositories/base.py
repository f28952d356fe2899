"""Base repository: generic CRUD over one ORM model."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.database import Base


class BaseRepository[ModelType: Base]:
    """Base repository with get_by_id, add, update and remove.

    Subclasses map rows to domain entities or DTOs at their public methods
    and use these helpers for the ORM side.
    """

    resource_type: str = "resource"

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get_existing(self, entity_id: str) -> ModelType:
        """Return a record by primary key; raise ResourceNotFoundException if missing."""
        obj = await self.get_by_id(entity_id)
        if obj is None:
            raise ResourceNotFoundException(self.resource_type, entity_id)
        return obj

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new record and reload server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes to an attached record and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def remove(self, entity_id: str) -> bool:
        """Delete a record by primary key; return False when it does not exist."""
        obj = await self.get_by_id(entity_id)
        if obj is None:
            return False
        await self.db.delete(obj)
        await self.db.flush()
        return True
