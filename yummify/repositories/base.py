"""
Generic async repository.

Subclasses set ``model`` and add their own finders. ``save`` and
``delete`` commit immediately, so each call is its own unit of work.
"""

from typing import Generic, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from yummify.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class AsyncRepository(Generic[ModelT]):
    """CRUD operations shared by all repositories."""

    model: Type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, entity: ModelT) -> ModelT:
        """
        Insert or update ``entity`` and return it with generated columns loaded.

        Raises:
            IntegrityError: On a constraint violation; the session is rolled
                back and stays usable
        """
        self.session.add(entity)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise
        await self.session.refresh(entity)
        return entity

    async def find_by_id(self, entity_id: UUID) -> Optional[ModelT]:
        return await self.session.get(self.model, entity_id)

    async def find_all(self) -> Sequence[ModelT]:
        result = await self.session.execute(select(self.model))
        return result.scalars().all()

    async def exists_by_id(self, entity_id: UUID) -> bool:
        return await self.find_by_id(entity_id) is not None

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.commit()
