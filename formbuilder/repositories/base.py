"""
Base Repository

Generic async repository over one ORM model. Subclasses set ``model`` and
add their own query methods.
"""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from formbuilder.models.orm import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Repository with the CRUD calls every model needs.

    Example usage:
        class FormRepository(BaseRepository[Form]):
            model = Form
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entity: ModelT) -> ModelT:
        """Add ``entity`` and flush so database defaults are populated."""
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: ModelT) -> ModelT:
        await self.session.flush()
        await self.session.refresh(entity)
        return entity
