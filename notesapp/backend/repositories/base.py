"""
Base Repository.

Id-keyed CRUD shared by the folder and note repositories. Writes flush but
never commit; the request's session commits once the handler returns.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.backend.core.exceptions import NotFoundError
from notesapp.backend.core.utils import utc_now
from notesapp.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Subclasses name their model:

        class FolderRepository(BaseRepository[Folder]):
            model = Folder

    A missing row raises NotFoundError("Folder not found") and so on, which
    the API answers with 404.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _by_id(self, id: str) -> Select:
        return select(self.model).where(self.model.id == str(id))

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        result = await self.session.execute(self._by_id(id))
        return result.scalar_one_or_none()

    async def get_by_id(self, id: str) -> ModelType:
        """
        Raises:
            NotFoundError: If there is no row with this id
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return instance

    async def exists(self, id: str) -> bool:
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none() is not None

    async def create(self, **values: Any) -> ModelType:
        """Insert a row; id and timestamps come back filled in."""
        instance = self.model(**values)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: str, **values: Any) -> ModelType:
        """
        Assign the given columns and stamp updated_at.

        updated_at moves even when every value equals the stored one, since
        an autosave of unchanged text is still a save.

        Raises:
            NotFoundError: If there is no row with this id
        """
        instance = await self.get_by_id(id)
        for column, value in values.items():
            if hasattr(instance, column):
                setattr(instance, column, value)
        instance.updated_at = utc_now()

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: str) -> None:
        """
        Delete through the ORM so relationship cascades run.

        Raises:
            NotFoundError: If there is no row with this id
        """
        instance = await self.get_by_id(id)
        await self.session.delete(instance)
        await self.session.flush()
