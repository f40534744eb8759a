from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.db.base import Base, is_valid_object_id

ModelT = TypeVar("ModelT", bound=Base)


class DocumentStore(Generic[ModelT]):
    """
    Thin persistence handle over one model.

    Storage errors are not translated here; they surface to the app-level
    error handler as 500s.
    """

    def __init__(self, db: AsyncSession, model: type[ModelT]) -> None:
        self.db = db
        self.model = model

    async def find(self, **filters: Any) -> list[ModelT]:
        stmt = select(self.model)
        for attr, value in filters.items():
            stmt = stmt.where(getattr(self.model, attr) == value)
        result = await self.db.execute(stmt.order_by(self.model.created_at))
        return list(result.scalars().all())

    async def find_by_id(self, doc_id: str) -> ModelT | None:
        if not is_valid_object_id(doc_id):
            return None
        result = await self.db.execute(
            select(self.model).where(self.model.id == doc_id)
        )
        return result.scalar_one_or_none()

    async def create(self, doc: dict[str, Any]) -> ModelT:
        instance = self.model(**doc)
        self.db.add(instance)
        await self.db.commit()
        await self.db.refresh(instance)
        return instance

    async def find_by_id_and_update(
        self,
        doc_id: str,
        patch: dict[str, Any],
    ) -> ModelT | None:
        instance = await self.find_by_id(doc_id)
        if instance is None:
            return None

        for attr, value in patch.items():
            setattr(instance, attr, value)

        await self.db.commit()
        await self.db.refresh(instance)
        return instance

    async def find_by_id_and_delete(self, doc_id: str) -> ModelT | None:
        instance = await self.find_by_id(doc_id)
        if instance is None:
            return None

        await self.db.delete(instance)
        await self.db.commit()
        return instance


def to_columns(payload: dict[str, Any], fields: dict[str, str]) -> dict[str, Any]:
    """Map known payload keys onto model attributes; anything else is dropped."""
    return {fields[key]: value for key, value in payload.items() if key in fields}
