"""Repository for fish rows derived from catch records."""

from __future__ import annotations

from sqlalchemy import select

from fishlog.db.models import Fish as FishModel
from fishlog.db.repositories.base import BaseRepository
from fishlog.schemas.catch import Fish, FishCreate


class FishRepository(BaseRepository):
    async def save(self, fish: FishCreate) -> Fish:
        (entity,) = await self._persist_all([FishModel(**fish.model_dump())])
        return Fish.model_validate(entity)

    async def find_all(self) -> list[Fish]:
        result = await self._session.execute(
            select(FishModel).order_by(FishModel.date, FishModel.id)
        )
        return [Fish.model_validate(row) for row in result.scalars().all()]


__all__ = ["FishRepository"]
