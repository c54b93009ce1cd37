"""Repository for scraped catch records."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func, select
from sqlalchemy.sql import Select

from fishlog.db.models import CatchRecord as CatchRecordModel
from fishlog.db.repositories.base import BaseRepository
from fishlog.schemas.catch import CatchRecord, CatchRecordCreate


def _ordered(query: Select) -> Select:
    return query.order_by(CatchRecordModel.date, CatchRecordModel.id)


class CatchRepository(BaseRepository):
    """Data access for ``catch_records`` returning pydantic DTOs."""

    async def _fetch(self, query: Select) -> list[CatchRecord]:
        result = await self._session.execute(_ordered(query))
        return [CatchRecord.model_validate(row) for row in result.scalars().all()]

    async def save_all(self, records: Iterable[CatchRecordCreate]) -> list[CatchRecord]:
        entities = await self._persist_all(
            CatchRecordModel(**record.model_dump()) for record in records
        )
        return [CatchRecord.model_validate(entity) for entity in entities]

    async def find_all(self) -> list[CatchRecord]:
        return await self._fetch(select(CatchRecordModel))

    async def find_by_id(self, record_id: int) -> CatchRecord | None:
        entity = await self._session.get(CatchRecordModel, record_id)
        if entity is None:
            return None
        return CatchRecord.model_validate(entity)

    async def find_by_name(self, name: str) -> list[CatchRecord]:
        return await self._fetch(
            select(CatchRecordModel).where(CatchRecordModel.name == name)
        )

    async def find_by_species(self, species: str) -> list[CatchRecord]:
        return await self._fetch(
            select(CatchRecordModel).where(CatchRecordModel.species == species)
        )

    async def find_by_name_and_species(
        self, name: str, species: str
    ) -> list[CatchRecord]:
        return await self._fetch(
            select(CatchRecordModel).where(
                CatchRecordModel.name == name,
                CatchRecordModel.species == species,
            )
        )

    async def count_by_name_and_species(self, name: str, species: str) -> int:
        query = select(func.count(CatchRecordModel.id)).where(
            CatchRecordModel.name == name,
            CatchRecordModel.species == species,
        )
        result = await self._session.execute(query)
        return int(result.scalar_one())

    async def total_weight_by_name_and_species(self, name: str, species: str) -> float:
        query = select(func.coalesce(func.sum(CatchRecordModel.weight), 0.0)).where(
            CatchRecordModel.name == name,
            CatchRecordModel.species == species,
        )
        result = await self._session.execute(query)
        return float(result.scalar_one())

    async def list_species(self) -> Sequence[str]:
        query = (
            select(CatchRecordModel.species)
            .distinct()
            .order_by(CatchRecordModel.species)
        )
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def list_anglers(self, species: str | None = None) -> Sequence[str]:
        query = select(CatchRecordModel.name).distinct().order_by(CatchRecordModel.name)
        if species:
            query = query.where(CatchRecordModel.species == species)
        result = await self._session.execute(query)
        return list(result.scalars().all())


__all__ = ["CatchRepository"]
