"""In-memory repositories mirroring the SQLAlchemy implementations."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from fishlog.schemas.catch import CatchRecord, CatchRecordCreate, Fish, FishCreate
from fishlog.services.catch_service import CatchRepositoryProtocol
from fishlog.services.fish_service import FishRepositoryProtocol


def _ordered(records: Iterable[CatchRecord]) -> list[CatchRecord]:
    return sorted(records, key=lambda record: (record.date, record.id))


class InMemoryCatchRepository(CatchRepositoryProtocol):
    """Dictionary backed catch store assigning sequential ids."""

    def __init__(self, records: Iterable[CatchRecord] = ()) -> None:
        self._records: dict[int, CatchRecord] = {record.id: record for record in records}
        self.save_calls = 0

    def _next_id(self) -> int:
        return max(self._records, default=0) + 1

    async def save_all(self, records: Iterable[CatchRecordCreate]) -> list[CatchRecord]:
        self.save_calls += 1
        saved: list[CatchRecord] = []
        for record in records:
            stored = CatchRecord(id=self._next_id(), **record.model_dump())
            self._records[stored.id] = stored
            saved.append(stored)
        return saved

    async def find_all(self) -> list[CatchRecord]:
        return _ordered(self._records.values())

    async def find_by_id(self, record_id: int) -> CatchRecord | None:
        return self._records.get(record_id)

    async def find_by_name(self, name: str) -> list[CatchRecord]:
        return _ordered(r for r in self._records.values() if r.name == name)

    async def find_by_species(self, species: str) -> list[CatchRecord]:
        return _ordered(r for r in self._records.values() if r.species == species)

    async def find_by_name_and_species(self, name: str, species: str) -> list[CatchRecord]:
        return _ordered(
            r for r in self._records.values() if r.name == name and r.species == species
        )

    async def count_by_name_and_species(self, name: str, species: str) -> int:
        return len(await self.find_by_name_and_species(name, species))

    async def total_weight_by_name_and_species(self, name: str, species: str) -> float:
        return sum(r.weight for r in await self.find_by_name_and_species(name, species))

    async def list_species(self) -> Sequence[str]:
        return sorted({r.species for r in self._records.values()})

    async def list_anglers(self, species: str | None = None) -> Sequence[str]:
        return sorted(
            {
                r.name
                for r in self._records.values()
                if species is None or r.species == species
            }
        )


class InMemoryFishRepository(FishRepositoryProtocol):
    def __init__(self) -> None:
        self._fish: list[Fish] = []

    async def save(self, fish: FishCreate) -> Fish:
        stored = Fish(id=len(self._fish) + 1, **fish.model_dump())
        self._fish.append(stored)
        return stored

    async def find_all(self) -> list[Fish]:
        return list(self._fish)
