"""Catch record ingestion and lookup."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Protocol, runtime_checkable

from fishlog.cache import CacheClient, invalidate_stats
from fishlog.schemas.catch import CatchRecord, CatchRecordCreate
from fishlog.schemas.stats import AnglerResponse, AnglerStats, SevenDayPeriodsResponse
from fishlog.services.stats.catch_aggregation import (
    DEFAULT_BEST_WEEKS_LIMIT,
    angler_stats,
    rolling_periods_by_year,
)

logger = logging.getLogger(__name__)


class CatchRecordNotFoundError(LookupError):
    """Raised when a catch record id does not exist."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Catch record {record_id} not found")
        self.record_id = record_id


@runtime_checkable
class CatchRepositoryProtocol(Protocol):
    """Persistence contract the catch and stats services depend on."""

    async def save_all(self, records: Iterable[CatchRecordCreate]) -> list[CatchRecord]: ...

    async def find_all(self) -> list[CatchRecord]: ...

    async def find_by_id(self, record_id: int) -> CatchRecord | None: ...

    async def find_by_name(self, name: str) -> list[CatchRecord]: ...

    async def find_by_species(self, species: str) -> list[CatchRecord]: ...

    async def find_by_name_and_species(self, name: str, species: str) -> list[CatchRecord]: ...

    async def count_by_name_and_species(self, name: str, species: str) -> int: ...

    async def total_weight_by_name_and_species(self, name: str, species: str) -> float: ...

    async def list_species(self) -> Sequence[str]: ...

    async def list_anglers(self, species: str | None = None) -> Sequence[str]: ...


class CatchService:
    """Store scraped catches and answer per-angler questions about them."""

    def __init__(
        self,
        repository: CatchRepositoryProtocol,
        *,
        cache: CacheClient | None = None,
        best_weeks_limit: int = DEFAULT_BEST_WEEKS_LIMIT,
        commit: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._best_weeks_limit = best_weeks_limit
        self._commit = commit

    async def save_all(self, records: Sequence[CatchRecordCreate]) -> list[CatchRecord]:
        """Persist ``records`` and drop cached statistics.

        When a ``commit`` hook is configured the cache is cleared only after
        the hook returns.
        """

        saved = await self._repository.save_all(records)
        if self._commit is not None:
            await self._commit()
        logger.info("Stored %d catch records", len(saved))
        if saved:
            await invalidate_stats(self._cache)
        return saved

    async def find_all(self) -> list[CatchRecord]:
        return await self._repository.find_all()

    async def find_by_name(self, name: str) -> list[CatchRecord]:
        return await self._repository.find_by_name(name)

    async def get_record(self, record_id: int) -> CatchRecord:
        record = await self._repository.find_by_id(record_id)
        if record is None:
            raise CatchRecordNotFoundError(record_id)
        return record

    async def create_angler_stats(self, name: str, species: str) -> AnglerStats:
        count = await self._repository.count_by_name_and_species(name, species)
        total_weight = await self._repository.total_weight_by_name_and_species(
            name, species
        )
        return angler_stats(name, count, total_weight)

    async def find_by_name_and_species(self, name: str, species: str) -> AnglerResponse:
        """Return an angler's catches of ``species`` with their aggregates.

        Unknown anglers yield zero statistics and an empty record list.
        """

        stats = await self.create_angler_stats(name, species)
        records = await self._repository.find_by_name_and_species(name, species)
        return AnglerResponse(name=name, species=species, angler_stats=stats, data=records)

    async def get_best_weeks(self, species: str) -> SevenDayPeriodsResponse:
        """Rank seven-day periods per year, anchored on each year's first catch."""

        records = await self._repository.find_by_species(species)
        return SevenDayPeriodsResponse(
            species=species,
            years=rolling_periods_by_year(records, limit=self._best_weeks_limit),
        )

    async def list_anglers(self, species: str | None = None) -> list[str]:
        return list(await self._repository.list_anglers(species))

    async def list_species(self) -> list[str]:
        return list(await self._repository.list_species())


__all__ = [
    "CatchRecordNotFoundError",
    "CatchRepositoryProtocol",
    "CatchService",
]
