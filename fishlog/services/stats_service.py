"""Service exposing season catch statistics with layered caching."""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fishlog.cache import CacheClient, get_cache_client
from fishlog.db.connection import get_db
from fishlog.db.repositories.catch_repository import CatchRepository
from fishlog.schemas.stats import (
    BestWeeksAllTimeResponse,
    BestWeeksByYearResponse,
    SpeciesSummary,
    YearlyTotalsResponse,
)
from fishlog.services.caching import CacheableService, cached
from fishlog.services.catch_service import CatchRepositoryProtocol
from fishlog.services.stats.cache_keys import (
    best_weeks_all_time_cache_key,
    best_weeks_by_year_cache_key,
    deserialize_best_weeks_all_time,
    deserialize_best_weeks_by_year,
    deserialize_species_summary,
    deserialize_yearly_totals,
    species_summary_cache_key,
    yearly_totals_cache_key,
)
from fishlog.services.stats.catch_aggregation import (
    DEFAULT_BEST_WEEKS_LIMIT,
    DEFAULT_WEEK_LENGTH,
    best_weeks_all_time,
    best_weeks_by_year,
    species_summary,
    yearly_totals,
)
from fishlog.services.stats.season import SeasonWindow
from fishlog.settings import get_settings

logger = logging.getLogger(__name__)


def _dump(response) -> dict:
    return response.model_dump(mode="json")


class StatsService(CacheableService):
    """Aggregate a species' catch history into season statistics."""

    def __init__(
        self,
        repository: CatchRepositoryProtocol,
        *,
        season: SeasonWindow | None = None,
        week_length: int = DEFAULT_WEEK_LENGTH,
        best_weeks_limit: int = DEFAULT_BEST_WEEKS_LIMIT,
        cache: CacheClient | None = None,
    ) -> None:
        super().__init__(cache=cache)
        self._repository = repository
        self._season = season or SeasonWindow.default()
        self._week_length = week_length
        self._limit = best_weeks_limit

    @property
    def season(self) -> SeasonWindow:
        return self._season

    @cached(
        lambda self, species: best_weeks_by_year_cache_key(
            species=species,
            season=self._season,
            week_length=self._week_length,
            limit=self._limit,
        ),
        ttl=300,
        serializer=_dump,
        deserializer=deserialize_best_weeks_by_year,
        deserialize_error_message=(
            "Failed to deserialize cached best weeks for key {key}: {error}"
        ),
    )
    async def get_best_weeks_by_year(self, species: str) -> BestWeeksByYearResponse:
        """Return the top season weeks of every year with catches of ``species``."""

        records = await self._repository.find_by_species(species)
        years = best_weeks_by_year(
            records,
            self._season,
            week_length=self._week_length,
            limit=self._limit,
        )
        logger.debug("Computed best weeks for %s across %d years", species, len(years))
        return BestWeeksByYearResponse(
            species=species,
            season_start=self._season.start_key,
            season_end=self._season.end_key,
            years=years,
        )

    @cached(
        lambda self, species: best_weeks_all_time_cache_key(
            species=species,
            season=self._season,
            week_length=self._week_length,
            limit=self._limit,
        ),
        ttl=300,
        serializer=_dump,
        deserializer=deserialize_best_weeks_all_time,
        deserialize_error_message=(
            "Failed to deserialize cached all-time best weeks for key {key}: {error}"
        ),
    )
    async def get_best_weeks_all_time(self, species: str) -> BestWeeksAllTimeResponse:
        """Return the top season weeks with every year folded onto one calendar."""

        records = await self._repository.find_by_species(species)
        return BestWeeksAllTimeResponse(
            species=species,
            season_start=self._season.start_key,
            season_end=self._season.end_key,
            weeks=best_weeks_all_time(
                records,
                self._season,
                week_length=self._week_length,
                limit=self._limit,
            ),
        )

    @cached(
        lambda _self, species: yearly_totals_cache_key(species=species),
        ttl=600,
        serializer=_dump,
        deserializer=deserialize_yearly_totals,
    )
    async def get_yearly_totals(self, species: str) -> YearlyTotalsResponse:
        records = await self._repository.find_by_species(species)
        return YearlyTotalsResponse(species=species, years=yearly_totals(records))

    @cached(
        lambda _self, species: species_summary_cache_key(species=species),
        ttl=600,
        serializer=_dump,
        deserializer=deserialize_species_summary,
    )
    async def get_species_summary(self, species: str) -> SpeciesSummary:
        records = await self._repository.find_by_species(species)
        return species_summary(species, records)


def get_stats_service(
    session: AsyncSession = Depends(get_db),
    cache: CacheClient = Depends(get_cache_client),
) -> StatsService:
    """FastAPI dependency wiring the catch repository, season settings and cache."""

    settings = get_settings()
    return StatsService(
        CatchRepository(session),
        season=SeasonWindow.from_settings(settings),
        week_length=settings.week_length_days,
        best_weeks_limit=settings.best_weeks_limit,
        cache=cache,
    )


__all__ = ["StatsService", "get_stats_service"]
