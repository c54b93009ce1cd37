from fastapi import APIRouter, Depends

from fishlog.api.params import species_param
from fishlog.schemas.stats import (
    BestWeeksAllTimeResponse,
    BestWeeksByYearResponse,
    NameListResponse,
    SevenDayPeriodsResponse,
    SpeciesSummary,
    YearlyTotalsResponse,
)
from fishlog.services.catch_service import CatchService
from fishlog.services.dependencies import get_catch_service
from fishlog.services.stats_service import StatsService, get_stats_service

router = APIRouter()


@router.get("/species", response_model=NameListResponse)
async def list_species(
    service: CatchService = Depends(get_catch_service),
) -> NameListResponse:
    species = await service.list_species()
    return NameListResponse(items=species, total=len(species))


@router.get("/best-weeks", response_model=SevenDayPeriodsResponse)
async def best_rolling_weeks(
    species: str = Depends(species_param),
    service: CatchService = Depends(get_catch_service),
) -> SevenDayPeriodsResponse:
    """Rank seven-day periods per year starting from each year's first catch."""
    return await service.get_best_weeks(species)


@router.get("/best-weeks/season", response_model=BestWeeksByYearResponse)
async def best_season_weeks_by_year(
    species: str = Depends(species_param),
    service: StatsService = Depends(get_stats_service),
) -> BestWeeksByYearResponse:
    """Top in-season weeks for every year with recorded catches."""
    return await service.get_best_weeks_by_year(species)


@router.get("/best-weeks/all-time", response_model=BestWeeksAllTimeResponse)
async def best_season_weeks_all_time(
    species: str = Depends(species_param),
    service: StatsService = Depends(get_stats_service),
) -> BestWeeksAllTimeResponse:
    return await service.get_best_weeks_all_time(species)


@router.get("/yearly", response_model=YearlyTotalsResponse)
async def yearly_totals(
    species: str = Depends(species_param),
    service: StatsService = Depends(get_stats_service),
) -> YearlyTotalsResponse:
    return await service.get_yearly_totals(species)


@router.get("/summary", response_model=SpeciesSummary)
async def species_summary(
    species: str = Depends(species_param),
    service: StatsService = Depends(get_stats_service),
) -> SpeciesSummary:
    return await service.get_species_summary(species)
