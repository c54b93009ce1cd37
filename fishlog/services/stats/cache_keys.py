"""Cache key builders and payload deserialisers for catch statistics."""

from __future__ import annotations

from typing import Any

from fishlog.schemas.stats import (
    BestWeeksAllTimeResponse,
    BestWeeksByYearResponse,
    SpeciesSummary,
    YearlyTotalsResponse,
)
from fishlog.services.stats.season import SeasonWindow

STATS_PREFIX = "stats"


def _species_part(species: str) -> str:
    # Species lookups are case-sensitive, so the key keeps the exact spelling.
    return species


def _season_part(season: SeasonWindow, week_length: int, limit: int) -> str:
    return f"{season.start_key}-{season.end_key}:{week_length}:{limit}"


def best_weeks_by_year_cache_key(
    *, species: str, season: SeasonWindow, week_length: int, limit: int
) -> str:
    return (
        f"{STATS_PREFIX}:best-weeks:season:{_species_part(species)}:"
        f"{_season_part(season, week_length, limit)}"
    )


def best_weeks_all_time_cache_key(
    *, species: str, season: SeasonWindow, week_length: int, limit: int
) -> str:
    return (
        f"{STATS_PREFIX}:best-weeks:all-time:{_species_part(species)}:"
        f"{_season_part(season, week_length, limit)}"
    )


def yearly_totals_cache_key(*, species: str) -> str:
    return f"{STATS_PREFIX}:yearly:{_species_part(species)}"


def species_summary_cache_key(*, species: str) -> str:
    return f"{STATS_PREFIX}:summary:{_species_part(species)}"


def deserialize_best_weeks_by_year(payload: Any) -> BestWeeksByYearResponse | None:
    if not isinstance(payload, dict):
        return None
    return BestWeeksByYearResponse.model_validate(payload)


def deserialize_best_weeks_all_time(payload: Any) -> BestWeeksAllTimeResponse | None:
    if not isinstance(payload, dict):
        return None
    return BestWeeksAllTimeResponse.model_validate(payload)


def deserialize_yearly_totals(payload: Any) -> YearlyTotalsResponse | None:
    if not isinstance(payload, dict):
        return None
    return YearlyTotalsResponse.model_validate(payload)


def deserialize_species_summary(payload: Any) -> SpeciesSummary | None:
    if not isinstance(payload, dict):
        return None
    return SpeciesSummary.model_validate(payload)


__all__ = [
    "STATS_PREFIX",
    "best_weeks_all_time_cache_key",
    "best_weeks_by_year_cache_key",
    "deserialize_best_weeks_all_time",
    "deserialize_best_weeks_by_year",
    "deserialize_species_summary",
    "deserialize_yearly_totals",
    "species_summary_cache_key",
    "yearly_totals_cache_key",
]
