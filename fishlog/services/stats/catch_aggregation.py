"""Date-bucketed aggregation of catch records.

The functions here are pure: they take an in-memory list of catches and
return pydantic DTOs. The season pipeline runs

    filter off-season -> group by year -> bucket per season day
    -> day stats -> fixed-size week windows -> rank by fish count

while the rolling-period variant anchors seven-day windows on the first
catch of each year instead of on the season calendar.
"""

from __future__ import annotations

import math
import statistics
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta
from typing import Protocol, TypeVar

from fishlog.schemas.stats import (
    AnglerStats,
    DayStats,
    SevenDayPeriod,
    SpeciesSummary,
    WeekStats,
    YearlyTotals,
)
from fishlog.services.stats.season import SeasonWindow, format_day_key

DEFAULT_WEEK_LENGTH = 7
DEFAULT_BEST_WEEKS_LIMIT = 3
ROLLING_PERIOD_DAYS = 7


class CatchLike(Protocol):
    date: date
    weight: float


CatchT = TypeVar("CatchT", bound=CatchLike)


class OffSeasonCatchError(ValueError):
    """Raised when a catch outside the season window reaches day bucketing."""


def round_half_up(value: float, digits: int = 2) -> float:
    """Round ``value`` half away from zero for non-negative weights."""

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _average(total: float, count: int) -> float:
    return total / count if count > 0 else 0.0


def group_by_year(records: Iterable[CatchT]) -> dict[int, list[CatchT]]:
    """Group catches by year, years ascending and records in input order."""

    grouped: dict[int, list[CatchT]] = {}
    for record in records:
        grouped.setdefault(record.date.year, []).append(record)
    return {year: grouped[year] for year in sorted(grouped)}


def group_by_day_and_month(
    records: Iterable[CatchT], season: SeasonWindow
) -> dict[str, list[CatchT]]:
    """Bucket catches per ``MM.dd`` season day.

    Every season day is present in the result, including days without
    catches, so downstream week windows always cover the same calendar.
    """

    buckets: dict[str, list[CatchT]] = {key: [] for key in season.day_keys()}
    for record in records:
        key = format_day_key(record.date)
        if key not in buckets:
            raise OffSeasonCatchError(
                f"Catch on {record.date.isoformat()} falls outside the season "
                f"{season.start_key}-{season.end_key}"
            )
        buckets[key].append(record)
    return buckets


def to_day_stats(records_by_day: Mapping[str, Sequence[CatchLike]]) -> list[DayStats]:
    days: list[DayStats] = []
    for key, records in records_by_day.items():
        count = len(records)
        total_weight = sum(record.weight for record in records)
        days.append(
            DayStats(
                date=key,
                fish_count=count,
                total_weight=total_weight,
                average_weight=_average(total_weight, count),
            )
        )
    return days


def weekly_stats(
    days: Sequence[DayStats], week_length: int = DEFAULT_WEEK_LENGTH
) -> list[WeekStats]:
    """Fold consecutive days into windows of ``week_length`` days.

    The last window holds whatever days remain and may be shorter.
    """

    if week_length < 1:
        raise ValueError("week_length must be at least 1")

    weeks: list[WeekStats] = []
    for start in range(0, len(days), week_length):
        window = days[start : start + week_length]
        count = sum(day.fish_count for day in window)
        total_weight = sum(day.total_weight for day in window)
        weeks.append(
            WeekStats(
                start_date=window[0].date,
                end_date=window[-1].date,
                count=count,
                total_weight=total_weight,
                average_weight=round_half_up(_average(total_weight, count)),
            )
        )
    return weeks


def best_weeks(
    weeks: Iterable[WeekStats], limit: int = DEFAULT_BEST_WEEKS_LIMIT
) -> list[WeekStats]:
    """Return the ``limit`` weeks with most fish; ties keep calendar order."""

    ranked = sorted(weeks, key=lambda week: week.count, reverse=True)
    return ranked[:limit]


def _season_weeks(
    records: Iterable[CatchLike], season: SeasonWindow, week_length: int
) -> list[WeekStats]:
    records_by_day = group_by_day_and_month(records, season)
    return weekly_stats(to_day_stats(records_by_day), week_length)


def best_weeks_by_year(
    records: Iterable[CatchLike],
    season: SeasonWindow,
    *,
    week_length: int = DEFAULT_WEEK_LENGTH,
    limit: int = DEFAULT_BEST_WEEKS_LIMIT,
) -> dict[int, list[WeekStats]]:
    in_season = season.filter(records)
    return {
        year: best_weeks(_season_weeks(year_records, season, week_length), limit)
        for year, year_records in group_by_year(in_season).items()
    }


def best_weeks_all_time(
    records: Iterable[CatchLike],
    season: SeasonWindow,
    *,
    week_length: int = DEFAULT_WEEK_LENGTH,
    limit: int = DEFAULT_BEST_WEEKS_LIMIT,
) -> list[WeekStats]:
    """Rank season weeks with every year's catches folded onto one calendar."""

    in_season = season.filter(records)
    return best_weeks(_season_weeks(in_season, season, week_length), limit)


def rolling_periods(
    records: Sequence[CatchLike], period_days: int = ROLLING_PERIOD_DAYS
) -> list[SevenDayPeriod]:
    """Build back-to-back periods from the first to the last catch in ``records``.

    ``records`` must be sorted by date.
    """

    if not records:
        return []

    by_date: dict[date, list[CatchLike]] = {}
    for record in records:
        by_date.setdefault(record.date, []).append(record)

    first, last = records[0].date, records[-1].date
    periods: list[SevenDayPeriod] = []
    start = first
    while start <= last:
        end = start + timedelta(days=period_days - 1)
        count = 0
        total_weight = 0.0
        current = start
        while current <= end:
            for record in by_date.get(current, ()):
                count += 1
                total_weight += record.weight
            current += timedelta(days=1)
        periods.append(
            SevenDayPeriod(
                start_date=start,
                end_date=end,
                count=count,
                total_weight=total_weight,
                average_weight=_average(total_weight, count),
            )
        )
        start += timedelta(days=period_days)
    return periods


def rolling_periods_by_year(
    records: Iterable[CatchLike],
    *,
    limit: int = DEFAULT_BEST_WEEKS_LIMIT,
    period_days: int = ROLLING_PERIOD_DAYS,
) -> dict[int, list[SevenDayPeriod]]:
    ordered = sorted(records, key=lambda record: record.date)
    result: dict[int, list[SevenDayPeriod]] = {}
    for year, year_records in group_by_year(ordered).items():
        periods = rolling_periods(year_records, period_days)
        result[year] = sorted(periods, key=lambda period: period.count, reverse=True)[:limit]
    return result


def angler_stats(name: str, count: int, total_weight: float) -> AnglerStats:
    return AnglerStats(
        name=name,
        count=count,
        total_weight=total_weight,
        average_weight=_average(total_weight, count),
    )


def _weights(records: Iterable[CatchLike]) -> list[float]:
    return [record.weight for record in records]


def yearly_totals(records: Iterable[CatchLike]) -> list[YearlyTotals]:
    totals: list[YearlyTotals] = []
    for year, year_records in group_by_year(records).items():
        weights = _weights(year_records)
        total_weight = sum(weights)
        totals.append(
            YearlyTotals(
                year=year,
                count=len(weights),
                total_weight=total_weight,
                average_weight=_average(total_weight, len(weights)),
                median_weight=statistics.median(weights) if weights else None,
                heaviest_weight=max(weights, default=None),
            )
        )
    return totals


def species_summary(species: str, records: Sequence[CatchLike]) -> SpeciesSummary:
    weights = _weights(records)
    total_weight = sum(weights)
    dates = [record.date for record in records]
    return SpeciesSummary(
        species=species,
        count=len(weights),
        total_weight=total_weight,
        average_weight=_average(total_weight, len(weights)),
        median_weight=statistics.median(weights) if weights else None,
        heaviest_weight=max(weights, default=None),
        first_catch=min(dates, default=None),
        last_catch=max(dates, default=None),
        years=yearly_totals(records),
    )


__all__ = [
    "CatchLike",
    "DEFAULT_BEST_WEEKS_LIMIT",
    "DEFAULT_WEEK_LENGTH",
    "OffSeasonCatchError",
    "ROLLING_PERIOD_DAYS",
    "angler_stats",
    "best_weeks",
    "best_weeks_all_time",
    "best_weeks_by_year",
    "group_by_day_and_month",
    "group_by_year",
    "rolling_periods",
    "rolling_periods_by_year",
    "round_half_up",
    "species_summary",
    "to_day_stats",
    "weekly_stats",
    "yearly_totals",
]
