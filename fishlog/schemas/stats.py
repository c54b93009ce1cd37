"""Pydantic DTOs backing the catch statistics API responses."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from fishlog.schemas.catch import CatchRecord


class DayStats(BaseModel):
    """Catches landed on one calendar day of the season."""

    date: str = Field(..., description="Season day key formatted as MM.dd")
    fish_count: int = 0
    total_weight: float = 0.0
    average_weight: float = 0.0


class WeekStats(BaseModel):
    """A fixed-size window of consecutive season days."""

    start_date: str = Field(..., description="First day of the window (MM.dd)")
    end_date: str = Field(..., description="Last day of the window (MM.dd)")
    count: int = 0
    total_weight: float = 0.0
    average_weight: float = Field(0.0, description="Average weight rounded to 2 decimals")


class SevenDayPeriod(BaseModel):
    """Seven consecutive calendar days anchored on the first catch of a year."""

    start_date: date
    end_date: date
    count: int = 0
    total_weight: float = 0.0
    average_weight: float = 0.0


class AnglerStats(BaseModel):
    name: str
    count: int = 0
    total_weight: float = 0.0
    average_weight: float = 0.0


class AnglerResponse(BaseModel):
    """An angler's catches of one species alongside their aggregates."""

    name: str
    species: str
    angler_stats: AnglerStats
    data: list[CatchRecord] = Field(default_factory=list)


class BestWeeksByYearResponse(BaseModel):
    species: str
    season_start: str
    season_end: str
    years: dict[int, list[WeekStats]] = Field(default_factory=dict)


class BestWeeksAllTimeResponse(BaseModel):
    species: str
    season_start: str
    season_end: str
    weeks: list[WeekStats] = Field(default_factory=list)


class SevenDayPeriodsResponse(BaseModel):
    species: str
    years: dict[int, list[SevenDayPeriod]] = Field(default_factory=dict)


class YearlyTotals(BaseModel):
    year: int
    count: int = 0
    total_weight: float = 0.0
    average_weight: float = 0.0
    median_weight: float | None = None
    heaviest_weight: float | None = None


class YearlyTotalsResponse(BaseModel):
    species: str
    years: list[YearlyTotals] = Field(default_factory=list)


class SpeciesSummary(BaseModel):
    """All-time aggregates for one species."""

    species: str
    count: int = 0
    total_weight: float = 0.0
    average_weight: float = 0.0
    median_weight: float | None = None
    heaviest_weight: float | None = None
    first_catch: date | None = None
    last_catch: date | None = None
    years: list[YearlyTotals] = Field(default_factory=list)


class NameListResponse(BaseModel):
    items: list[str] = Field(default_factory=list)
    total: int = 0


__all__ = [
    "AnglerResponse",
    "AnglerStats",
    "BestWeeksAllTimeResponse",
    "BestWeeksByYearResponse",
    "DayStats",
    "NameListResponse",
    "SevenDayPeriod",
    "SevenDayPeriodsResponse",
    "SpeciesSummary",
    "WeekStats",
    "YearlyTotals",
    "YearlyTotalsResponse",
]
