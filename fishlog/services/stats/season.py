"""Fishing season window shared by the statistics aggregations."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol, TypeVar

from fishlog.settings import (
    DEFAULT_SEASON_END,
    DEFAULT_SEASON_START,
    SEASON_TEMPLATE_YEAR,
    AppSettings,
    parse_month_day,
)

DAY_KEY_FORMAT = "%m.%d"


class Dated(Protocol):
    date: date


DatedT = TypeVar("DatedT", bound=Dated)


def format_day_key(value: date) -> str:
    """Format ``value`` as the ``MM.dd`` key used to bucket season days."""

    return value.strftime(DAY_KEY_FORMAT)


@dataclass(frozen=True, slots=True)
class SeasonWindow:
    """Inclusive month/day window, e.g. June 15 through August 31.

    Membership ignores the year so a single window applies to every season in
    the catch history.
    """

    start: tuple[int, int]
    end: tuple[int, int]

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Season start {self.start} must not be after season end {self.end}"
            )

    @classmethod
    def from_strings(cls, start: str, end: str) -> SeasonWindow:
        return cls(start=parse_month_day(start), end=parse_month_day(end))

    @classmethod
    def from_settings(cls, settings: AppSettings) -> SeasonWindow:
        start, end = settings.season_bounds
        return cls(start=start, end=end)

    @classmethod
    def default(cls) -> SeasonWindow:
        return cls.from_strings(DEFAULT_SEASON_START, DEFAULT_SEASON_END)

    @property
    def start_key(self) -> str:
        return format_day_key(date(SEASON_TEMPLATE_YEAR, *self.start))

    @property
    def end_key(self) -> str:
        return format_day_key(date(SEASON_TEMPLATE_YEAR, *self.end))

    def contains(self, value: date) -> bool:
        month_day = (value.month, value.day)
        # Feb 29 has no slot on the non-leap template calendar.
        if month_day == (2, 29):
            return False
        return self.start <= month_day <= self.end

    def filter(self, records: Iterable[DatedT]) -> list[DatedT]:
        """Drop records caught outside the season, preserving input order."""

        return [record for record in records if self.contains(record.date)]

    def day_keys(self) -> Sequence[str]:
        """Return every ``MM.dd`` key of the season in calendar order."""

        current = date(SEASON_TEMPLATE_YEAR, *self.start)
        last = date(SEASON_TEMPLATE_YEAR, *self.end)
        keys: list[str] = []
        while current <= last:
            keys.append(format_day_key(current))
            current += timedelta(days=1)
        return keys


__all__ = ["DAY_KEY_FORMAT", "SeasonWindow", "format_day_key"]
