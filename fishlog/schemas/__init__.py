from fishlog.schemas.catch import (
    CatchRecord,
    CatchRecordCreate,
    ConversionResponse,
    Fish,
    FishCreate,
)
from fishlog.schemas.stats import (
    AnglerResponse,
    AnglerStats,
    BestWeeksAllTimeResponse,
    BestWeeksByYearResponse,
    DayStats,
    SevenDayPeriod,
    SevenDayPeriodsResponse,
    SpeciesSummary,
    WeekStats,
    YearlyTotals,
    YearlyTotalsResponse,
)

__all__ = [
    "AnglerResponse",
    "AnglerStats",
    "BestWeeksAllTimeResponse",
    "BestWeeksByYearResponse",
    "CatchRecord",
    "CatchRecordCreate",
    "ConversionResponse",
    "DayStats",
    "Fish",
    "FishCreate",
    "SevenDayPeriod",
    "SevenDayPeriodsResponse",
    "SpeciesSummary",
    "WeekStats",
    "YearlyTotals",
    "YearlyTotalsResponse",
]
