from __future__ import annotations

from datetime import date

from fishlog.services.stats.catch_aggregation import rolling_periods, rolling_periods_by_year
from tests.support.catch_data import make_catch


def test_periods_are_anchored_on_first_catch(one_season) -> None:
    periods = rolling_periods(one_season)

    assert [(p.start_date, p.end_date, p.count) for p in periods] == [
        (date(2022, 7, 1), date(2022, 7, 7), 28),
        (date(2022, 7, 8), date(2022, 7, 14), 77),
        (date(2022, 7, 15), date(2022, 7, 21), 126),
        (date(2022, 7, 22), date(2022, 7, 28), 175),
        (date(2022, 7, 29), date(2022, 8, 4), 59),
    ]


def test_rolling_periods_by_year_ranks_top_three(two_seasons) -> None:
    result = rolling_periods_by_year(two_seasons)

    assert list(result) == [2022, 2023]
    assert [p.count for p in result[2022]] == [175, 126, 77]
    assert result[2023][0].start_date == date(2023, 7, 22)
    assert result[2023][0].total_weight == 1750.0
    assert result[2023][0].average_weight == 10.0


def test_rolling_periods_sort_unordered_input_and_skip_season_filter() -> None:
    records = [
        make_catch(date(2021, 10, 10), 3.0),
        make_catch(date(2021, 1, 2), 1.0),
        make_catch(date(2021, 1, 3), 2.0),
    ]

    result = rolling_periods_by_year(records, limit=1)

    (best,) = result[2021]
    assert best.start_date == date(2021, 1, 2)
    assert best.count == 2
    assert best.average_weight == 1.5


def test_empty_periods_have_zero_average() -> None:
    records = [make_catch(date(2022, 6, 1)), make_catch(date(2022, 6, 20))]

    periods = rolling_periods(records)

    assert [p.count for p in periods] == [1, 0, 1]
    assert periods[1].average_weight == 0.0


def test_average_is_not_rounded() -> None:
    records = [make_catch(date(2022, 6, 1), w) for w in (1.0, 1.0, 2.0)]

    (period,) = rolling_periods(records)

    assert period.average_weight == 4.0 / 3


def test_no_records_yield_no_years() -> None:
    assert rolling_periods_by_year([]) == {}


def test_tied_periods_keep_chronological_order() -> None:
    records = [
        make_catch(date(2022, 6, 1)),
        make_catch(date(2022, 6, 8)),
        make_catch(date(2022, 6, 15)),
        make_catch(date(2022, 6, 16)),
        make_catch(date(2022, 6, 22)),
    ]

    result = rolling_periods_by_year(records)

    assert [(p.start_date, p.count) for p in result[2022]] == [
        (date(2022, 6, 15), 2),
        (date(2022, 6, 1), 1),
        (date(2022, 6, 8), 1),
    ]
