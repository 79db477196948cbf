"""Tests for cycle phase classification."""

from datetime import date, timedelta

import pytest

from lunabloom.domain.logs import LogRecord
from lunabloom.services.phases import (
    build_snapshot,
    classify_day,
    classify_snapshot_day,
    find_period_starts,
)
from tests.conftest import period


def _index(*records: LogRecord) -> dict[date, LogRecord]:
    return {record.day: record for record in records}


def _flow_run(start: date, days: int, *, end_flag: bool = False) -> list[LogRecord]:
    run = [period(start + timedelta(days=offset)) for offset in range(days)]
    if end_flag:
        run[-1] = period(run[-1].day, end=True)
    return run


def test_find_period_starts_detects_flow_edges() -> None:
    records = _index(
        *_flow_run(date(2024, 1, 1), 3),
        LogRecord(day=date(2024, 1, 10), mood="happy"),
        *_flow_run(date(2024, 1, 29), 2),
    )

    assert find_period_starts(records) == [date(2024, 1, 1), date(2024, 1, 29)]


def test_find_period_starts_treats_gaps_as_non_period() -> None:
    records = _index(period(date(2024, 3, 1)), period(date(2024, 3, 3)))

    assert find_period_starts(records) == [date(2024, 3, 1), date(2024, 3, 3)]


def test_find_period_starts_after_none_flow_day() -> None:
    records = _index(
        LogRecord(day=date(2024, 3, 1), symptoms=("Cramps",)),
        period(date(2024, 3, 2)),
    )

    assert find_period_starts(records) == [date(2024, 3, 2)]


def test_find_period_starts_ignores_insertion_order() -> None:
    records = {
        date(2024, 2, 2): period(date(2024, 2, 2)),
        date(2024, 2, 1): period(date(2024, 2, 1)),
    }

    assert find_period_starts(records) == [date(2024, 2, 1)]


def test_classify_day_without_data_is_all_false() -> None:
    info = classify_day(date(2024, 5, 5), {}, [])

    assert info.record is None
    assert not any(
        (
            info.is_period,
            info.is_period_start,
            info.is_period_end,
            info.is_in_period_range,
            info.is_predicted_period,
            info.is_fertile,
            info.is_ovulation,
        )
    )


def test_days_before_first_start_have_no_cycle_flags() -> None:
    snapshot = build_snapshot(_flow_run(date(2024, 1, 10), 4))

    for offset in range(1, 40):
        day = date(2024, 1, 10) - timedelta(days=offset)
        info = classify_snapshot_day(day, snapshot)
        assert not info.is_period_start
        assert not info.is_in_period_range
        assert not info.is_fertile
        assert not info.is_ovulation
        assert not info.is_predicted_period


def test_single_day_period_is_start_but_not_in_range() -> None:
    day = date(2024, 4, 8)
    snapshot = build_snapshot([period(day)])

    info = classify_snapshot_day(day, snapshot)

    assert info.is_period
    assert info.is_period_start
    assert not info.is_in_period_range
    assert info.period_intensity == "medium"


def test_logged_end_bounds_the_range_exclusively() -> None:
    snapshot = build_snapshot(_flow_run(date(2024, 1, 1), 5, end_flag=True))

    in_range = {
        day: classify_snapshot_day(day, snapshot).is_in_period_range
        for day in (date(2024, 1, offset) for offset in range(1, 7))
    }

    assert in_range == {
        date(2024, 1, 1): False,
        date(2024, 1, 2): True,
        date(2024, 1, 3): True,
        date(2024, 1, 4): True,
        date(2024, 1, 5): False,
        date(2024, 1, 6): False,
    }
    end = classify_snapshot_day(date(2024, 1, 5), snapshot)
    assert end.is_period_end
    assert end.is_period


def test_open_period_extends_over_logged_flow_days() -> None:
    snapshot = build_snapshot(_flow_run(date(2024, 1, 1), 5))

    for day in range(2, 6):
        assert classify_snapshot_day(date(2024, 1, day), snapshot).is_in_period_range
    assert not classify_snapshot_day(date(2024, 1, 1), snapshot).is_in_period_range
    assert not classify_snapshot_day(date(2024, 1, 6), snapshot).is_in_period_range


def test_range_between_start_and_end_covers_unlogged_days() -> None:
    snapshot = build_snapshot(
        [period(date(2024, 6, 1)), period(date(2024, 6, 5), "light", end=True)]
    )

    info = classify_snapshot_day(date(2024, 6, 3), snapshot)

    assert info.is_in_period_range
    assert not info.is_period


def test_end_flag_from_later_cycle_closes_open_period() -> None:
    snapshot = build_snapshot(
        [
            *_flow_run(date(2024, 1, 1), 3),
            period(date(2024, 1, 10), end=True),
        ]
    )

    assert classify_snapshot_day(date(2024, 1, 2), snapshot).is_in_period_range
    assert not classify_snapshot_day(date(2024, 1, 10), snapshot).is_in_period_range


def test_fertile_window_and_ovulation_follow_latest_start() -> None:
    snapshot = build_snapshot(_flow_run(date(2024, 1, 1), 4, end_flag=True))

    jan_11 = classify_snapshot_day(date(2024, 1, 11), snapshot)
    jan_15 = classify_snapshot_day(date(2024, 1, 15), snapshot)
    jan_17 = classify_snapshot_day(date(2024, 1, 17), snapshot)
    jan_18 = classify_snapshot_day(date(2024, 1, 18), snapshot)

    assert jan_11.is_fertile
    assert not jan_11.is_ovulation
    assert jan_15.is_fertile
    assert jan_15.is_ovulation
    assert jan_17.is_fertile
    assert not jan_18.is_fertile
    assert not classify_snapshot_day(date(2024, 1, 10), snapshot).is_fertile


def test_predicted_period_window_around_fixed_cycle_length() -> None:
    snapshot = build_snapshot(_flow_run(date(2024, 1, 1), 4, end_flag=True))

    predicted = [
        day
        for day in (date(2024, 1, 20) + timedelta(days=offset) for offset in range(20))
        if classify_snapshot_day(day, snapshot).is_predicted_period
    ]

    assert predicted[0] == date(2024, 1, 25)
    assert predicted[-1] == date(2024, 2, 1)
    assert len(predicted) == 8
    assert date(2024, 1, 30) in predicted


def test_predicted_period_skips_actual_period_days() -> None:
    snapshot = build_snapshot(
        [
            *_flow_run(date(2024, 1, 1), 4, end_flag=True),
            LogRecord(day=date(2024, 1, 27), period_flow="light"),
        ]
    )

    # The Jan 27 flow starts a new cycle, so predictions move forward.
    assert snapshot.period_starts == (date(2024, 1, 1), date(2024, 1, 27))
    assert not classify_snapshot_day(date(2024, 1, 27), snapshot).is_predicted_period


def test_predicted_period_excludes_open_range_days() -> None:
    records = _index(*_flow_run(date(2024, 1, 1), 3, end_flag=True))
    starts = [date(2024, 1, 1)]
    records[date(2024, 1, 30)] = period(date(2024, 1, 30))

    info = classify_day(date(2024, 1, 30), records, starts)

    assert info.is_period
    assert not info.is_predicted_period


def test_classification_uses_latest_start_for_predictions() -> None:
    snapshot = build_snapshot(
        [*_flow_run(date(2024, 1, 1), 3), *_flow_run(date(2024, 1, 30), 3)]
    )

    info = classify_snapshot_day(date(2024, 1, 15), snapshot)

    assert not info.is_ovulation
    assert not info.is_fertile
    assert classify_snapshot_day(date(2024, 2, 13), snapshot).is_ovulation


def test_classification_is_idempotent() -> None:
    snapshot = build_snapshot(_flow_run(date(2024, 1, 1), 5, end_flag=True))

    first = classify_snapshot_day(date(2024, 1, 3), snapshot)
    second = classify_snapshot_day(date(2024, 1, 3), snapshot)

    assert first == second


def test_build_snapshot_is_read_only() -> None:
    snapshot = build_snapshot([period(date(2024, 1, 1))])

    with pytest.raises(TypeError):
        snapshot.records[date(2024, 1, 2)] = period(date(2024, 1, 2))  # type: ignore
    assert snapshot.period_starts == (date(2024, 1, 1),)


def test_find_period_starts_at_earliest_date() -> None:
    records = _index(period(date.min), period(date.min + timedelta(days=1)))

    assert find_period_starts(records) == [date.min]


def test_classification_near_latest_date() -> None:
    start = date(9999, 12, 20)
    snapshot = build_snapshot([period(start)])

    info = classify_snapshot_day(date.max, snapshot)
    earlier = classify_snapshot_day(date(2024, 7, 1), snapshot)

    assert not info.is_predicted_period
    assert info.is_fertile
    assert classify_snapshot_day(start, snapshot).is_period_start
    assert not earlier.is_period_start
    assert not earlier.is_predicted_period


def test_classification_at_earliest_date() -> None:
    snapshot = build_snapshot([period(date.min)])

    info = classify_snapshot_day(date.min, snapshot)
    fertile = classify_snapshot_day(date.min + timedelta(days=10), snapshot)
    predicted = classify_snapshot_day(date.min + timedelta(days=24), snapshot)

    assert info.is_period_start
    assert fertile.is_fertile
    assert predicted.is_predicted_period
