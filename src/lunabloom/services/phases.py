"""Cycle phase classification for calendar days.

Period starts are inferred from the logged flow: a day is a start when it has
flow and the previous calendar day has no record or no flow. Predictions are
fixed offsets from the most recent start; they do not learn from history.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta
from types import MappingProxyType

from lunabloom.domain.calendar import CycleSnapshot, DayInfo
from lunabloom.domain.logs import LogRecord

CYCLE_LENGTH_DAYS = 28
OVULATION_DAY = 14
FERTILE_WINDOW_START_DAY = 10
FERTILE_WINDOW_END_DAY = 16
PREDICTION_DAYS_BEFORE = 4
PREDICTION_DAYS_AFTER = 3
PREDICTION_WINDOW_START = CYCLE_LENGTH_DAYS - PREDICTION_DAYS_BEFORE
PREDICTION_WINDOW_END = CYCLE_LENGTH_DAYS + PREDICTION_DAYS_AFTER


def find_period_starts(records: Mapping[date, LogRecord]) -> list[date]:
    """Return the ascending dates on which a flow run begins."""
    starts = []
    for day in sorted(records):
        if not records[day].is_period_day:
            continue
        previous = None if day == date.min else records.get(day - timedelta(days=1))
        if previous is None or not previous.is_period_day:
            starts.append(day)
    return starts


def build_snapshot(records: Iterable[LogRecord]) -> CycleSnapshot:
    """Index records by day and derive their period starts."""
    indexed = {record.day: record for record in records}
    return CycleSnapshot(
        records=MappingProxyType(indexed),
        period_starts=tuple(find_period_starts(indexed)),
    )


def classify_day(
    target: date,
    records: Mapping[date, LogRecord],
    period_starts: Sequence[date],
) -> DayInfo:
    """Classify a day against the logged history.

    Never raises; missing data yields an all-false result.
    """
    record = records.get(target)
    is_period = record is not None and record.is_period_day
    is_period_end = record is not None and record.is_period_end

    start = _latest_start_on_or_before(target, period_starts)
    is_period_start = False
    is_in_period_range = False
    if start is not None:
        end = _inferred_end(start, records)
        is_period_start = target == start
        if end is not None:
            is_in_period_range = start < target < end
        else:
            is_in_period_range = target > start and is_period

    is_fertile = False
    is_ovulation = False
    is_predicted_period = False
    if period_starts:
        latest_start = period_starts[-1]
        days_since = (target - latest_start).days
        is_fertile = FERTILE_WINDOW_START_DAY <= days_since <= FERTILE_WINDOW_END_DAY
        is_ovulation = days_since == OVULATION_DAY
        already_period = (
            is_period or is_period_start or is_period_end or is_in_period_range
        )
        in_window = PREDICTION_WINDOW_START <= days_since <= PREDICTION_WINDOW_END
        is_predicted_period = in_window and not already_period

    return DayInfo(
        day=target,
        record=record,
        is_period=is_period,
        is_period_start=is_period_start,
        is_period_end=is_period_end,
        is_in_period_range=is_in_period_range,
        is_predicted_period=is_predicted_period,
        is_fertile=is_fertile,
        is_ovulation=is_ovulation,
    )


def classify_snapshot_day(target: date, snapshot: CycleSnapshot) -> DayInfo:
    """Classify a day against an aggregator snapshot."""
    return classify_day(target, snapshot.records, snapshot.period_starts)


def _latest_start_on_or_before(
    target: date, period_starts: Sequence[date]
) -> date | None:
    for start in reversed(period_starts):
        if start <= target:
            return start
    return None


def _inferred_end(start: date, records: Mapping[date, LogRecord]) -> date | None:
    for day in sorted(day for day in records if day >= start):
        if records[day].is_period_end:
            return day
    return None
