"""Descriptive statistics over the logged cycle history."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from lunabloom.domain.insights import CycleInsights
from lunabloom.domain.logs import LogRecord
from lunabloom.services.aggregator import CycleDataAggregator
from lunabloom.services.phases import find_period_starts

MIN_CYCLE_LENGTH = 10
MAX_CYCLE_LENGTH = 100
MAX_PERIOD_LENGTH = 20


def compute_insights(records: Mapping[date, LogRecord]) -> CycleInsights:
    """Average cycle and period lengths plus a next-period estimate."""
    starts = find_period_starts(records)
    cycle_lengths = [
        length
        for length in (
            (current - previous).days
            for previous, current in zip(starts, starts[1:], strict=False)
        )
        if MIN_CYCLE_LENGTH < length < MAX_CYCLE_LENGTH
    ]
    period_lengths = [
        length
        for length in (_run_length(start, records) for start in starts)
        if 0 < length < MAX_PERIOD_LENGTH
    ]
    avg_cycle = _rounded_mean(cycle_lengths)
    avg_period = _rounded_mean(period_lengths)

    predicted = None
    if (
        starts
        and avg_cycle
        and avg_period
        and (date.max - starts[-1]).days >= avg_cycle + avg_period - 1
    ):
        next_start = starts[-1] + timedelta(days=avg_cycle)
        predicted = (next_start, next_start + timedelta(days=avg_period - 1))

    return CycleInsights(
        avg_cycle_length=avg_cycle,
        avg_period_length=avg_period,
        predicted_next_period=predicted,
        cycle_lengths=cycle_lengths,
        period_lengths=period_lengths,
    )


@dataclass
class InsightsService:
    """Computes insights from the aggregator's current snapshot."""

    aggregator: CycleDataAggregator

    def get(self) -> CycleInsights:
        """Return insights for everything logged so far."""
        return compute_insights(self.aggregator.snapshot.records)


def _run_length(start: date, records: Mapping[date, LogRecord]) -> int:
    length = 0
    day = start
    while (record := records.get(day)) is not None and record.is_period_day:
        length += 1
        if day == date.max:
            break
        day += timedelta(days=1)
    return length


def _rounded_mean(values: list[int]) -> int | None:
    if not values:
        return None
    return math.floor(sum(values) / len(values) + 0.5)
