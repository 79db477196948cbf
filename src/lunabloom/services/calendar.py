"""Calendar views over the aggregated cycle data."""

from dataclasses import dataclass
from datetime import date, timedelta

from lunabloom.domain.advice import CyclePhase
from lunabloom.domain.calendar import DayInfo
from lunabloom.services.aggregator import CycleDataAggregator, month_bounds
from lunabloom.services.phases import (
    FERTILE_WINDOW_END_DAY,
    FERTILE_WINDOW_START_DAY,
    classify_snapshot_day,
)


@dataclass
class CalendarService:
    """Classifies calendar days using the aggregator's current snapshot."""

    aggregator: CycleDataAggregator

    def day(self, day: date) -> DayInfo:
        """Return the classification for a single day."""
        return classify_snapshot_day(day, self.aggregator.snapshot)

    def month(self, anchor: date) -> list[DayInfo]:
        """Return one classification per day of the anchor's month."""
        snapshot = self.aggregator.snapshot
        first, last = month_bounds(anchor)
        return [
            classify_snapshot_day(first + timedelta(days=offset), snapshot)
            for offset in range((last - first).days + 1)
        ]

    def phase_for(self, day: date) -> CyclePhase | None:
        """Return a coarse cycle phase label, or None before any known start."""
        snapshot = self.aggregator.snapshot
        starts = [start for start in snapshot.period_starts if start <= day]
        if not starts:
            return None
        info = classify_snapshot_day(day, snapshot)
        if (
            info.is_period
            or info.is_period_start
            or info.is_period_end
            or info.is_in_period_range
        ):
            return "Period"
        days_since = (day - starts[-1]).days
        if days_since < FERTILE_WINDOW_START_DAY:
            return "Follicular"
        if days_since <= FERTILE_WINDOW_END_DAY:
            return "Fertile Window"
        return "Luteal"
