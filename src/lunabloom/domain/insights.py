"""Domain models for cycle insights."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CycleInsights:
    """Averages and a rough forecast derived from the logged history."""

    avg_cycle_length: int | None
    avg_period_length: int | None
    predicted_next_period: tuple[date, date] | None
    cycle_lengths: list[int]
    period_lengths: list[int]
