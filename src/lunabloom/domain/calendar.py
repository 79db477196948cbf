"""Domain models for calendar classification."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType

from lunabloom.domain.logs import LogRecord


@dataclass(frozen=True)
class DayInfo:
    """Derived view of a single calendar day."""

    day: date
    record: LogRecord | None = None
    is_period: bool = False
    is_period_start: bool = False
    is_period_end: bool = False
    is_in_period_range: bool = False
    is_predicted_period: bool = False
    is_fertile: bool = False
    is_ovulation: bool = False

    @property
    def period_intensity(self) -> str | None:
        """Return the logged flow for period days."""
        if self.record is None or not self.record.is_period_day:
            return None
        return self.record.period_flow


@dataclass(frozen=True)
class CycleSnapshot:
    """Immutable view of all records plus their inferred period starts."""

    records: Mapping[date, LogRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
    period_starts: tuple[date, ...] = ()
