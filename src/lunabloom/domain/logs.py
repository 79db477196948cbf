"""Domain models for daily cycle logs."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PeriodFlow = Literal["none", "light", "medium", "heavy"]

FLOW_NONE = "none"
PERIOD_FLOWS: tuple[str, ...] = ("none", "light", "medium", "heavy")


@dataclass(frozen=True)
class LogRecord:
    """Everything logged for a single calendar day."""

    day: date
    period_flow: str = FLOW_NONE
    is_period_end: bool = False
    symptoms: tuple[str, ...] = ()
    mood: str | None = None
    sexual_activity_count: int = 0
    protection_used: bool | None = None
    orgasm: bool | None = None
    took_pill: bool | None = None
    notes: str | None = None

    @property
    def is_period_day(self) -> bool:
        """Return True when any flow was logged for the day."""
        return self.period_flow != FLOW_NONE

    def has_data(self) -> bool:
        """Return True when the record carries anything worth storing."""
        return any(
            (
                self.is_period_day,
                self.is_period_end,
                self.symptoms,
                self.mood,
                self.sexual_activity_count > 0,
                self.protection_used,
                self.orgasm,
                self.took_pill,
                self.notes,
            )
        )

    def to_payload(self) -> dict[str, object]:
        """Return the persisted JSON shape for this record."""
        payload: dict[str, object] = {
            "date": self.day.isoformat(),
            "periodFlow": self.period_flow,
            "isPeriodEnd": self.is_period_end,
            "symptoms": list(self.symptoms),
            "sexualActivityCount": self.sexual_activity_count,
        }
        optional = {
            "mood": self.mood,
            "protectionUsed": self.protection_used,
            "orgasm": self.orgasm,
            "tookPill": self.took_pill,
            "notes": self.notes,
        }
        payload.update(
            {key: value for key, value in optional.items() if value is not None}
        )
        return payload


class StoredLogEntry(BaseModel):
    """Persisted log entry as found in storage."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    day: date | None = Field(default=None, alias="date")
    period_flow: PeriodFlow | None = Field(default=None, alias="periodFlow")
    is_period_end: bool | None = Field(default=None, alias="isPeriodEnd")
    symptoms: list[str] | None = None
    mood: str | None = None
    sexual_activity_count: int | None = Field(
        default=None, ge=0, alias="sexualActivityCount"
    )
    protection_used: bool | None = Field(default=None, alias="protectionUsed")
    orgasm: bool | None = None
    took_pill: bool | None = Field(default=None, alias="tookPill")
    notes: str | None = None

    def to_record(self, fallback_day: date) -> LogRecord:
        """Convert to a domain record, using the storage key date if needed."""
        flow = self.period_flow or FLOW_NONE
        return LogRecord(
            day=self.day or fallback_day,
            period_flow=flow,
            is_period_end=bool(self.is_period_end) and flow != FLOW_NONE,
            symptoms=tuple(self.symptoms or ()),
            mood=self.mood or None,
            sexual_activity_count=self.sexual_activity_count or 0,
            protection_used=self.protection_used,
            orgasm=self.orgasm,
            took_pill=self.took_pill,
            notes=self.notes or None,
        )
