"""Pydantic models for API request bodies."""

from datetime import date

from pydantic import BaseModel, Field

from lunabloom.domain.logs import LogRecord, PeriodFlow


class LogEntryPayload(BaseModel):
    """Full log entry for one day, as submitted by the log form."""

    period_flow: PeriodFlow = "none"
    is_period_end: bool = False
    symptoms: list[str] = Field(default_factory=list)
    mood: str | None = None
    sexual_activity_count: int = Field(default=0, ge=0)
    protection_used: bool | None = None
    orgasm: bool | None = None
    took_pill: bool | None = None
    notes: str | None = None

    def to_record(self, day: date) -> LogRecord:
        """Return the domain record for the given day."""
        return LogRecord(
            day=day,
            period_flow=self.period_flow,
            is_period_end=self.is_period_end,
            symptoms=tuple(dict.fromkeys(self.symptoms)),
            mood=self.mood or None,
            sexual_activity_count=self.sexual_activity_count,
            protection_used=self.protection_used,
            orgasm=self.orgasm,
            took_pill=self.took_pill,
            notes=self.notes or None,
        )


class PinPayload(BaseModel):
    """PIN submitted for setup or verification."""

    pin: str


class PreferencesPatch(BaseModel):
    """Partial preference update."""

    theme: str | None = None
    accent_color: str | None = None
    language: str | None = None
    period_reminder: bool | None = None
    fertile_reminder: bool | None = None
    app_lock: bool | None = None
