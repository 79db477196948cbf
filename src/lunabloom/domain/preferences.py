"""Domain models for app preferences."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Preferences:
    """User-facing app preferences."""

    theme: str = "light"
    accent_color: str = "coral"
    language: str = "en"
    period_reminder: bool = True
    fertile_reminder: bool = True
    app_lock: bool = False
