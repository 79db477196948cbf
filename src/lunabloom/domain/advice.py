"""Request models for the AI advice flows."""

from typing import Literal

from pydantic import BaseModel, Field

CyclePhase = Literal["Period", "Follicular", "Fertile Window", "Luteal"]
PregnancyStage = Literal[
    "Trying to Conceive",
    "1st Trimester",
    "2nd Trimester",
    "3rd Trimester",
    "Postpartum",
]
DietaryPreference = Literal["Vegetarian", "Vegan", "Gluten-Free", "Dairy-Free"]
ActivityLevel = Literal["Sedentary", "Light", "Moderate", "Active"]


class ChatTurn(BaseModel):
    """A previous message in the health visitor conversation."""

    role: Literal["User", "Luna"]
    text: str


class ChatRequest(BaseModel):
    """Single chat turn with optional history."""

    message: str = Field(min_length=1)
    history: list[ChatTurn] = Field(default_factory=list)


class LifestylePlanRequest(BaseModel):
    """Inputs for a weekly pregnancy lifestyle plan."""

    weight_kg: float | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    pregnancy_stage: PregnancyStage
    gestational_age_weeks: int | None = Field(default=None, ge=0)


class MealPlanRequest(BaseModel):
    """Inputs for a weekly pregnancy meal and vitamin plan."""

    age: int | None = Field(default=None, gt=0)
    weight_kg: float | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    pregnancy_stage_weeks: int = Field(ge=1, le=42)
    dietary_preferences: list[DietaryPreference] = Field(default_factory=list)
    other_dietary_restrictions: str | None = None
    activity_level: ActivityLevel | None = None
    pre_existing_conditions: str | None = None


class MenstrualTipsRequest(BaseModel):
    """Inputs for menstrual health tips."""

    current_phase: CyclePhase | None = None
    recent_symptoms: list[str] = Field(default_factory=list)
