from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .cycle import CyclePhase

AVAILABLE_MOODS = (
    "Happy",
    "Sad",
    "Anxious",
    "Energetic",
    "Tired",
    "Calm",
    "Frustrated",
    "Excited",
    "Peaceful",
    "Overwhelmed",
    "Confident",
    "Emotional",
)

AVAILABLE_SYMPTOMS = (
    "Cramps",
    "Headache",
    "Bloating",
    "Breast tenderness",
    "Back pain",
    "Nausea",
    "Food cravings",
    "Mood swings",
    "Fatigue",
    "Acne",
    "Hot flashes",
    "Insomnia",
)


def _unique(values: list[str]) -> list[str]:
    # keeps first-seen order, symptom ranking depends on it
    return list(dict.fromkeys(v.strip() for v in values if v and v.strip()))


def _check_vocabulary(values: list[str], allowed: tuple[str, ...], label: str) -> list[str]:
    unknown = [v for v in values if v not in allowed]
    if unknown:
        raise ValueError(f"Unknown {label}: {', '.join(unknown)}")
    return values


class PreferredWorkoutTime(str, Enum):
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"


class UserProfile(BaseModel):
    age: int = Field(25, gt=0)
    workout_experience_years: int = Field(1, ge=0)
    diet_type: str = "balanced"
    workout_days_per_week: int = Field(3, ge=1, le=7)
    preferred_workout_time: PreferredWorkoutTime = PreferredWorkoutTime.morning
    major_workout_issues: list[str] = Field(default_factory=list)
    fitness_goals: list[str] = Field(default_factory=list)
    last_period_date: date = Field(default_factory=date.today)
    average_cycle_length: int = Field(28, ge=1)
    onboarded: bool = False

    @field_validator("major_workout_issues", "fitness_goals")
    @classmethod
    def _dedupe(cls, values: list[str]) -> list[str]:
        return _unique(values)


class JournalEntry(BaseModel):
    date: date
    day_rating: int = Field(5, ge=1, le=10)
    note: str = ""
    moods: list[str] = Field(default_factory=list)
    symptoms: list[str] = Field(default_factory=list)
    energy: int = Field(5, ge=1, le=10)
    sleep: int = Field(5, ge=1, le=10)
    stress: int = Field(5, ge=1, le=10)
    exercise: int = Field(5, ge=1, le=10)
    nutrition: int = Field(5, ge=1, le=10)
    social_connection: int = Field(5, ge=1, le=10)
    cycle_day: int = Field(1, ge=1)
    cycle_phase: CyclePhase = CyclePhase.menstrual
    voice_note_url: str | None = None

    @field_validator("moods")
    @classmethod
    def _validate_moods(cls, values: list[str]) -> list[str]:
        return _check_vocabulary(_unique(values), AVAILABLE_MOODS, "moods")

    @field_validator("symptoms")
    @classmethod
    def _validate_symptoms(cls, values: list[str]) -> list[str]:
        return _check_vocabulary(_unique(values), AVAILABLE_SYMPTOMS, "symptoms")
