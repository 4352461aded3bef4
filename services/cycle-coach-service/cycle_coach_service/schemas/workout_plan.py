from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .cycle import CyclePhase


class Difficulty(str, Enum):
    beginner = "Beginner"
    moderate = "Moderate"
    advanced = "Advanced"


class Exercise(BaseModel):
    name: str
    sets: int = 3
    reps: str = "10-12"
    duration: int | None = None  # seconds
    rest_time: int = 60  # seconds
    instructions: str = ""
    target_muscles: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    difficulty: Difficulty = Difficulty.moderate
    category: str = "Strength"


class WorkoutPlan(BaseModel):
    title: str
    exercises: list[Exercise] = Field(default_factory=list)
    duration: int = 30  # minutes
    difficulty: Difficulty = Difficulty.moderate
    cycle_phase: CyclePhase = CyclePhase.follicular
    is_ai_generated: bool = True
    date_created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_added_to_schedule: bool = False
    scheduled_date: date | None = None
    tags: list[str] = Field(default_factory=list)
    description: str = ""

    @model_validator(mode="after")
    def _scheduled_date_implies_flag(self) -> "WorkoutPlan":
        if self.scheduled_date is not None:
            self.is_added_to_schedule = True
        return self
