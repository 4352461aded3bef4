from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .cycle import CyclePhase
from .profile import JournalEntry, UserProfile


class GenerationKind(str, Enum):
    workouts = "workouts"
    meal_plans = "meal-plans"
    insights = "insights"


class CycleStatusRequest(BaseModel):
    profile: UserProfile
    today: date | None = None


class GenerationRequest(BaseModel):
    profile: UserProfile
    journal_entries: list[JournalEntry] = Field(
        default_factory=list,
        description="Newest entry first; only the most recent window is used",
    )
    today: date | None = None


class InsightsResponse(BaseModel):
    phase: CyclePhase
    insights: str


class TaskSubmissionResponse(BaseModel):
    task_id: str
    status: str


class TaskStatusResponse(BaseModel):
    task_id: str
    kind: GenerationKind
    status: str
    result: Any | None = None
    error: str | None = None


class PatternsRequest(BaseModel):
    journal_entries: list[JournalEntry] = Field(default_factory=list, description="Newest entry first")


class RecentPatterns(BaseModel):
    """Wellness averages and most frequent moods/symptoms over the newest week of entries."""

    entry_count: int
    average_energy: float
    average_stress: float
    average_sleep: float
    common_moods: list[str]
    common_symptoms: list[str]
