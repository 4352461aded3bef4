from datetime import date
from enum import Enum

from pydantic import BaseModel


class CyclePhase(str, Enum):
    menstrual = "Menstrual"
    follicular = "Follicular"
    ovulatory = "Ovulatory"
    luteal = "Luteal"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def workout_recommendations(self) -> list[str]:
        return list(_WORKOUT_RECOMMENDATIONS[self])

    @property
    def nutrition_focus(self) -> list[str]:
        return list(_NUTRITION_FOCUS[self])

    @property
    def color(self) -> str:
        return _COLORS[self]


_DESCRIPTIONS = {
    CyclePhase.menstrual: "Days 1-5: Focus on gentle movement, rest, and self-care",
    CyclePhase.follicular: "Days 6-13: Energy is building, great for trying new workouts",
    CyclePhase.ovulatory: "Days 14-16: Peak energy, perfect for intense workouts",
    CyclePhase.luteal: "Days 17-28: Energy may fluctuate, listen to your body",
}

_WORKOUT_RECOMMENDATIONS = {
    CyclePhase.menstrual: ("Gentle yoga", "Walking", "Light stretching", "Meditation", "Restorative poses"),
    CyclePhase.follicular: ("Strength training", "Cardio", "Dance", "Pilates", "New workout classes"),
    CyclePhase.ovulatory: ("HIIT", "Heavy lifting", "Sprint intervals", "Boxing", "Intense cardio"),
    CyclePhase.luteal: ("Moderate cardio", "Yoga", "Swimming", "Barre", "Mindful movement"),
}

_NUTRITION_FOCUS = {
    CyclePhase.menstrual: ("Iron-rich foods", "Magnesium", "Warm meals", "Anti-inflammatory foods"),
    CyclePhase.follicular: ("Protein for muscle building", "Complex carbs", "Fresh fruits", "Leafy greens"),
    CyclePhase.ovulatory: ("Antioxidant-rich foods", "Healthy fats", "Fiber", "Adequate protein"),
    CyclePhase.luteal: ("B vitamins", "Calcium", "Complex carbs", "Mood-supporting foods"),
}

_COLORS = {
    CyclePhase.menstrual: "red",
    CyclePhase.follicular: "green",
    CyclePhase.ovulatory: "orange",
    CyclePhase.luteal: "purple",
}


class PhaseInfo(BaseModel):
    phase: CyclePhase
    description: str
    workout_recommendations: list[str]
    nutrition_focus: list[str]
    color: str

    @classmethod
    def from_phase(cls, phase: CyclePhase) -> "PhaseInfo":
        return cls(
            phase=phase,
            description=phase.description,
            workout_recommendations=phase.workout_recommendations,
            nutrition_focus=phase.nutrition_focus,
            color=phase.color,
        )


class CycleStatus(BaseModel):
    phase: CyclePhase
    cycle_day: int
    cycle_length: int
    next_period_date: date
    days_until_next_period: int
