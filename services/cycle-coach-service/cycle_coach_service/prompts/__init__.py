from .content import (
    average_energy,
    build_insights_prompt,
    build_nutrition_prompt,
    build_workout_prompt,
    common_moods,
    common_symptoms,
    recent_patterns,
    wellness_averages,
)
from .system_messages import (
    INSIGHTS_SYSTEM_MESSAGE,
    NUTRITION_SYSTEM_MESSAGE,
    WORKOUT_SYSTEM_MESSAGE,
)

__all__ = [
    "average_energy",
    "build_insights_prompt",
    "build_nutrition_prompt",
    "build_workout_prompt",
    "common_moods",
    "common_symptoms",
    "recent_patterns",
    "wellness_averages",
    "INSIGHTS_SYSTEM_MESSAGE",
    "NUTRITION_SYSTEM_MESSAGE",
    "WORKOUT_SYSTEM_MESSAGE",
]
