from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from textwrap import dedent

from ..schemas.cycle import CyclePhase
from ..schemas.generation import RecentPatterns
from ..schemas.profile import JournalEntry, UserProfile

PLAN_WINDOW = 7
INSIGHTS_WINDOW = 14
PATTERNS_WINDOW = 7
DEFAULT_ENERGY = 5


def _join(values: Sequence[str]) -> str:
    return ", ".join(values)


def recent_entries(entries: Sequence[JournalEntry], limit: int) -> list[JournalEntry]:
    """Newest ``limit`` entries; callers pass entries sorted newest first."""
    return list(entries[:limit])


def average_energy(entries: Sequence[JournalEntry]) -> int:
    if not entries:
        return DEFAULT_ENERGY
    return sum(e.energy for e in entries) // len(entries)


def _most_frequent(values: list[str], limit: int) -> list[str]:
    # Counter.most_common is stable, so ties keep first-seen order
    return [value for value, _ in Counter(values).most_common(limit)]


def common_symptoms(entries: Sequence[JournalEntry], limit: int = 3) -> list[str]:
    return _most_frequent([s for e in entries for s in e.symptoms], limit)


def common_moods(entries: Sequence[JournalEntry], limit: int = 3) -> list[str]:
    return _most_frequent([m for e in entries for m in e.moods], limit)


def wellness_averages(entries: Sequence[JournalEntry]) -> dict[str, float]:
    """Float means of energy, stress and sleep; zeros for an empty window."""
    if not entries:
        return {"energy": 0.0, "stress": 0.0, "sleep": 0.0}
    count = len(entries)
    return {
        "energy": sum(e.energy for e in entries) / count,
        "stress": sum(e.stress for e in entries) / count,
        "sleep": sum(e.sleep for e in entries) / count,
    }


def recent_patterns(entries: Sequence[JournalEntry]) -> RecentPatterns:
    window = recent_entries(entries, PATTERNS_WINDOW)
    averages = wellness_averages(window)
    return RecentPatterns(
        entry_count=len(window),
        average_energy=averages["energy"],
        average_stress=averages["stress"],
        average_sleep=averages["sleep"],
        common_moods=common_moods(window),
        common_symptoms=common_symptoms(window),
    )


def build_workout_prompt(
    *,
    phase: CyclePhase,
    profile: UserProfile,
    journal_entries: Sequence[JournalEntry],
) -> str:
    """Compose the user prompt for workout generation."""
    window = recent_entries(journal_entries, PLAN_WINDOW)
    return dedent(
        f"""
        Create a personalized workout for a {profile.age}-year-old woman in her {phase.value.lower()} phase.

        User Profile:
        - Workout experience: {profile.workout_experience_years} years
        - Major workout issues: {_join(profile.major_workout_issues)}
        - Workouts per week: {profile.workout_days_per_week}
        - Preferred time: {profile.preferred_workout_time.value}
        - Fitness goals: {_join(profile.fitness_goals)}

        Recent patterns:
        - Average energy level: {average_energy(window)}/10
        - Common symptoms: {_join(common_symptoms(window))}

        Phase-specific needs for {phase.value} phase:
        {phase.description}
        Recommended exercises: {_join(phase.workout_recommendations)}

        Create a workout that respects these patterns and optimizes for this cycle phase.
        """
    ).strip()


def build_nutrition_prompt(
    *,
    phase: CyclePhase,
    profile: UserProfile,
    journal_entries: Sequence[JournalEntry],
) -> str:
    """Compose the user prompt for daily meal-plan generation."""
    window = recent_entries(journal_entries, PLAN_WINDOW)
    return dedent(
        f"""
        Create a personalized daily meal plan for a {profile.age}-year-old woman in her {phase.value.lower()} phase.

        User Profile:
        - Diet type: {profile.diet_type}
        - Activity level: {profile.workout_days_per_week} workouts/week
        - Fitness goals: {_join(profile.fitness_goals)}

        Recent patterns:
        - Average energy level: {average_energy(window)}/10
        - Common symptoms: {_join(common_symptoms(window))}

        Phase-specific nutrition focus for {phase.value} phase:
        {_join(phase.nutrition_focus)}

        Create 3 meals (breakfast, lunch, dinner) that support hormonal health and address common symptoms.
        """
    ).strip()


def _format_entry(entry: JournalEntry) -> str:
    return (
        f"Day {entry.cycle_day} ({entry.cycle_phase.value}): Energy {entry.energy}/10, "
        f"Mood: {_join(entry.moods)}, Symptoms: {_join(entry.symptoms)}"
    )


def build_insights_prompt(
    *,
    profile: UserProfile,
    journal_entries: Sequence[JournalEntry],
    current_phase: CyclePhase,
) -> str:
    """Compose the user prompt for free-text wellness insights."""
    window = recent_entries(journal_entries, INSIGHTS_WINDOW)

    header = dedent(
        f"""
        Analyze this woman's health patterns and provide personalized insights.

        User: {profile.age} years old, {profile.workout_experience_years} years workout experience
        Current phase: {current_phase.value}

        Recent journal entries (last {INSIGHTS_WINDOW} days):
        """
    ).strip()
    entry_lines = "\n".join(_format_entry(entry) for entry in window)
    footer = "Provide supportive insights about patterns you notice and gentle recommendations for wellness."

    return "\n".join([header, entry_lines, "", footer])
