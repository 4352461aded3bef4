from cycle_coach_service.prompts import (
    average_energy,
    build_insights_prompt,
    build_nutrition_prompt,
    build_workout_prompt,
    common_moods,
    common_symptoms,
    recent_patterns,
    wellness_averages,
)
from cycle_coach_service.schemas.cycle import CyclePhase


def test_average_energy_truncates(entry):
    entries = [entry(i, energy=value) for i, value in enumerate([4, 6, 8, 5, 7, 6, 5])]
    # 41 / 7 = 5.857...
    assert average_energy(entries) == 5


def test_average_energy_defaults_to_five_for_empty_window():
    assert average_energy([]) == 5


def test_common_symptoms_ranks_by_count_then_first_seen(entry):
    entries = [
        entry(0, symptoms=["Bloating", "Cramps"]),
        entry(1, symptoms=["Cramps", "Headache"]),
        entry(2, symptoms=["Headache", "Fatigue"]),
        entry(3, symptoms=["Acne"]),
    ]
    assert common_symptoms(entries) == ["Cramps", "Headache", "Bloating"]


def test_common_moods(entry):
    entries = [entry(0, moods=["Tired", "Calm"]), entry(1, moods=["Calm"])]
    assert common_moods(entries) == ["Calm", "Tired"]


def test_wellness_averages(entry):
    entries = [entry(0, energy=4, stress=6, sleep=7), entry(1, energy=7, stress=3, sleep=8)]
    assert wellness_averages(entries) == {"energy": 5.5, "stress": 4.5, "sleep": 7.5}
    assert wellness_averages([]) == {"energy": 0.0, "stress": 0.0, "sleep": 0.0}


def test_workout_prompt_interpolates_profile_phase_and_patterns(profile, entry):
    entries = [entry(i, energy=value, symptoms=["Fatigue"]) for i, value in enumerate([4, 6, 8, 5, 7, 6, 5])]
    prompt = build_workout_prompt(phase=CyclePhase.luteal, profile=profile, journal_entries=entries)

    assert prompt.startswith("Create a personalized workout for a 32-year-old woman in her luteal phase.")
    assert "- Workout experience: 4 years" in prompt
    assert "- Major workout issues: Knee pain" in prompt
    assert "- Workouts per week: 4" in prompt
    assert "- Preferred time: evening" in prompt
    assert "- Fitness goals: Build strength, Improve flexibility" in prompt
    assert "- Average energy level: 5/10" in prompt
    assert "- Common symptoms: Fatigue" in prompt
    assert "Phase-specific needs for Luteal phase:\nDays 17-28: Energy may fluctuate" in prompt
    assert "Recommended exercises: Moderate cardio, Yoga, Swimming, Barre, Mindful movement" in prompt


def test_workout_prompt_only_uses_newest_seven_entries(profile, entry):
    entries = [entry(i, energy=8) for i in range(7)] + [entry(7, energy=1, symptoms=["Nausea"])]
    prompt = build_workout_prompt(phase=CyclePhase.follicular, profile=profile, journal_entries=entries)

    assert "- Average energy level: 8/10" in prompt
    assert "Nausea" not in prompt


def test_workout_prompt_without_entries(profile):
    profile.major_workout_issues = []
    prompt = build_workout_prompt(phase=CyclePhase.menstrual, profile=profile, journal_entries=[])
    assert "- Average energy level: 5/10" in prompt
    assert "- Common symptoms: \n" in prompt
    assert "- Major workout issues: \n" in prompt
    assert "none" not in prompt


def test_nutrition_prompt(profile, entry):
    prompt = build_nutrition_prompt(
        phase=CyclePhase.menstrual,
        profile=profile,
        journal_entries=[entry(0, energy=3, symptoms=["Cramps"])],
    )

    assert prompt.startswith("Create a personalized daily meal plan for a 32-year-old woman in her menstrual phase.")
    assert "- Diet type: vegetarian" in prompt
    assert "- Activity level: 4 workouts/week" in prompt
    assert "- Average energy level: 3/10" in prompt
    assert "- Common symptoms: Cramps" in prompt
    assert "Iron-rich foods, Magnesium, Warm meals, Anti-inflammatory foods" in prompt
    assert prompt.endswith("support hormonal health and address common symptoms.")


def test_insights_prompt_uses_fourteen_entries(profile, entry):
    entries = [entry(i, cycle_day=i + 1, energy=6, moods=["Calm"], symptoms=["Bloating"]) for i in range(16)]
    prompt = build_insights_prompt(profile=profile, journal_entries=entries, current_phase=CyclePhase.follicular)

    assert "User: 32 years old, 4 years workout experience" in prompt
    assert "Current phase: Follicular" in prompt
    assert "Day 1 (Follicular): Energy 6/10, Mood: Calm, Symptoms: Bloating" in prompt
    assert "Day 14 (" in prompt
    assert "Day 15 (" not in prompt
    assert "Day 16 (" not in prompt
    assert prompt.endswith("gentle recommendations for wellness.")


def test_insights_prompt_without_entries(profile):
    prompt = build_insights_prompt(profile=profile, journal_entries=[], current_phase=CyclePhase.luteal)
    assert prompt.endswith(
        "Recent journal entries (last 14 days):\n\n\n"
        "Provide supportive insights about patterns you notice and gentle recommendations for wellness."
    )


def test_insights_prompt_carries_only_the_entry_log(profile, entry):
    entries = [entry(i, energy=9 if i < 7 else 1, moods=["Calm"]) for i in range(14)]
    prompt = build_insights_prompt(profile=profile, journal_entries=entries, current_phase=CyclePhase.follicular)

    lines = prompt.splitlines()
    assert lines[:5] == [
        "Analyze this woman's health patterns and provide personalized insights.",
        "",
        "User: 32 years old, 4 years workout experience",
        "Current phase: Follicular",
        "",
    ]
    assert lines[5] == "Recent journal entries (last 14 days):"
    assert len([line for line in lines if line.startswith("Day ")]) == 14
    assert "Averages" not in prompt
    assert "Most common moods" not in prompt


def test_recent_patterns_use_newest_week(entry):
    entries = [entry(i, energy=9, stress=2, sleep=8, moods=["Calm"], symptoms=["Cramps"]) for i in range(7)]
    entries += [entry(i, energy=1, stress=9, sleep=3, moods=["Sad"], symptoms=["Acne"]) for i in range(7, 14)]
    patterns = recent_patterns(entries)

    assert patterns.entry_count == 7
    assert (patterns.average_energy, patterns.average_stress, patterns.average_sleep) == (9.0, 2.0, 8.0)
    assert patterns.common_moods == ["Calm"]
    assert patterns.common_symptoms == ["Cramps"]


def test_recent_patterns_empty():
    patterns = recent_patterns([])
    assert patterns.entry_count == 0
    assert patterns.average_energy == 0.0
    assert patterns.common_moods == []
