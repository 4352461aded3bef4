import json
import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure the service package and the shared lib are importable regardless of repo root cwd
SERVICE_ROOT = Path(__file__).resolve().parents[1]
BACKEND_COMMON_ROOT = Path(__file__).resolve().parents[3] / "libs" / "backend-common"
for _path in (SERVICE_ROOT, BACKEND_COMMON_ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from cycle_coach_service.config import Settings  # noqa: E402
from cycle_coach_service.schemas.cycle import CyclePhase  # noqa: E402
from cycle_coach_service.schemas.profile import JournalEntry, UserProfile  # noqa: E402

TODAY = date(2024, 3, 11)


class FakeTextGenerator:
    """Stands in for GenerationClient: records prompts and replays canned replies or errors."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: list[tuple[str, str]] = []

    async def send(self, prompt: str, system_instruction: str) -> str:
        self.calls.append((prompt, system_instruction))
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


def chat_envelope(content: str) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
    }


def make_entry(days_ago: int = 0, **fields) -> JournalEntry:
    fields.setdefault("cycle_phase", CyclePhase.follicular)
    return JournalEntry(date=TODAY - timedelta(days=days_ago), **fields)


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return Settings(_env_file=None, OPENAI_API_KEY="test-key")


@pytest.fixture
def profile() -> UserProfile:
    # Day 11 of a 28-day cycle on TODAY
    return UserProfile(
        age=32,
        workout_experience_years=4,
        diet_type="vegetarian",
        workout_days_per_week=4,
        preferred_workout_time="evening",
        major_workout_issues=["Knee pain"],
        fitness_goals=["Build strength", "Improve flexibility"],
        last_period_date=TODAY - timedelta(days=10),
        average_cycle_length=28,
        onboarded=True,
    )


@pytest.fixture
def sample_workout_json() -> str:
    return json.dumps(
        {
            "title": "Test",
            "exercises": [{"name": "Squats", "sets": 3, "reps": "10"}],
            "duration": 20,
            "difficulty": "Beginner",
        }
    )


@pytest.fixture
def fake_generator():
    return FakeTextGenerator


@pytest.fixture
def envelope():
    return chat_envelope


@pytest.fixture
def entry():
    return make_entry


@pytest.fixture
def today() -> date:
    return TODAY
