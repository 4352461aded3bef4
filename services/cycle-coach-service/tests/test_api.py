import time

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def fake(fake_generator, sample_workout_json):
    return fake_generator(sample_workout_json)


@pytest.fixture()
def client(monkeypatch, fake):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    from cycle_coach_service.config import get_settings
    from cycle_coach_service.dependencies import get_content_generator, get_task_registry
    from cycle_coach_service.main import app
    from cycle_coach_service.services.content_generation import ContentGenerator

    get_settings.cache_clear()
    generator = ContentGenerator(fake)
    app.dependency_overrides[get_content_generator] = lambda: generator
    app.dependency_overrides[get_task_registry] = lambda: generator.registry

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture()
def body(profile, today):
    return {"profile": profile.model_dump(mode="json"), "today": today.isoformat()}


def test_health(client: TestClient):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_cycle_status(client: TestClient, body):
    r = client.post("/api/v1/cycle/status", json=body)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["phase"] == "Follicular"
    assert data["cycle_day"] == 11
    assert data["cycle_length"] == 28
    assert data["next_period_date"] == "2024-03-29"
    assert data["days_until_next_period"] == 18


def test_list_phases(client: TestClient):
    r = client.get("/api/v1/cycle/phases")
    assert r.status_code == 200
    phases = r.json()
    assert [p["phase"] for p in phases] == ["Menstrual", "Follicular", "Ovulatory", "Luteal"]


def test_generate_workout(client: TestClient, body, fake):
    r = client.post("/api/v1/generation/workouts", json=body)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["title"] == "Test"
    assert data["cycle_phase"] == "Follicular"
    assert data["exercises"][0]["name"] == "Squats"
    assert len(fake.calls) == 1


def test_generate_meal_plan_fallback(client: TestClient, body, fake):
    fake.replies = ["I'd rather not."]
    r = client.post("/api/v1/generation/meal-plans", json=body)
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "Follicular Phase Nutrition"


def test_generation_failure_maps_to_502(client: TestClient, body, fake):
    from cycle_coach_service.exceptions import GenerationTransportError

    fake.replies = [GenerationTransportError("connection reset")]
    r = client.post("/api/v1/generation/workouts", json=body)
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to generate workout. Please try again."


def test_insights(client: TestClient, body, fake):
    fake.replies = ["Rest well this week."]
    r = client.post("/api/v1/generation/insights", json=body)
    assert r.status_code == 200
    assert r.json() == {"phase": "Follicular", "insights": "Rest well this week."}


def test_unknown_symptom_is_rejected(client: TestClient, body, today):
    body["journal_entries"] = [{"date": today.isoformat(), "symptoms": ["Levitation"]}]
    r = client.post("/api/v1/generation/workouts", json=body)
    assert r.status_code == 422


def test_background_task_lifecycle(client: TestClient, body):
    r = client.post("/api/v1/generation/tasks/workouts", json=body)
    assert r.status_code == 202, r.text
    submitted = r.json()
    assert submitted["status"] == "PENDING"

    task_id = submitted["task_id"]
    for _ in range(50):
        status = client.get(f"/api/v1/generation/tasks/{task_id}").json()
        if status["status"] != "PENDING":
            break
        time.sleep(0.02)

    assert status["status"] == "SUCCESS"
    assert status["kind"] == "workouts"
    assert status["result"]["title"] == "Test"

    r = client.delete(f"/api/v1/generation/tasks/{task_id}")
    assert r.status_code == 204


def test_unknown_task_returns_404(client: TestClient):
    assert client.get("/api/v1/generation/tasks/nope").status_code == 404
    assert client.delete("/api/v1/generation/tasks/nope").status_code == 404


def test_unknown_task_kind_is_rejected(client: TestClient, body):
    r = client.post("/api/v1/generation/tasks/poems", json=body)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_startup_fails_without_credential(monkeypatch):
    from cycle_coach_service.config import Settings
    from cycle_coach_service.exceptions import ConfigurationError
    from cycle_coach_service.main import app, lifespan

    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr("cycle_coach_service.main.get_settings", lambda: Settings(_env_file=None))

    with pytest.raises(ConfigurationError):
        async with lifespan(app):
            pass


def test_recent_patterns(client: TestClient, entry):
    entries = [entry(i, energy=8, moods=["Energetic"]) for i in range(7)] + [entry(7, energy=1, moods=["Sad"])]
    r = client.post(
        "/api/v1/cycle/patterns",
        json={"journal_entries": [e.model_dump(mode="json") for e in entries]},
    )
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["entry_count"] == 7
    assert data["average_energy"] == 8.0
    assert data["common_moods"] == ["Energetic"]
