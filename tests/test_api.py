import pytest
from fastapi.testclient import TestClient

from careercoach.api.dependencies import get_service
from main import app

PROFILE = {
    "id": 7,
    "role": "backend_developer",
    "experience_years": 3,
    "summary": "Backend developer building payment APIs with Spring Boot.",
    "project_text": "Migrated a monolith billing service to Kubernetes.",
    "skills": ["Java", "Spring Boot", "PostgreSQL"],
}


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["mock_models"] is True


def test_interview_questions(client):
    response = client.post("/api/coaching/interview-questions", json=PROFILE)

    assert response.status_code == 200
    data = response.json()
    assert 1 <= len(data["questions"]) <= 10
    assert data["difficulty"] == "middle"


def test_invalid_profile_is_rejected(client):
    response = client.post(
        "/api/coaching/interview-questions",
        json={**PROFILE, "experience_years": -1},
    )
    assert response.status_code == 422


def test_learning_paths(client):
    single = client.post("/api/coaching/learning-path", json=PROFILE)
    orchestrated = client.post("/api/coaching/learning-path/orchestrated", json=PROFILE)

    assert single.status_code == 200
    assert single.json()["job_role"] == "Backend Developer"
    assert orchestrated.status_code == 200
    assert orchestrated.json()["steps"]


def test_skill_analysis(client):
    response = client.post("/api/coaching/skill-analysis", json=PROFILE)

    assert response.status_code == 200
    assert "=== Career Summary" in response.json()["report"]


def test_adaptive_questions(client):
    history = [
        {"question": "Q", "answer": "A", "response_time_seconds": 60, "confidence": 1.0, "correct": True}
        for _ in range(3)
    ]

    response = client.post(
        "/api/coaching/adaptive-questions",
        json={"profile": PROFILE, "history": history},
    )

    assert response.status_code == 200
    assert response.json()["difficulty"] == "senior"


def test_profile_updated_is_accepted(client):
    response = client.post("/api/coaching/profile-updated", json={"profile": PROFILE})

    assert response.status_code == 202
    assert response.json()["status"] == "accepted"


def test_difficulty(client):
    response = client.post(
        "/api/assessment/difficulty",
        json={"profile": PROFILE, "history": [], "current_tier": "junior"},
    )

    assert response.status_code == 200
    assert response.json()["tier"] == "junior"
    assert response.json()["rationale"] == "first question."


def test_emotion_endpoints(client):
    emotion = client.post("/api/assessment/emotion", json={"text": "확실히 구현했습니다. 경험이 있습니다."})
    feedback = client.post("/api/assessment/emotion/feedback", json={"text": "차근차근 해결했습니다."})
    trend = client.post(
        "/api/assessment/emotion/trend",
        json={"texts": ["잘 모르겠습니다.", "확실히 구현했습니다."]},
    )

    assert emotion.json()["primary_emotion"] == "confidence"
    assert "Primary emotion: calm" in feedback.json()["report"]
    assert trend.json()["direction"] == "improving"


def test_interview_completed_is_accepted(client):
    response = client.post(
        "/api/assessment/interview-completed",
        json={"profile_id": 7, "average_score": 8.5, "question_count": 5},
    )
    assert response.status_code == 202


def test_monitoring_reports(client):
    client.post("/api/coaching/interview-questions", json=PROFILE)
    accepted = client.post(
        "/api/monitoring/calls",
        json={"service": "OpenAI", "duration_ms": 1200, "success": True},
    )

    performance = client.get("/api/monitoring/performance")
    cost = client.get("/api/monitoring/cost")
    cache = client.get("/api/monitoring/cache")

    assert accepted.status_code == 202
    assert "Gemini" in performance.json()["report"]
    assert "Total calls:" in cost.json()["report"]
    assert set(cache.json()) == {"interview_questions", "learning_paths", "ai_responses"}


def test_model_health(client):
    healthy = client.get("/api/monitoring/health/Gemini")
    unknown = client.get("/api/monitoring/health/Nope")

    assert healthy.json() == {"service": "Gemini", "healthy": True}
    assert unknown.status_code == 404


def test_event_bodies_are_validated_as_events(client):
    bad_score = client.post(
        "/api/assessment/interview-completed",
        json={"average_score": 11, "question_count": 5},
    )
    bad_duration = client.post(
        "/api/monitoring/calls",
        json={"service": "OpenAI", "duration_ms": -1, "success": True},
    )

    assert bad_score.status_code == 422
    assert bad_duration.status_code == 422


def test_reported_call_reaches_monitor(client):
    client.post(
        "/api/monitoring/calls",
        json={"service": "Claude", "duration_ms": 2000, "success": False, "error": "HTTP 500"},
    )
    client.portal.call(get_service().dispatcher.join)

    assert get_service().monitor.metrics("Claude").errors == 1
