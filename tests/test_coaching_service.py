import logging

import pytest

from careercoach.core.coaching_service import CoachingService
from careercoach.core.result_cache import CacheKind, ResultCache
from careercoach.core.task_queues import (
    BoundedTaskQueue,
    CallCompleted,
    EventDispatcher,
    InterviewCompleted,
    ProfileUpdated,
)
from careercoach.models.assessment import AnswerRecord
from careercoach.models.profile import DifficultyTier


@pytest.fixture
def cache():
    return ResultCache()


@pytest.fixture
def make_service(make_orchestrator, monitor, cache):
    def _make(dispatcher=None, **orchestrator_kwargs):
        orchestrator = make_orchestrator(cache=cache, **orchestrator_kwargs)
        return CoachingService(orchestrator, monitor, cache, dispatcher)
    return _make


@pytest.fixture
def dispatcher():
    return EventDispatcher(
        general=BoundedTaskQueue("general", workers=2, capacity=10, drain_timeout=1.0),
        ai=BoundedTaskQueue("ai", workers=1, capacity=5, drain_timeout=1.0),
    )


def strong_answers(count=3):
    return [
        AnswerRecord(question=f"Q{i}", answer="...", response_time_seconds=60, confidence=1.0, correct=True)
        for i in range(count)
    ]


@pytest.mark.asyncio
async def test_questions_are_cached_per_profile(make_service, profile, cache):
    service = make_service()

    first = await service.generate_questions(profile)
    second = await service.generate_questions(profile)

    assert first is second
    assert cache.get(CacheKind.INTERVIEW_QUESTIONS, f"questions:{profile.fingerprint}") is first


@pytest.mark.asyncio
async def test_degraded_paths_are_not_cached(make_service, profile, failing_model, cache):
    service = make_service(primary=failing_model())

    path = await service.generate_learning_path(profile)

    assert path.degraded is True
    assert cache.get(CacheKind.LEARNING_PATHS, f"single:{profile.fingerprint}") is None


@pytest.mark.asyncio
async def test_orchestrated_path_is_cached(make_service, profile, cache):
    service = make_service()

    path = await service.generate_orchestrated_learning_path(profile)

    assert cache.get(CacheKind.LEARNING_PATHS, f"orchestrated:{profile.fingerprint}") is path


@pytest.mark.asyncio
async def test_adaptive_questions_use_adjusted_tier(make_service, make_profile):
    service = make_service()
    junior = make_profile(experience_years=1)

    questions = await service.generate_adaptive_questions(junior, strong_answers())

    assert questions.difficulty == DifficultyTier.MIDDLE
    assert "Adjusted difficulty: middle" in questions.analysis


@pytest.mark.asyncio
async def test_adaptive_questions_without_history(make_service, profile):
    questions = await make_service().generate_adaptive_questions(profile, [])

    assert questions.difficulty == DifficultyTier.MIDDLE
    assert questions.analysis.startswith("Difficulty: middle (first question.)")


def test_adjust_difficulty_defaults_to_profile_tier(make_service, make_profile):
    service = make_service()

    adjustment = service.adjust_difficulty(make_profile(experience_years=7), strong_answers())

    assert adjustment.previous_tier == DifficultyTier.SENIOR
    assert adjustment.tier == DifficultyTier.SENIOR


def test_emotion_operations(make_service):
    service = make_service()

    assert service.analyze_emotion("확실히 구현했습니다.").primary_emotion == "confidence"
    assert service.emotion_trend(["잘 모르겠습니다.", "확실히 구현했습니다."]).samples == 2
    assert "=== Emotion Analysis ===" in service.emotion_feedback("흥미롭습니다")


def test_publish_without_dispatcher(make_service):
    with pytest.raises(RuntimeError):
        make_service().publish(InterviewCompleted(average_score=5, question_count=2))


@pytest.mark.asyncio
async def test_profile_update_invalidates_and_regenerates(make_service, make_profile, dispatcher, cache):
    service = make_service(dispatcher=dispatcher)
    dispatcher.start()

    old = make_profile(skills=["Java"])
    await service.generate_questions(old)
    new = make_profile(skills=["Java", "Kafka"])

    service.publish(ProfileUpdated(profile=new, previous_fingerprint=old.fingerprint))
    await dispatcher.join()
    await dispatcher.shutdown()

    assert cache.get(CacheKind.INTERVIEW_QUESTIONS, f"questions:{old.fingerprint}") is None
    assert cache.get(CacheKind.LEARNING_PATHS, f"orchestrated:{new.fingerprint}") is not None


@pytest.mark.asyncio
async def test_call_completed_event_is_recorded(make_service, dispatcher, monitor):
    service = make_service(dispatcher=dispatcher)
    dispatcher.start()

    service.publish(CallCompleted(service="OpenAI", duration_ms=1500, success=False, error="HTTP 500"))
    await dispatcher.join()
    await dispatcher.shutdown()

    assert monitor.metrics("OpenAI").errors == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("score, expected", [
    (9.0, "raise difficulty, move on to advanced topics"),
    (6.5, "keep difficulty, practice applying concepts to real projects"),
    (3.0, "lower difficulty, review the fundamentals"),
])
async def test_interview_completed_logs_recommendation(make_service, dispatcher, caplog, score, expected):
    service = make_service(dispatcher=dispatcher)
    dispatcher.start()

    with caplog.at_level(logging.INFO):
        service.publish(InterviewCompleted(profile_id=1, average_score=score, question_count=5))
        await dispatcher.join()
    await dispatcher.shutdown()

    assert any(expected in r.message for r in caplog.records)
