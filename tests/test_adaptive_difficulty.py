import pytest

from careercoach.core.adaptive_difficulty import AdaptiveDifficultyEngine, time_weight
from careercoach.models.assessment import AnswerRecord
from careercoach.models.profile import DifficultyTier


@pytest.fixture
def engine():
    return AdaptiveDifficultyEngine()


def answers(count, correct, confidence, seconds):
    return [
        AnswerRecord(
            question=f"Q{i}",
            answer="...",
            response_time_seconds=seconds,
            confidence=confidence,
            correct=correct,
        )
        for i in range(count)
    ]


@pytest.mark.parametrize("tier", list(DifficultyTier))
def test_empty_history_keeps_tier(engine, tier):
    adjustment = engine.adjust(tier, [])

    assert adjustment.tier == tier
    assert adjustment.rationale == "first question."


def test_strong_answers_move_junior_up_one(engine):
    adjustment = engine.adjust(DifficultyTier.JUNIOR, answers(5, True, 1.0, 60))

    assert adjustment.tier == DifficultyTier.MIDDLE
    assert adjustment.changed


def test_weak_answers_move_senior_down_one(engine):
    adjustment = engine.adjust(DifficultyTier.SENIOR, answers(5, False, 0.0, 600))

    assert adjustment.tier == DifficultyTier.MIDDLE


def test_transitions_saturate(engine):
    assert engine.adjust(DifficultyTier.SENIOR, answers(3, True, 1.0, 60)).tier == DifficultyTier.SENIOR
    assert engine.adjust(DifficultyTier.JUNIOR, answers(3, False, 0.0, 5)).tier == DifficultyTier.JUNIOR


def test_mixed_answers_hold(engine):
    history = answers(2, True, 0.6, 60) + answers(1, False, 0.6, 60)

    adjustment = engine.adjust(DifficultyTier.MIDDLE, history)

    assert adjustment.tier == DifficultyTier.MIDDLE
    assert "keeping difficulty at middle" in adjustment.rationale


@pytest.mark.parametrize("tier", list(DifficultyTier))
@pytest.mark.parametrize("correct, confidence, seconds", [
    (True, 1.0, 60),
    (False, 0.0, 600),
    (True, 0.5, 5),
    (False, 1.0, 20),
])
def test_never_skips_a_level(engine, tier, correct, confidence, seconds):
    adjustment = engine.adjust(tier, answers(4, correct, confidence, seconds))
    assert abs(adjustment.tier.rank - tier.rank) <= 1


def test_is_pure(engine):
    history = answers(3, True, 0.9, 45)

    first = engine.adjust(DifficultyTier.MIDDLE, history)
    second = engine.adjust(DifficultyTier.MIDDLE, history)

    assert first == second


@pytest.mark.parametrize("seconds, weight", [
    (9.9, 0.0), (10, 0.1), (30, 0.1), (30.5, 0.2), (120, 0.2),
    (121, 0.1), (300, 0.1), (301, 0.0),
])
def test_time_weight_steps(seconds, weight):
    assert time_weight(seconds) == weight


def test_rationale_names_thresholds_crossed(engine):
    adjustment = engine.adjust(DifficultyTier.JUNIOR, answers(5, True, 1.0, 15))

    assert "High accuracy (100%)" in adjustment.rationale
    assert "fast answers" in adjustment.rationale
    assert "high confidence" in adjustment.rationale


def test_analysis_values(engine):
    history = answers(1, True, 0.5, 60) + answers(1, False, 0.5, 200)

    analysis = engine.analyze(history)

    assert analysis.accuracy == 0.5
    assert analysis.average_response_time == 130
    assert analysis.average_confidence == 0.5
    # (0.6 + 0.2 + 0.1) and (0.0 + 0.1 + 0.1)
    assert analysis.quality_score == pytest.approx(0.55)


def test_summary_report(engine):
    adjustment = engine.adjust(DifficultyTier.JUNIOR, answers(5, True, 1.0, 60))

    report = engine.summary_report(adjustment)

    assert "accuracy 100%" in report
    assert "Adjusted difficulty: middle" in report
