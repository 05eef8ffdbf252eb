"""
Adaptive Difficulty Engine for CareerCoach

Adjusts a candidate's assessment tier from their answer history.

The engine keeps no state: every call recomputes from the full history it
is given, so it is safe to call concurrently. The caller owns ordering and
deduplication of the history.

Transition rule (three-state machine, one step at a time):
    quality >= 0.8 and accuracy >= 0.8  ->  one tier up (saturates at senior)
    quality <= 0.4 or  accuracy <= 0.4  ->  one tier down (saturates at junior)
    otherwise                           ->  hold
"""

import logging

from careercoach.models.assessment import AnswerAnalysis, AnswerRecord, DifficultyAdjustment
from careercoach.models.profile import DifficultyTier

logger = logging.getLogger(__name__)


UP_THRESHOLD = 0.8
DOWN_THRESHOLD = 0.4

CORRECTNESS_WEIGHT = 0.6
CONFIDENCE_WEIGHT = 0.2

FAST_ANSWER_SECONDS = 30
SLOW_ANSWER_SECONDS = 120

FIRST_QUESTION_RATIONALE = "first question."


def time_weight(seconds: float) -> float:
    """Reward considered answers; penalize rushed and very slow ones."""
    if seconds < 10:
        return 0.0
    if seconds <= 30:
        return 0.1
    if seconds <= 120:
        return 0.2
    if seconds <= 300:
        return 0.1
    return 0.0


def answer_quality(record: AnswerRecord) -> float:
    correct = 1.0 if record.correct else 0.0
    return (
        CORRECTNESS_WEIGHT * correct
        + time_weight(record.response_time_seconds)
        + CONFIDENCE_WEIGHT * record.confidence
    )


class AdaptiveDifficultyEngine:
    """
    Computes difficulty adjustments from answer histories.

    Usage:
        engine = AdaptiveDifficultyEngine()
        adjustment = engine.adjust(DifficultyTier.JUNIOR, history)
    """

    def analyze(self, history: list[AnswerRecord]) -> AnswerAnalysis:
        """Aggregate accuracy, timing, confidence and quality over a history."""
        total = len(history)
        if total == 0:
            return AnswerAnalysis()

        return AnswerAnalysis(
            total=total,
            accuracy=sum(1 for r in history if r.correct) / total,
            average_response_time=sum(r.response_time_seconds for r in history) / total,
            average_confidence=sum(r.confidence for r in history) / total,
            quality_score=sum(answer_quality(r) for r in history) / total,
        )

    def next_tier(self, current: DifficultyTier, analysis: AnswerAnalysis) -> DifficultyTier:
        if analysis.quality_score >= UP_THRESHOLD and analysis.accuracy >= UP_THRESHOLD:
            return current.step_up()
        if analysis.quality_score <= DOWN_THRESHOLD or analysis.accuracy <= DOWN_THRESHOLD:
            return current.step_down()
        return current

    def adjust(
        self,
        current: DifficultyTier,
        history: list[AnswerRecord],
    ) -> DifficultyAdjustment:
        """
        Adjust the tier for a history.

        Args:
            current: The candidate's current tier
            history: Prior answers, oldest first

        Returns:
            DifficultyAdjustment with the new tier and a rationale
        """
        if not history:
            return DifficultyAdjustment(
                tier=current,
                previous_tier=current,
                rationale=FIRST_QUESTION_RATIONALE,
            )

        analysis = self.analyze(history)
        tier = self.next_tier(current, analysis)

        if tier != current:
            logger.info(
                f"Difficulty adjusted {current.value} -> {tier.value} "
                f"(accuracy {analysis.accuracy:.2f}, quality {analysis.quality_score:.2f})"
            )

        return DifficultyAdjustment(
            tier=tier,
            previous_tier=current,
            rationale=self.build_rationale(analysis, current, tier),
            analysis=analysis,
        )

    def build_rationale(
        self,
        analysis: AnswerAnalysis,
        current: DifficultyTier,
        tier: DifficultyTier,
    ) -> str:
        reasons = []

        if analysis.accuracy >= UP_THRESHOLD:
            reasons.append(f"High accuracy ({analysis.accuracy:.0%})")
        elif analysis.accuracy <= DOWN_THRESHOLD:
            reasons.append(f"Low accuracy ({analysis.accuracy:.0%})")
        else:
            reasons.append(f"Moderate accuracy ({analysis.accuracy:.0%})")

        if analysis.average_response_time < FAST_ANSWER_SECONDS:
            reasons.append(f"fast answers ({analysis.average_response_time:.0f}s on average)")
        elif analysis.average_response_time > SLOW_ANSWER_SECONDS:
            reasons.append(f"slow answers ({analysis.average_response_time:.0f}s on average)")

        if analysis.average_confidence >= UP_THRESHOLD:
            reasons.append("high confidence")
        elif analysis.average_confidence <= DOWN_THRESHOLD:
            reasons.append("low confidence")

        if tier.rank > current.rank:
            outcome = f"raising difficulty to {tier.value}"
        elif tier.rank < current.rank:
            outcome = f"lowering difficulty to {tier.value}"
        else:
            outcome = f"keeping difficulty at {tier.value}"

        return f"{', '.join(reasons)}; {outcome}."

    def summary_report(self, adjustment: DifficultyAdjustment) -> str:
        """Human-readable summary used as the analysis of adaptive question sets."""
        analysis = adjustment.analysis or AnswerAnalysis()
        return (
            f"Adaptive assessment: accuracy {analysis.accuracy:.0%}, "
            f"average response time {analysis.average_response_time:.1f}s, "
            f"average confidence {analysis.average_confidence:.0%}, "
            f"quality score {analysis.quality_score:.2f}. "
            f"Adjusted difficulty: {adjustment.tier.value}. "
            f"Reason: {adjustment.rationale}"
        )
