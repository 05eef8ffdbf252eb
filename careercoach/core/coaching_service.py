"""
Coaching Service - the inbound facade of the coaching core.

Wires the orchestrator, the assessment engines, the call monitor, the
result cache and the background event queues, and exposes one method per
inbound operation. The edge (FastAPI routers) talks only to this class.
"""

import logging
from typing import Any

from careercoach.core.adaptive_difficulty import AdaptiveDifficultyEngine
from careercoach.core.call_monitor import CallMonitor
from careercoach.core.emotion_scorer import EmotionScorer
from careercoach.core.orchestrator import Orchestrator
from careercoach.core.result_cache import CacheKind, ResultCache
from careercoach.core.task_queues import (
    CallCompleted,
    EventDispatcher,
    InterviewCompleted,
    ProfileUpdated,
)
from careercoach.models.analysis import CombinedAnalysis
from careercoach.models.assessment import AnswerRecord, DifficultyAdjustment
from careercoach.models.emotion import EmotionProfile, EmotionTrend
from careercoach.models.learning_path import LearningPath
from careercoach.models.profile import DifficultyTier, Profile
from careercoach.models.question import QuestionSet

logger = logging.getLogger(__name__)


def _not_degraded(result: Any) -> bool:
    # Canned fallback content is never cached
    return not getattr(result, "degraded", False)


class CoachingService:
    """
    Inbound operations of the coaching core.

    Usage:
        service = CoachingService(orchestrator, monitor, cache, dispatcher)
        questions = await service.generate_questions(profile)
    """

    def __init__(
        self,
        orchestrator: Orchestrator,
        monitor: CallMonitor,
        cache: ResultCache,
        dispatcher: EventDispatcher | None = None,
    ):
        self.orchestrator = orchestrator
        self.monitor = monitor
        self.cache = cache
        self.dispatcher = dispatcher
        self.difficulty_engine = AdaptiveDifficultyEngine()
        self.emotion_scorer = EmotionScorer()

        if dispatcher is not None:
            dispatcher.subscribe(ProfileUpdated, self._on_profile_updated)
            dispatcher.subscribe(CallCompleted, self._on_call_completed)
            dispatcher.subscribe(InterviewCompleted, self._on_interview_completed)

    # =========================================================================
    # GENERATION
    # =========================================================================

    async def generate_questions(self, profile: Profile) -> QuestionSet:
        """Interview questions at the profile's experience tier (cached)."""
        key = f"questions:{profile.fingerprint}"
        return await self.cache.get_or_compute(
            CacheKind.INTERVIEW_QUESTIONS,
            key,
            lambda: self.orchestrator.generate_questions(profile),
            should_cache=_not_degraded,
        )

    async def generate_learning_path(self, profile: Profile) -> LearningPath:
        """Single-model learning path (cached)."""
        key = f"single:{profile.fingerprint}"
        return await self.cache.get_or_compute(
            CacheKind.LEARNING_PATHS,
            key,
            lambda: self.orchestrator.generate_learning_path(profile),
            should_cache=_not_degraded,
        )

    async def generate_orchestrated_learning_path(self, profile: Profile) -> LearningPath:
        """Chained multi-model learning path with personalization (cached)."""
        key = f"orchestrated:{profile.fingerprint}"
        return await self.cache.get_or_compute(
            CacheKind.LEARNING_PATHS,
            key,
            lambda: self.orchestrator.generate_orchestrated_learning_path(profile),
            should_cache=_not_degraded,
        )

    async def combine_analysis(self, profile: Profile) -> CombinedAnalysis:
        return await self.orchestrator.combine_analysis(profile)

    async def generate_adaptive_questions(
        self,
        profile: Profile,
        history: list[AnswerRecord],
        current_tier: DifficultyTier | None = None,
    ) -> QuestionSet:
        """
        Questions at a tier adjusted to the candidate's answer history.

        Not cached: the result depends on the history, not only the profile.
        """
        adjustment = self.adjust_difficulty(profile, history, current_tier)
        questions = await self.orchestrator.generate_questions(profile, adjustment.tier)
        if adjustment.analysis is None:
            summary = f"Difficulty: {adjustment.tier.value} ({adjustment.rationale})"
        else:
            summary = self.difficulty_engine.summary_report(adjustment)
        return questions.model_copy(update={
            "analysis": f"{summary}\n{questions.analysis}".strip(),
        })

    # =========================================================================
    # ASSESSMENT
    # =========================================================================

    def adjust_difficulty(
        self,
        profile: Profile,
        history: list[AnswerRecord],
        current_tier: DifficultyTier | None = None,
    ) -> DifficultyAdjustment:
        """Adjust from current_tier, or from the profile's tier when not given."""
        return self.difficulty_engine.adjust(current_tier or profile.experience_tier, history)

    def analyze_emotion(self, text: str) -> EmotionProfile:
        return self.emotion_scorer.analyze(text)

    def emotion_trend(self, texts: list[str]) -> EmotionTrend:
        return self.emotion_scorer.trend([self.emotion_scorer.analyze(t) for t in texts])

    def emotion_feedback(self, text: str) -> str:
        return self.emotion_scorer.comprehensive_feedback(self.emotion_scorer.analyze(text))

    # =========================================================================
    # MONITORING
    # =========================================================================

    def record_call(
        self,
        service: str,
        duration_ms: int,
        success: bool,
        error: str | None = None,
    ) -> None:
        self.monitor.record_call(service, duration_ms, success, error)

    def performance_report(self) -> str:
        return self.monitor.performance_report()

    def cost_report(self) -> str:
        return self.monitor.cost_report()

    async def health_check(self, service: str) -> bool:
        return await self.orchestrator.health_check(service)

    # =========================================================================
    # EVENTS
    # =========================================================================

    def publish(self, event) -> None:
        """
        Hand an event to the background queues.

        Raises:
            QueueOverflowError: If the target queue is full
            RuntimeError: If no dispatcher is configured
        """
        if self.dispatcher is None:
            raise RuntimeError("Event dispatcher is not configured")
        self.dispatcher.publish(event)

    async def _on_profile_updated(self, event: ProfileUpdated) -> None:
        """Evict stale results, then regenerate the orchestrated learning path."""
        if event.previous_fingerprint:
            self.cache.invalidate(event.previous_fingerprint)
        self.cache.invalidate(event.profile.fingerprint)

        path = await self.generate_orchestrated_learning_path(event.profile)
        logger.info(
            f"Regenerated learning path for profile {event.profile.id}: "
            f"{len(path.steps)} steps (degraded={path.degraded})"
        )

    async def _on_call_completed(self, event: CallCompleted) -> None:
        self.monitor.record_call(event.service, event.duration_ms, event.success, event.error)

    async def _on_interview_completed(self, event: InterviewCompleted) -> None:
        """Log a difficulty recommendation and an improvement focus."""
        score = event.average_score
        if score >= 8:
            direction = "raise difficulty"
        elif score <= 4:
            direction = "lower difficulty"
        else:
            direction = "keep difficulty"

        if score < 6:
            focus = "review the fundamentals"
        elif score < 8:
            focus = "practice applying concepts to real projects"
        else:
            focus = "move on to advanced topics"

        logger.info(
            f"Interview completed for profile {event.profile_id}: "
            f"{event.question_count} questions, average score {score:.1f}; "
            f"recommend: {direction}, {focus}"
        )
