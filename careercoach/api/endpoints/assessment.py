"""
Assessment API endpoints

Handles answer analytics:
- Difficulty adjustment from answer history
- Emotion analysis, feedback and trends
- Interview completion notifications
"""

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from careercoach.api.dependencies import get_service, to_http_error
from careercoach.core.errors import CoachingError
from careercoach.core.task_queues import InterviewCompleted
from careercoach.models.assessment import AnswerRecord, DifficultyAdjustment
from careercoach.models.emotion import EmotionProfile
from careercoach.models.profile import DifficultyTier, Profile

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class DifficultyRequest(BaseModel):
    """Request model for difficulty adjustment."""
    profile: Profile
    history: list[AnswerRecord] = []
    current_tier: DifficultyTier | None = None


class EmotionRequest(BaseModel):
    text: str


class EmotionTrendRequest(BaseModel):
    """Answers in the order they were given."""
    texts: list[str] = Field(default_factory=list)


class EmotionTrendResponse(BaseModel):
    direction: str
    samples: int
    average_confidence: float
    average_stress: float
    report: str


class FeedbackResponse(BaseModel):
    report: str


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/difficulty", response_model=DifficultyAdjustment)
async def adjust_difficulty(request: DifficultyRequest) -> DifficultyAdjustment:
    """Adjust the assessment tier from an answer history."""
    return get_service().adjust_difficulty(
        request.profile, request.history, request.current_tier
    )


@router.post("/emotion", response_model=EmotionProfile)
async def analyze_emotion(request: EmotionRequest) -> EmotionProfile:
    """Score emotions in one answer."""
    return get_service().analyze_emotion(request.text)


@router.post("/emotion/feedback", response_model=FeedbackResponse)
async def emotion_feedback(request: EmotionRequest) -> FeedbackResponse:
    """Full feedback report for one answer."""
    return FeedbackResponse(report=get_service().emotion_feedback(request.text))


@router.post("/emotion/trend", response_model=EmotionTrendResponse)
async def emotion_trend(request: EmotionTrendRequest) -> EmotionTrendResponse:
    """Confidence and stress trend across ordered answers."""
    service = get_service()
    trend = service.emotion_trend(request.texts)
    return EmotionTrendResponse(
        direction=trend.direction.value,
        samples=trend.samples,
        average_confidence=trend.average_confidence,
        average_stress=trend.average_stress,
        report=service.emotion_scorer.format_trend(trend),
    )


@router.post("/interview-completed", status_code=status.HTTP_202_ACCEPTED)
async def interview_completed(event: InterviewCompleted):
    """Queue post-interview recommendations."""
    try:
        get_service().publish(event)
    except CoachingError as e:
        raise to_http_error(e)
    return {"status": "accepted"}
