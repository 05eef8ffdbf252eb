"""
Coaching API endpoints

Handles AI-generated coaching content:
- Interview questions (static and adaptive)
- Learning paths (single-model and orchestrated)
- Combined skill analysis
- Profile update notifications
"""

from fastapi import APIRouter, status
from pydantic import BaseModel

from careercoach.api.dependencies import get_service, to_http_error
from careercoach.core.errors import CoachingError
from careercoach.core.task_queues import ProfileUpdated
from careercoach.models.analysis import CombinedAnalysis
from careercoach.models.assessment import AnswerRecord
from careercoach.models.learning_path import LearningPath
from careercoach.models.profile import DifficultyTier, Profile
from careercoach.models.question import QuestionSet

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class AdaptiveQuestionsRequest(BaseModel):
    """Request model for adaptive question generation."""
    profile: Profile
    history: list[AnswerRecord] = []
    current_tier: DifficultyTier | None = None


class ProfileUpdatedRequest(BaseModel):
    """Notification that a profile changed in the profile store."""
    profile: Profile
    previous_fingerprint: str | None = None


class AcceptedResponse(BaseModel):
    status: str
    message: str


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/interview-questions", response_model=QuestionSet)
async def generate_interview_questions(profile: Profile) -> QuestionSet:
    """Generate interview questions for a candidate profile."""
    try:
        return await get_service().generate_questions(profile)
    except CoachingError as e:
        raise to_http_error(e)


@router.post("/adaptive-questions", response_model=QuestionSet)
async def generate_adaptive_questions(request: AdaptiveQuestionsRequest) -> QuestionSet:
    """
    Generate questions at a difficulty adjusted to the answer history.

    The analysis field carries the adaptive assessment summary.
    """
    try:
        return await get_service().generate_adaptive_questions(
            request.profile, request.history, request.current_tier
        )
    except CoachingError as e:
        raise to_http_error(e)


@router.post("/learning-path", response_model=LearningPath)
async def generate_learning_path(profile: Profile) -> LearningPath:
    """Generate a learning path with the primary model."""
    try:
        return await get_service().generate_learning_path(profile)
    except CoachingError as e:
        raise to_http_error(e)


@router.post("/learning-path/orchestrated", response_model=LearningPath)
async def generate_orchestrated_learning_path(profile: Profile) -> LearningPath:
    """Generate a personalized learning path through the multi-model chain."""
    try:
        return await get_service().generate_orchestrated_learning_path(profile)
    except CoachingError as e:
        raise to_http_error(e)


@router.post("/skill-analysis", response_model=CombinedAnalysis)
async def analyze_skills(profile: Profile) -> CombinedAnalysis:
    """Combined technical analysis and career summary."""
    try:
        return await get_service().combine_analysis(profile)
    except CoachingError as e:
        raise to_http_error(e)


@router.post(
    "/profile-updated",
    response_model=AcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def profile_updated(request: ProfileUpdatedRequest) -> AcceptedResponse:
    """Evict cached results and queue learning-path regeneration."""
    try:
        get_service().publish(ProfileUpdated(
            profile=request.profile,
            previous_fingerprint=request.previous_fingerprint,
        ))
    except CoachingError as e:
        raise to_http_error(e)

    return AcceptedResponse(
        status="accepted",
        message="Learning path regeneration queued.",
    )
