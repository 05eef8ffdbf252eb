"""
Data models and schemas for CareerCoach

Contains Pydantic models for:
- Candidate profiles and difficulty tiers
- Question sets and learning paths
- Answer histories and difficulty adjustments
- Emotion analysis
- Model call monitoring
"""

from careercoach.models.profile import (
    JobRole,
    DifficultyTier,
    StepDifficulty,
    Profile,
    PromptContext,
)
from careercoach.models.question import QuestionSet
from careercoach.models.analysis import CombinedAnalysis
from careercoach.models.learning_path import LearningPath, LearningStep
from careercoach.models.assessment import (
    AnswerRecord,
    AnswerAnalysis,
    DifficultyAdjustment,
)
from careercoach.models.emotion import (
    Emotion,
    EmotionProfile,
    EmotionTrend,
    TrendDirection,
)
from careercoach.models.monitoring import ModelResponse, ServiceMetrics

__all__ = [
    # Profile
    "JobRole",
    "DifficultyTier",
    "StepDifficulty",
    "Profile",
    "PromptContext",
    # Generated content
    "QuestionSet",
    "LearningPath",
    "LearningStep",
    "CombinedAnalysis",
    # Assessment
    "AnswerRecord",
    "AnswerAnalysis",
    "DifficultyAdjustment",
    # Emotion
    "Emotion",
    "EmotionProfile",
    "EmotionTrend",
    "TrendDirection",
    # Monitoring
    "ModelResponse",
    "ServiceMetrics",
]
