"""
Emotion analysis models for CareerCoach
"""

from enum import Enum

from pydantic import BaseModel, Field


class Emotion(str, Enum):
    """Scored emotions. Declaration order breaks ties."""

    CONFIDENCE = "confidence"
    ANXIETY = "anxiety"
    PASSION = "passion"
    TENSION = "tension"
    CALM = "calm"


class EmotionProfile(BaseModel):
    """Lexical emotion analysis of one answer."""

    scores: dict[Emotion, float] = Field(..., description="Score per emotion in [0, 1]")
    primary_emotion: str = Field(..., description="Highest-scoring emotion, or 'neutral'")
    confidence_level: float = Field(..., ge=0.0, le=1.0)
    stress_level: float = Field(..., ge=0.0, le=1.0)
    suggestion: str = ""


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class EmotionTrend(BaseModel):
    """Confidence/stress trend over an ordered series of analyses."""

    direction: TrendDirection
    samples: int
    first_confidence: float = 0.0
    last_confidence: float = 0.0
    average_confidence: float = 0.0
    average_stress: float = 0.0
