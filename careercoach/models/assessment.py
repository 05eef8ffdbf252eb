"""
Answer history and difficulty-adjustment models for CareerCoach
"""

from pydantic import BaseModel, ConfigDict, Field

from careercoach.models.profile import DifficultyTier


class AnswerRecord(BaseModel):
    """A submitted answer. Immutable once recorded."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(..., description="Question text")
    answer: str = Field(default="", description="Answer text")
    response_time_seconds: float = Field(..., ge=0, description="Time taken to answer")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Self-reported or inferred confidence")
    correct: bool = Field(..., description="Whether the answer was judged correct")
    feedback: str = Field(default="", description="Reviewer feedback")


class AnswerAnalysis(BaseModel):
    """Aggregate statistics over an answer history."""

    total: int = 0
    accuracy: float = 0.0
    average_response_time: float = 0.0
    average_confidence: float = 0.0
    quality_score: float = 0.0


class DifficultyAdjustment(BaseModel):
    """Outcome of one difficulty adjustment."""

    tier: DifficultyTier
    previous_tier: DifficultyTier
    rationale: str
    analysis: AnswerAnalysis | None = None

    @property
    def changed(self) -> bool:
        return self.tier != self.previous_tier
