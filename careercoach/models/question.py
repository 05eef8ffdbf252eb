"""
Question models for CareerCoach
"""

from datetime import datetime

from pydantic import BaseModel, Field

from careercoach.models.profile import DifficultyTier


class QuestionSet(BaseModel):
    """A generated set of interview questions."""

    questions: list[str] = Field(
        ...,
        min_length=1,
        max_length=10,
        description="Ordered interview questions",
    )
    analysis: str = Field(default="", description="Short analysis of the candidate")
    difficulty: DifficultyTier = Field(..., description="Resolved difficulty tier")
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    degraded: bool = Field(
        default=False,
        description="True when produced by the fallback path",
    )
