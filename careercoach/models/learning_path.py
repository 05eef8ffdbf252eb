"""
Learning path models for CareerCoach
"""

from datetime import datetime

from pydantic import BaseModel, Field

from careercoach.models.profile import StepDifficulty


class LearningStep(BaseModel):
    """One step of a learning path."""

    title: str = Field(..., description="Step title")
    description: str = Field(default="", description="What to study")
    difficulty: StepDifficulty = Field(..., description="Step difficulty level")
    estimated_time: str | None = Field(default=None, description="Free-text estimate, e.g. '2 weeks'")
    resources: list[str] = Field(default_factory=list)
    objective: str = Field(default="", description="Learning objective")


class LearningPath(BaseModel):
    """An ordered learning path. Always holds at least one step."""

    steps: list[LearningStep] = Field(..., min_length=1)
    strategy: str = Field(default="", description="Overall learning strategy")
    total_duration: str = Field(default="", description="Estimated total duration")
    job_role: str | None = None
    experience_level: str | None = None
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    degraded: bool = Field(
        default=False,
        description="True when any stage used the fallback path",
    )
