"""
Combined skill analysis model for CareerCoach
"""

from datetime import datetime

from pydantic import BaseModel, Field


class CombinedAnalysis(BaseModel):
    """Skill analysis from one model joined with a career summary from another."""

    technical_analysis: str = Field(..., description="Strengths, weaknesses and priorities")
    career_summary: str = Field(..., description="Summary of the free-text career history")
    report: str = Field(..., description="Both sections formatted as one report")
    generated_at: datetime = Field(default_factory=datetime.utcnow)
    degraded: bool = False
