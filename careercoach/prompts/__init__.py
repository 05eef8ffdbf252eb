"""
AI prompt templates for CareerCoach

Contains structured prompts for:
- Interview question generation
- Learning path generation (single-model and chained)
- Skill analysis and document summarization
"""

from careercoach.prompts.builder import PromptBuilder, PromptTemplate
from careercoach.prompts.interviewer import InterviewerPrompts
from careercoach.prompts.coach import CoachPrompts
from careercoach.prompts.analyst import AnalystPrompts

__all__ = [
    "PromptBuilder",
    "PromptTemplate",
    "InterviewerPrompts",
    "CoachPrompts",
    "AnalystPrompts",
]
