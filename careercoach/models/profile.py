"""
Candidate profile and tier definitions for CareerCoach

Defines:
- Job roles supported by the coaching pipeline
- The two three-level difficulty scales (assessment tiers, learning-step levels)
- The read-only candidate profile and the per-request prompt context
"""

import hashlib
import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


NONE_PLACEHOLDER = "none"


class JobRole(str, Enum):
    """Target job roles."""

    BACKEND_DEVELOPER = "backend_developer"
    FRONTEND_DEVELOPER = "frontend_developer"
    FULLSTACK_DEVELOPER = "fullstack_developer"
    DEVOPS_ENGINEER = "devops_engineer"
    DATA_ENGINEER = "data_engineer"
    DATA_SCIENTIST = "data_scientist"
    ML_ENGINEER = "ml_engineer"
    AI_ENGINEER = "ai_engineer"
    SYSTEM_ARCHITECT = "system_architect"
    PRODUCT_MANAGER = "product_manager"
    QA_ENGINEER = "qa_engineer"
    SECURITY_ENGINEER = "security_engineer"

    @property
    def display_name(self) -> str:
        """Human-readable role name."""
        names = {
            "backend_developer": "Backend Developer",
            "frontend_developer": "Frontend Developer",
            "fullstack_developer": "Full-Stack Developer",
            "devops_engineer": "DevOps Engineer",
            "data_engineer": "Data Engineer",
            "data_scientist": "Data Scientist",
            "ml_engineer": "Machine Learning Engineer",
            "ai_engineer": "AI Engineer",
            "system_architect": "System Architect",
            "product_manager": "Product Manager",
            "qa_engineer": "QA Engineer",
            "security_engineer": "Security Engineer",
        }
        return names.get(self.value, self.value)


class DifficultyTier(str, Enum):
    """
    Ordered assessment difficulty.

    Transitions only ever move one step; both ends saturate.
    """

    JUNIOR = "junior"
    MIDDLE = "middle"
    SENIOR = "senior"

    @classmethod
    def from_years(cls, years: int) -> "DifficultyTier":
        """Map years of experience to a tier."""
        if years >= 5:
            return cls.SENIOR
        if years >= 2:
            return cls.MIDDLE
        return cls.JUNIOR

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def step_up(self) -> "DifficultyTier":
        return _TIER_ORDER[min(self.rank + 1, len(_TIER_ORDER) - 1)]

    def step_down(self) -> "DifficultyTier":
        return _TIER_ORDER[max(self.rank - 1, 0)]


_TIER_ORDER = [DifficultyTier.JUNIOR, DifficultyTier.MIDDLE, DifficultyTier.SENIOR]


class StepDifficulty(str, Enum):
    """Learning-step difficulty. Not interchangeable with DifficultyTier."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Profile(BaseModel):
    """
    Candidate profile as supplied by the profile store.

    Frozen so that one pipeline invocation always sees the same content.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(default=None, description="Profile store identifier")
    role: JobRole = Field(..., description="Target job role")
    experience_years: int = Field(..., ge=0, description="Years of professional experience")
    summary: str = Field(default="", description="Free-text career summary")
    project_text: str | None = Field(default=None, description="Free-text project history")
    skills: list[str] = Field(default_factory=list, description="Ordered skill list")

    @property
    def experience_tier(self) -> DifficultyTier:
        return DifficultyTier.from_years(self.experience_years)

    @property
    def fingerprint(self) -> str:
        """Stable cache key derived from profile content (the id is excluded)."""
        content = self.model_dump(mode="json", exclude={"id"})
        encoded = json.dumps(content, sort_keys=True, ensure_ascii=False)
        return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


class PromptContext(BaseModel):
    """Everything a prompt template may reference. Built fresh per request."""

    model_config = ConfigDict(frozen=True)

    role: str
    experience_years: int
    experience_tier: str
    difficulty: str
    summary: str
    project_text: str
    skills: str

    @classmethod
    def from_profile(
        cls,
        profile: Profile,
        difficulty: DifficultyTier | None = None,
    ) -> "PromptContext":
        """
        Build a prompt context from a profile.

        Args:
            profile: Candidate profile
            difficulty: Target tier; defaults to the profile's experience tier

        Returns:
            PromptContext with placeholders filled for absent fields
        """
        tier = profile.experience_tier
        return cls(
            role=profile.role.display_name,
            experience_years=profile.experience_years,
            experience_tier=tier.value,
            difficulty=(difficulty or tier).value.upper(),
            summary=profile.summary or NONE_PLACEHOLDER,
            project_text=profile.project_text or NONE_PLACEHOLDER,
            skills=", ".join(profile.skills) if profile.skills else NONE_PLACEHOLDER,
        )
