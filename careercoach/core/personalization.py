"""
Learning path personalization.

A deterministic, model-free post-pass over a drafted learning path:
- appends a tier-specific clause to every step description
- annotates the estimated time (the original estimate is kept)
- drops advanced steps for candidates with under two years of experience
"""

import logging

from careercoach.core.errors import StructuralInvariantError
from careercoach.models.learning_path import LearningPath, LearningStep
from careercoach.models.profile import DifficultyTier, Profile, StepDifficulty

logger = logging.getLogger(__name__)


JUNIOR_FILTER_MAX_YEARS = 2
DEFAULT_ESTIMATED_TIME = "2-3 weeks"

DESCRIPTION_CLAUSES = {
    DifficultyTier.JUNIOR: " (learn the fundamentals step by step)",
    DifficultyTier.MIDDLE: " (apply this in a real project)",
    DifficultyTier.SENIOR: " (consider this from a system-design perspective)",
}

TIME_CLAUSES = {
    DifficultyTier.JUNIOR: " (+1-2 extra weeks recommended)",
    DifficultyTier.MIDDLE: "",
    DifficultyTier.SENIOR: " (can be shortened with focused study)",
}

# Matched case-insensitively against step titles
ADVANCED_TOPIC_KEYWORDS = [
    "architecture", "아키텍처",
    "design", "설계",
    "system", "시스템",
    "distributed", "분산",
    "microservice", "마이크로서비스",
    "performance tuning", "성능 튜닝",
    "optimization", "최적화",
    "advanced", "고급", "심화",
    "expert", "전문가",
]


def is_advanced_step(step: LearningStep) -> bool:
    """True when a step is too advanced for a junior candidate."""
    if step.difficulty == StepDifficulty.ADVANCED:
        return True
    title = step.title.lower()
    return any(keyword in title for keyword in ADVANCED_TOPIC_KEYWORDS)


def personalize_step(step: LearningStep, tier: DifficultyTier) -> LearningStep:
    estimated = step.estimated_time or DEFAULT_ESTIMATED_TIME
    return step.model_copy(update={
        "description": step.description + DESCRIPTION_CLAUSES[tier],
        "estimated_time": estimated + TIME_CLAUSES[tier],
    })


def personalize_learning_path(draft: LearningPath, profile: Profile) -> LearningPath:
    """
    Personalize and filter a drafted learning path for a candidate.

    Args:
        draft: Learning path as drafted by a model (or a fallback)
        profile: Candidate profile

    Returns:
        A new LearningPath; the draft is not modified

    Raises:
        StructuralInvariantError: If filtering removes every step
    """
    tier = profile.experience_tier
    steps = draft.steps

    if profile.experience_years < JUNIOR_FILTER_MAX_YEARS:
        kept = [step for step in steps if not is_advanced_step(step)]
        dropped = len(steps) - len(kept)
        if dropped:
            logger.info(f"Filtered {dropped} advanced step(s) for a junior candidate")
        steps = kept

    if not steps:
        raise StructuralInvariantError(
            "Learning path has no steps left after filtering for experience level"
        )

    return draft.model_copy(update={
        "steps": [personalize_step(step, tier) for step in steps],
        "job_role": profile.role.display_name,
        "experience_level": f"{profile.experience_years} years ({tier.value})",
    })
