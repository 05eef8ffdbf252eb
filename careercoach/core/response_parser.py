"""
Response Parser for CareerCoach

Maps raw model text to QuestionSet and LearningPath objects.

Model output is often wrapped in fenced markup (```json ... ```); fences
are stripped before parsing. Anything that still does not match the
expected schema raises ResponseFormatError. Nothing is coerced to a
default, so upstream model drift stays visible.
"""

import json
import logging
import re
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from careercoach.core.errors import ResponseFormatError
from careercoach.models.learning_path import LearningPath, LearningStep
from careercoach.models.profile import DifficultyTier, StepDifficulty
from careercoach.models.question import QuestionSet

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^\s*```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```\s*$")


# ============================================================================
# WIRE SCHEMAS
# ============================================================================

class _QuestionPayload(BaseModel):
    questions: list[str]
    analysis: str = ""
    difficulty: DifficultyTier

    @field_validator("questions", mode="before")
    @classmethod
    def _flatten_questions(cls, value: Any) -> Any:
        # Entries may be plain strings or {"question": "..."} objects
        if isinstance(value, list):
            return [
                item.get("question") if isinstance(item, dict) else item
                for item in value
            ]
        return value

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_tier(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class _StepPayload(BaseModel):
    title: str
    description: str = ""
    difficulty: StepDifficulty
    estimated_time: str | None = Field(
        default=None,
        validation_alias=AliasChoices("estimated_time", "estimatedTime"),
    )
    resources: list[str] = Field(default_factory=list)
    objective: str = Field(
        default="",
        validation_alias=AliasChoices("learning_objective", "learningObjective", "objective"),
    )

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class _PathPayload(BaseModel):
    steps: list[_StepPayload] = Field(
        validation_alias=AliasChoices("learning_steps", "learningSteps", "steps"),
    )
    strategy: str = Field(
        default="",
        validation_alias=AliasChoices("overall_strategy", "overallStrategy", "strategy"),
    )
    total_duration: str = Field(
        default="",
        validation_alias=AliasChoices("estimated_duration", "estimatedDuration", "total_duration"),
    )


# ============================================================================
# PARSER
# ============================================================================

class ResponseParser:
    """Parses model text into structured results."""

    @staticmethod
    def strip_fences(text: str) -> str:
        """Remove a leading ```lang fence and a trailing ``` fence."""
        cleaned = _FENCE_OPEN.sub("", text, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
        return cleaned.strip()

    def load_json(self, text: str) -> dict:
        """
        Parse model text as a JSON object.

        Raises:
            ResponseFormatError: If the text is not a JSON object
        """
        if not text or not text.strip():
            raise ResponseFormatError("Empty model response")

        cleaned = self.strip_fences(text)
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"Model response is not valid JSON: {e}")
            raise ResponseFormatError(f"Invalid JSON in model response: {e}") from e

        if not isinstance(data, dict):
            raise ResponseFormatError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        return data

    def parse_questions(self, text: str) -> QuestionSet:
        """
        Parse a question-set response.

        Args:
            text: Raw model text

        Returns:
            QuestionSet with 1-10 questions

        Raises:
            ResponseFormatError: On invalid JSON, missing fields, unknown tier
                or a question count outside 1-10
        """
        data = self.load_json(text)
        try:
            payload = _QuestionPayload.model_validate(data)
            return QuestionSet(
                questions=payload.questions,
                analysis=payload.analysis,
                difficulty=payload.difficulty,
            )
        except ValidationError as e:
            raise ResponseFormatError(f"Question set does not match schema: {e}") from e

    def parse_learning_path(self, text: str) -> LearningPath:
        """
        Parse a learning-path response.

        Both snake_case and camelCase keys are accepted.

        Raises:
            ResponseFormatError: On invalid JSON, missing fields, unknown
                step difficulty or an empty step list
        """
        data = self.load_json(text)
        try:
            payload = _PathPayload.model_validate(data)
            return LearningPath(
                steps=[LearningStep(**step.model_dump()) for step in payload.steps],
                strategy=payload.strategy,
                total_duration=payload.total_duration,
            )
        except ValidationError as e:
            raise ResponseFormatError(f"Learning path does not match schema: {e}") from e
