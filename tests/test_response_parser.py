import json

import pytest

from careercoach.core.errors import ResponseFormatError
from careercoach.core.response_parser import ResponseParser
from careercoach.models.profile import DifficultyTier, StepDifficulty
from careercoach.models.question import QuestionSet


@pytest.fixture
def parser():
    return ResponseParser()


def test_question_set_round_trip(parser):
    original = QuestionSet(
        questions=["What is a JVM?", "Explain GC tuning."],
        analysis="Solid fundamentals.",
        difficulty=DifficultyTier.MIDDLE,
    )
    text = json.dumps(original.model_dump(mode="json"))

    parsed = parser.parse_questions(text)

    assert parsed.model_dump(exclude={"generated_at"}) == original.model_dump(exclude={"generated_at"})


def test_strips_json_fence(parser):
    text = '```json\n{"questions": ["Q1"], "analysis": "a", "difficulty": "SENIOR"}\n```'

    parsed = parser.parse_questions(text)

    assert parsed.questions == ["Q1"]
    assert parsed.difficulty == DifficultyTier.SENIOR


def test_strips_bare_fence(parser):
    text = '```\n{"questions": ["Q1"], "difficulty": "junior"}\n```'
    assert parser.parse_questions(text).difficulty == DifficultyTier.JUNIOR


def test_accepts_question_objects(parser):
    text = json.dumps({
        "questions": [{"question": "Q1", "category": "db"}, "Q2"],
        "difficulty": "middle",
    })
    assert parser.parse_questions(text).questions == ["Q1", "Q2"]


def test_invalid_json_raises(parser):
    with pytest.raises(ResponseFormatError):
        parser.parse_questions("Here are your questions: 1. ...")


def test_empty_response_raises(parser):
    with pytest.raises(ResponseFormatError):
        parser.parse_questions("   ")


def test_non_object_json_raises(parser):
    with pytest.raises(ResponseFormatError):
        parser.parse_questions('["Q1", "Q2"]')


def test_missing_difficulty_raises(parser):
    with pytest.raises(ResponseFormatError):
        parser.parse_questions('{"questions": ["Q1"], "analysis": "a"}')


def test_unknown_tier_raises(parser):
    with pytest.raises(ResponseFormatError):
        parser.parse_questions('{"questions": ["Q1"], "difficulty": "EXPERT"}')


def test_too_many_questions_raises(parser):
    text = json.dumps({"questions": [f"Q{i}" for i in range(11)], "difficulty": "junior"})
    with pytest.raises(ResponseFormatError):
        parser.parse_questions(text)


def test_no_questions_raises(parser):
    with pytest.raises(ResponseFormatError):
        parser.parse_questions('{"questions": [], "difficulty": "junior"}')


def test_learning_path_snake_case(parser):
    text = json.dumps({
        "learning_steps": [{
            "title": "Docker basics",
            "description": "Images and containers",
            "difficulty": "BEGINNER",
            "estimated_time": "1 week",
            "resources": ["Docker docs"],
            "learning_objective": "Containerize an app",
        }],
        "overall_strategy": "Hands-on first",
        "estimated_duration": "1 month",
    })

    path = parser.parse_learning_path(text)

    step = path.steps[0]
    assert step.difficulty == StepDifficulty.BEGINNER
    assert step.estimated_time == "1 week"
    assert step.objective == "Containerize an app"
    assert path.strategy == "Hands-on first"
    assert path.total_duration == "1 month"
    assert path.degraded is False


def test_learning_path_camel_case(parser):
    text = json.dumps({
        "learningSteps": [{
            "title": "Kafka",
            "difficulty": "advanced",
            "estimatedTime": "4 weeks",
            "learningObjective": "Build a streaming pipeline",
        }],
        "overallStrategy": "Depth over breadth",
        "estimatedDuration": "2 months",
    })

    path = parser.parse_learning_path("```json\n" + text + "\n```")

    assert path.steps[0].difficulty == StepDifficulty.ADVANCED
    assert path.steps[0].estimated_time == "4 weeks"
    assert path.total_duration == "2 months"


def test_learning_path_without_steps_raises(parser):
    with pytest.raises(ResponseFormatError):
        parser.parse_learning_path('{"learningSteps": [], "overallStrategy": "x"}')


def test_learning_path_unknown_step_level_raises(parser):
    text = json.dumps({"learning_steps": [{"title": "X", "difficulty": "SENIOR"}]})
    with pytest.raises(ResponseFormatError):
        parser.parse_learning_path(text)


def test_learning_path_missing_title_raises(parser):
    text = json.dumps({"learning_steps": [{"difficulty": "BEGINNER"}]})
    with pytest.raises(ResponseFormatError):
        parser.parse_learning_path(text)
