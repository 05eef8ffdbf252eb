import pytest

from careercoach.core.errors import StructuralInvariantError
from careercoach.core.fallbacks import FALLBACK_PATHS, fallback_learning_path
from careercoach.core.personalization import is_advanced_step, personalize_learning_path
from careercoach.models.learning_path import LearningPath, LearningStep
from careercoach.models.profile import StepDifficulty


def make_path(*steps: LearningStep) -> LearningPath:
    return LearningPath(steps=list(steps), strategy="s", total_duration="3 months")


def step(title, difficulty=StepDifficulty.BEGINNER, estimated_time="2 weeks"):
    return LearningStep(
        title=title,
        description="Study it.",
        difficulty=difficulty,
        estimated_time=estimated_time,
    )


MICROSERVICES = step("마이크로서비스 아키텍처", StepDifficulty.ADVANCED, "6 weeks")


def test_junior_loses_advanced_korean_step(make_profile):
    draft = make_path(step("Java 기초"), MICROSERVICES)

    path = personalize_learning_path(draft, make_profile(experience_years=1))

    assert [s.title for s in path.steps] == ["Java 기초"]


def test_senior_keeps_advanced_step(make_profile):
    draft = make_path(step("Java 기초"), MICROSERVICES)

    path = personalize_learning_path(draft, make_profile(experience_years=6))

    assert [s.title for s in path.steps] == ["Java 기초", "마이크로서비스 아키텍처"]


def test_two_years_is_not_filtered(make_profile):
    draft = make_path(step("Java basics"), step("System design interview prep"))
    path = personalize_learning_path(draft, make_profile(experience_years=2))
    assert len(path.steps) == 2


@pytest.mark.parametrize("title", [
    "Software Architecture",
    "API Design",
    "Distributed caching",
    "Performance Tuning the JVM",
    "Query optimization",
    "Advanced SQL",
    "Becoming an expert",
    "분산 시스템",
    "성능 튜닝",
    "심화 학습",
])
def test_keyword_titles_are_advanced(title):
    assert is_advanced_step(step(title))


def test_plain_intermediate_step_is_not_advanced():
    assert not is_advanced_step(step("Unit testing", StepDifficulty.INTERMEDIATE))


@pytest.mark.parametrize("years, description_clause, time_text", [
    (0, "(learn the fundamentals step by step)", "2 weeks (+1-2 extra weeks recommended)"),
    (3, "(apply this in a real project)", "2 weeks"),
    (7, "(consider this from a system-design perspective)", "2 weeks (can be shortened with focused study)"),
])
def test_clauses_follow_tier(make_profile, years, description_clause, time_text):
    path = personalize_learning_path(make_path(step("Git")), make_profile(experience_years=years))

    assert path.steps[0].description == f"Study it. {description_clause}"
    assert path.steps[0].estimated_time == time_text


def test_missing_estimate_gets_default(make_profile):
    path = personalize_learning_path(
        make_path(step("Git", estimated_time=None)),
        make_profile(experience_years=3),
    )
    assert path.steps[0].estimated_time == "2-3 weeks"


def test_filter_emptying_path_raises(make_profile):
    with pytest.raises(StructuralInvariantError):
        personalize_learning_path(make_path(MICROSERVICES), make_profile(experience_years=0))


def test_draft_is_not_modified(make_profile):
    draft = make_path(step("Git"))
    personalize_learning_path(draft, make_profile(experience_years=0))
    assert draft.steps[0].description == "Study it."


@pytest.mark.parametrize("group", list(FALLBACK_PATHS))
def test_every_canned_path_survives_junior_filter(make_profile, group):
    prompt = {"backend": "Target Role: Backend Developer",
              "frontend": "Target Role: Frontend Developer",
              "data": "Target Role: Data Engineer",
              "devops": "Target Role: DevOps Engineer",
              "general": "Target Role: Product Manager"}[group]

    path = personalize_learning_path(fallback_learning_path(prompt), make_profile(experience_years=0))

    assert path.steps
