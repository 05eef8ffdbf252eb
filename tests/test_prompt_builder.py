import pytest

from careercoach.core.errors import PromptFieldError
from careercoach.models.profile import DifficultyTier, JobRole, PromptContext
from careercoach.prompts import AnalystPrompts, CoachPrompts, InterviewerPrompts
from careercoach.prompts.builder import PromptBuilder, PromptTemplate


def test_context_uses_placeholders_for_missing_fields(make_profile):
    profile = make_profile(project_text=None, skills=[], summary="")
    context = PromptContext.from_profile(profile)

    assert context.project_text == "none"
    assert context.skills == "none"
    assert context.summary == "none"


def test_context_joins_skills_and_derives_tier(make_profile):
    context = PromptContext.from_profile(make_profile(experience_years=6))

    assert context.skills == "Java, Spring Boot, PostgreSQL"
    assert context.experience_tier == "senior"
    assert context.difficulty == "SENIOR"
    assert context.role == JobRole.BACKEND_DEVELOPER.display_name


def test_context_difficulty_override(profile):
    context = PromptContext.from_profile(profile, DifficultyTier.JUNIOR)
    assert context.experience_tier == "middle"
    assert context.difficulty == "JUNIOR"


def test_template_rejects_unknown_field_at_construction():
    with pytest.raises(PromptFieldError):
        PromptTemplate("broken", "Role: {role}, salary: {salary}")


def test_template_requires_declared_extra_fields(profile):
    template = PromptTemplate("draft", "{role}: {analysis}", extra_fields=("analysis",))
    context = PromptContext.from_profile(profile)

    with pytest.raises(PromptFieldError):
        template.render(context)

    assert template.render(context, analysis="solid") == f"{context.role}: solid"


def test_question_prompt_embeds_profile(profile):
    prompt = InterviewerPrompts().question_builder().build(PromptContext.from_profile(profile))

    assert "Backend Developer" in prompt
    assert "3 years (middle)" in prompt
    assert "Java, Spring Boot, PostgreSQL" in prompt
    assert "Migrated a monolith billing service" in prompt
    assert '"questions"' in prompt
    assert "{" in prompt and "{{" not in prompt


def test_enrichment_stages_only_append(profile):
    builder = InterviewerPrompts().question_builder()
    context = PromptContext.from_profile(profile)

    base = builder.base(context)
    full = builder.build(context, reference_docs=["Saga pattern notes"])

    assert full.startswith(base)
    scaffold_at = full.index("=== STEP-BY-STEP ANALYSIS ===")
    examples_at = full.index("=== EXAMPLES OF HIGH-QUALITY QUESTIONS ===")
    reference_at = full.index("=== REFERENCE MATERIAL ===")
    assert scaffold_at < examples_at < reference_at
    assert "Saga" in full[examples_at:reference_at]
    assert "- Saga pattern notes" in full[reference_at:]


def test_build_is_deterministic(profile):
    builder = InterviewerPrompts().question_builder()
    context = PromptContext.from_profile(profile)
    assert builder.build(context) == builder.build(context)


def test_stages_can_be_disabled(profile):
    builder = InterviewerPrompts().question_builder()
    context = PromptContext.from_profile(profile)

    prompt = builder.build(context, reasoning=False, exemplars=False)

    assert prompt == builder.base(context)


def test_reference_context_ignores_blank_documents():
    assert PromptBuilder.with_reference_context("base", ["", "  "]) == "base"


def test_coach_and_analyst_templates_render(profile):
    context = PromptContext.from_profile(profile)

    single = CoachPrompts().learning_path_builder().build(context)
    draft = CoachPrompts().draft_builder().build(context, analysis="Strong Java, weak testing")
    analysis = AnalystPrompts().skill_analysis_builder().build(context)
    summary = AnalystPrompts().document_summary_builder().build(context, document="Led a team")

    assert '"learningSteps"' in single
    assert '"learning_steps"' in draft and "Strong Java, weak testing" in draft
    assert "Target Role: Backend Developer" in analysis
    assert summary.rstrip().endswith("Led a team")
