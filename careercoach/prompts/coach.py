"""
Learning Path Prompt Templates

Two prompts with overlapping purpose:
- LEARNING_PATH_TEMPLATE: one model drafts a path straight from the profile
- DRAFT_FROM_ANALYSIS_TEMPLATE: a second model drafts a path from another
  model's skill analysis (the chained path)
"""

from careercoach.prompts.builder import PromptBuilder, PromptTemplate


class CoachPrompts:
    """Prompt templates for learning-path generation."""

    SYSTEM_CONTEXT = """You are an experienced software engineering career coach.
You design practical, ordered study plans that a working engineer can follow."""

    LEARNING_PATH_TEMPLATE = PromptTemplate(
        "learning_path",
        SYSTEM_CONTEXT + """

=== CANDIDATE PROFILE ===
Target Role: {role}
Experience: {experience_years} years ({experience_tier})
Career Summary: {summary}
Projects: {project_text}
Skills: {skills}

=== YOUR TASK ===
Design a personalized learning path of 3-5 steps for this candidate.
Order the steps from the most urgent gap to the most ambitious goal.

Respond ONLY with valid JSON in exactly this format:
{{
    "learningSteps": [
        {{
            "title": "step title",
            "description": "what to study and why",
            "difficulty": "BEGINNER | INTERMEDIATE | ADVANCED",
            "estimatedTime": "e.g. 2 weeks",
            "resources": ["resource 1", "resource 2"],
            "learningObjective": "what the candidate can do afterwards"
        }}
    ],
    "overallStrategy": "one paragraph on how to approach the plan",
    "estimatedDuration": "e.g. 3 months"
}}""",
    )

    DRAFT_FROM_ANALYSIS_TEMPLATE = PromptTemplate(
        "learning_path_from_analysis",
        SYSTEM_CONTEXT + """

=== CANDIDATE ===
Target Role: {role}
Experience: {experience_years} years ({experience_tier})

=== TECHNICAL SKILL ANALYSIS ===
{analysis}

=== YOUR TASK ===
Using the analysis above, design a learning path of 3-5 steps for this
candidate. Address the weaknesses first, then build on the strengths.

Respond ONLY with valid JSON in exactly this format:
{{
    "learning_steps": [
        {{
            "title": "step title",
            "description": "what to study and why",
            "difficulty": "BEGINNER | INTERMEDIATE | ADVANCED",
            "estimated_time": "e.g. 2 weeks",
            "resources": ["resource 1"],
            "learning_objective": "what the candidate can do afterwards"
        }}
    ],
    "overall_strategy": "one paragraph on how to approach the plan",
    "estimated_duration": "e.g. 3 months"
}}""",
        extra_fields=("analysis",),
    )

    def learning_path_builder(self) -> PromptBuilder:
        return PromptBuilder(self.LEARNING_PATH_TEMPLATE)

    def draft_builder(self) -> PromptBuilder:
        return PromptBuilder(self.DRAFT_FROM_ANALYSIS_TEMPLATE)
