"""
Analysis Prompt Templates

Used by the secondary models for unstructured analysis:
- technical strengths and weaknesses of a candidate
- summaries of free-text career documents
"""

from careercoach.prompts.builder import PromptBuilder, PromptTemplate


class AnalystPrompts:
    """Prompt templates for skill analysis and document summarization."""

    SKILL_ANALYSIS_TEMPLATE = PromptTemplate(
        "skill_analysis",
        """You are a principal engineer reviewing a candidate's technical background.

=== CANDIDATE PROFILE ===
Target Role: {role}
Experience: {experience_years} years ({experience_tier})
Career Summary: {summary}
Projects: {project_text}
Skills: {skills}

=== YOUR TASK ===
Analyze this candidate's technical profile in plain text:
1. Strengths: technologies and practices the candidate clearly masters
2. Weaknesses: gaps a {role} at this level is expected to close
3. Market fit: how the stack matches current industry demand
4. Priorities: the three most valuable areas to study next

Be specific and concise. Do not use JSON.""",
    )

    DOCUMENT_SUMMARY_TEMPLATE = PromptTemplate(
        "document_summary",
        """Summarize the following career document for a technical recruiter.
Highlight responsibilities, measurable outcomes and technologies used.
Keep it under 150 words.

=== DOCUMENT ===
{document}""",
        extra_fields=("document",),
    )

    def skill_analysis_builder(self) -> PromptBuilder:
        return PromptBuilder(self.SKILL_ANALYSIS_TEMPLATE)

    def document_summary_builder(self) -> PromptBuilder:
        return PromptBuilder(self.DOCUMENT_SUMMARY_TEMPLATE)
