"""
Interviewer Prompt Templates

Contains the interview-question prompt plus its two enrichment stages:
- a reasoning scaffold walking from skills to verification points
- fixed exemplar questions that set the expected depth
"""

from careercoach.prompts.builder import PromptBuilder, PromptTemplate


class InterviewerPrompts:
    """
    Prompt templates for interview-question generation.

    Key principles:
    - Questions verify real experience, not trivia
    - Difficulty follows the requested tier
    - Output is JSON only so it can be parsed without guesswork
    """

    SYSTEM_CONTEXT = """You are a senior technical interviewer at a top tech company.
You prepare interview questions tailored to one candidate's background.
You never reveal answers and you never ask trivia."""

    QUESTION_TEMPLATE = PromptTemplate(
        "interview_questions",
        SYSTEM_CONTEXT + """

=== CANDIDATE PROFILE ===
Target Role: {role}
Experience: {experience_years} years ({experience_tier})
Target Difficulty: {difficulty}
Career Summary: {summary}
Projects: {project_text}
Skills: {skills}

=== YOUR TASK ===
Generate 5-10 interview questions for this candidate.

Requirements:
1. Match the target difficulty {difficulty}
2. Ground questions in the candidate's skills and projects
3. Mix conceptual, scenario and design questions
4. Keep each question to 1-3 sentences

Respond ONLY with valid JSON in exactly this format:
{{
    "questions": ["question 1", "question 2"],
    "analysis": "two or three sentences on the candidate's strengths and gaps",
    "difficulty": "{difficulty}"
}}""",
    )

    REASONING_SCAFFOLD = """Before writing the questions, reason through these steps:
1. Skill stack analysis: what do the listed skills and projects say about the candidate?
2. Expected competencies: what must a candidate at the target difficulty in this role be able to do?
3. Verification points: which claims in the profile need practical evidence?
4. Design depth: does this level call for architecture or system-design questions?
5. Current practice: which recent industry trends are relevant to this stack?
Use this analysis to pick the questions, then respond with the JSON only."""

    EXEMPLARS = [
        "Q: In a microservice architecture, how would you keep data consistent across "
        "services without a distributed transaction? Walk through a Saga-based design "
        "and its compensating actions.",
        "Q: A report query over a table with tens of millions of rows has become slow. "
        "How do you diagnose it, and how would you combine indexing, query rewriting "
        "and caching to fix it?",
        "Q: One downstream service keeps timing out and dragging the others down. "
        "How would you apply the Circuit Breaker pattern, and how do you choose its "
        "thresholds?",
    ]

    def question_builder(self) -> PromptBuilder:
        """Builder for the enriched interview-question prompt."""
        return PromptBuilder(
            self.QUESTION_TEMPLATE,
            reasoning_scaffold=self.REASONING_SCAFFOLD,
            exemplars=self.EXEMPLARS,
        )
