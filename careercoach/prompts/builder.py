"""
Prompt assembly primitives.

A PromptTemplate is a named-field template whose fields are checked against
PromptContext when the template is created, so a typo in a template fails at
import time instead of rendering "None" into a prompt. A PromptBuilder renders
a template and layers enrichment stages on top; every stage only appends.

Nothing here performs I/O: identical inputs always give identical prompts,
which keeps cache keys stable.
"""

from string import Formatter
from typing import Iterable

from careercoach.core.errors import PromptFieldError
from careercoach.models.profile import PromptContext


CONTEXT_FIELDS = frozenset(PromptContext.model_fields)


class PromptTemplate:
    """A text template over named fields."""

    def __init__(self, name: str, text: str, extra_fields: Iterable[str] = ()):
        """
        Create and validate a template.

        Args:
            name: Template name used in error messages
            text: Template text with {field} placeholders ({{ }} for braces)
            extra_fields: Fields supplied at render time in addition to the context

        Raises:
            PromptFieldError: If the text references an unknown field
        """
        self.name = name
        self.text = text
        self.extra_fields = frozenset(extra_fields)
        self.fields = self._parse_fields(text)

        unknown = self.fields - CONTEXT_FIELDS - self.extra_fields
        if unknown:
            raise PromptFieldError(
                f"Template '{name}' references unknown fields: {sorted(unknown)}"
            )

    @staticmethod
    def _parse_fields(text: str) -> frozenset[str]:
        fields = set()
        for _, field_name, format_spec, conversion in Formatter().parse(text):
            if field_name is None:
                continue
            if not field_name or not field_name.isidentifier():
                raise PromptFieldError(f"Unsupported placeholder '{{{field_name}}}'")
            fields.add(field_name)
        return frozenset(fields)

    def render(self, context: PromptContext, **extras: str) -> str:
        """
        Render the template.

        Raises:
            PromptFieldError: If a referenced field is missing or None
        """
        values = context.model_dump()
        for field_name in self.extra_fields:
            if field_name in self.fields and extras.get(field_name) is None:
                raise PromptFieldError(
                    f"Template '{self.name}' requires a value for '{field_name}'"
                )
        values.update(extras)

        for field_name in self.fields:
            if values.get(field_name) is None:
                raise PromptFieldError(
                    f"Template '{self.name}' field '{field_name}' is unset"
                )

        return self.text.format(**values)


class PromptBuilder:
    """
    Renders a base template and appends enrichment stages.

    Stages (all optional, always appended in this order):
    - reasoning scaffold: step-by-step analysis instructions
    - exemplars: fixed example questions for in-context learning
    - reference context: documents from the knowledge base
    """

    def __init__(
        self,
        template: PromptTemplate,
        reasoning_scaffold: str | None = None,
        exemplars: list[str] | None = None,
    ):
        self.template = template
        self.reasoning_scaffold = reasoning_scaffold
        self.exemplars = list(exemplars or [])

    def base(self, context: PromptContext, **extras: str) -> str:
        return self.template.render(context, **extras)

    def build(
        self,
        context: PromptContext,
        reasoning: bool = True,
        exemplars: bool = True,
        reference_docs: list[str] | None = None,
        **extras: str,
    ) -> str:
        """
        Render the full prompt.

        Args:
            context: Prompt context for the request
            reasoning: Append the reasoning scaffold if the builder has one
            exemplars: Append the exemplars if the builder has any
            reference_docs: Knowledge-base documents to append
            **extras: Values for the template's extra fields

        Returns:
            Prompt text
        """
        prompt = self.base(context, **extras)
        if reasoning and self.reasoning_scaffold:
            prompt = self.with_reasoning_scaffold(prompt, self.reasoning_scaffold)
        if exemplars and self.exemplars:
            prompt = self.with_exemplars(prompt, self.exemplars)
        if reference_docs:
            prompt = self.with_reference_context(prompt, reference_docs)
        return prompt

    @staticmethod
    def with_reasoning_scaffold(prompt: str, scaffold: str) -> str:
        return f"{prompt}\n\n=== STEP-BY-STEP ANALYSIS ===\n{scaffold.strip()}\n"

    @staticmethod
    def with_exemplars(prompt: str, exemplars: list[str]) -> str:
        lines = [f"Example {i}:\n{example.strip()}" for i, example in enumerate(exemplars, 1)]
        return (
            f"{prompt}\n\n=== EXAMPLES OF HIGH-QUALITY QUESTIONS ===\n"
            + "\n\n".join(lines)
            + "\n\nMatch the depth and style of these examples."
            + "\n"
        )

    @staticmethod
    def with_reference_context(prompt: str, docs: list[str]) -> str:
        lines = [f"- {doc.strip()}" for doc in docs if doc and doc.strip()]
        if not lines:
            return prompt
        return f"{prompt}\n\n=== REFERENCE MATERIAL ===\n" + "\n".join(lines) + "\n"
