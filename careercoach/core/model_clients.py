"""
Model Clients for CareerCoach

Every generative model is a black-box text -> text call behind the
ModelClient protocol:
- GeminiModel: primary model, Gemini generateContent envelope
- GatewayModel: secondary models behind a chat-completions AI gateway,
  with extended capabilities (skill analysis, drafting, summarization)
- MockModel: deterministic canned output, no network

Any failure of the underlying call (network, timeout, non-2xx status,
malformed envelope) is raised as TransientCallFailure. Clients never retry.
"""

import json
import logging
import re
from typing import Protocol, runtime_checkable

import httpx

from careercoach.core.errors import TransientCallFailure
from careercoach.core.fallbacks import (
    fallback_learning_path,
    fallback_questions,
    fallback_skill_analysis,
)
from careercoach.models.profile import DifficultyTier, PromptContext
from careercoach.prompts.analyst import AnalystPrompts
from careercoach.prompts.coach import CoachPrompts

logger = logging.getLogger(__name__)

HEALTH_CHECK_PROMPT = "Health check: reply with the single word OK."


@runtime_checkable
class ModelClient(Protocol):
    """Capability set shared by every model client."""

    @property
    def name(self) -> str: ...

    async def invoke(self, prompt: str) -> str: ...

    async def health_check(self) -> bool: ...

    async def close(self) -> None: ...


@runtime_checkable
class ExtendedModelClient(ModelClient, Protocol):
    """A secondary model that can also phrase analysis, drafting and summary prompts."""

    def skill_analysis_prompt(self, context: PromptContext) -> str: ...

    def learning_path_draft_prompt(self, analysis: str, context: PromptContext) -> str: ...

    def document_summary_prompt(self, document: str, context: PromptContext) -> str: ...


class _HealthCheckMixin:
    """Health check through a real throwaway invocation. Slow; do not poll."""

    async def health_check(self) -> bool:
        try:
            text = await self.invoke(HEALTH_CHECK_PROMPT)
        except TransientCallFailure as e:
            logger.warning(f"{self.name} health check failed: {e}")
            return False
        return bool(text and text.strip())


class _ExtendedCapabilitiesMixin:
    """
    Prompts for the secondary models' extended capabilities.

    The orchestrator renders these and sends them through invoke(), so the
    call stays timed, monitored and covered by the fallback path.
    """

    analyst_prompts = AnalystPrompts()
    coach_prompts = CoachPrompts()

    def skill_analysis_prompt(self, context: PromptContext) -> str:
        """Unstructured analysis of the candidate's technical strengths and gaps."""
        return self.analyst_prompts.skill_analysis_builder().build(context)

    def learning_path_draft_prompt(self, analysis: str, context: PromptContext) -> str:
        """Structured learning-path draft built on another model's analysis."""
        return self.coach_prompts.draft_builder().build(context, analysis=analysis)

    def document_summary_prompt(self, document: str, context: PromptContext) -> str:
        return self.analyst_prompts.document_summary_builder().build(
            context, document=document
        )


# ============================================================================
# PRIMARY MODEL
# ============================================================================

class GeminiModel(_HealthCheckMixin):
    """
    Primary generative model using the Gemini generateContent API.

    Request:  {contents: [{parts: [{text}]}], generationConfig: {...}}
    Response: {candidates: [{content: {parts: [{text}]}}]}
    """

    def __init__(
        self,
        api_key: str,
        api_url: str,
        timeout: float = 30.0,
        temperature: float = 0.7,
        top_k: int = 40,
        top_p: float = 0.95,
        max_output_tokens: int = 2048,
        name: str = "Gemini",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._name = name
        self.api_key = api_key
        self.api_url = api_url
        self.generation_config = {
            "temperature": temperature,
            "topK": top_k,
            "topP": top_p,
            "maxOutputTokens": max_output_tokens,
        }
        self.client = httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return self._name

    async def close(self):
        await self.client.aclose()

    @staticmethod
    def _extract_text(result: dict) -> str:
        try:
            return result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ValueError(f"unexpected response envelope ({e!r})") from e

    async def invoke(self, prompt: str) -> str:
        """
        Call the Gemini API.

        Args:
            prompt: The prompt to send

        Returns:
            Model response text

        Raises:
            TransientCallFailure: On any transport, status or envelope failure
        """
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": self.generation_config,
        }
        try:
            response = await self.client.post(
                self.api_url,
                params={"key": self.api_key},
                json=payload,
            )
            response.raise_for_status()
            return self._extract_text(response.json())

        except httpx.HTTPError as e:
            logger.error(f"{self.name} API error: {e}")
            raise TransientCallFailure(self.name, str(e)) from e
        except ValueError as e:
            logger.error(f"{self.name} returned a malformed response: {e}")
            raise TransientCallFailure(self.name, f"malformed envelope: {e}") from e


# ============================================================================
# SECONDARY MODELS (AI GATEWAY)
# ============================================================================

class GatewayModel(_ExtendedCapabilitiesMixin, _HealthCheckMixin):
    """
    Secondary model served through an AI gateway serving endpoint.

    Uses the chat-completions payload; one instance per endpoint.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        token: str,
        endpoint: str,
        timeout: float = 60.0,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._name = name
        self.endpoint = endpoint
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return self._name

    async def close(self):
        await self.client.aclose()

    def _extract_content(self, result: dict) -> str:
        """Extract text content from API response, handling list/dict formats."""
        choices = result.get("choices") or []
        if not choices or not isinstance(choices[0], dict):
            raise ValueError("response has no choices")
        content = choices[0].get("message", {}).get("content", "")

        # Multi-part responses arrive as a list of strings or {"text": ...}
        if isinstance(content, list):
            text_parts = []
            for part in content:
                if isinstance(part, str):
                    text_parts.append(part)
                elif isinstance(part, dict) and "text" in part:
                    text_parts.append(part["text"])
            content = "".join(text_parts)

        return content if isinstance(content, str) else str(content)

    async def invoke(self, prompt: str) -> str:
        """
        Call the serving endpoint.

        Raises:
            TransientCallFailure: On any transport, status or envelope failure
        """
        payload = {
            "messages": [
                {"role": "user", "content": prompt}
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        try:
            response = await self.client.post(self.endpoint, json=payload)
            response.raise_for_status()
            return self._extract_content(response.json())

        except httpx.HTTPError as e:
            logger.error(f"{self.name} API error: {e}")
            raise TransientCallFailure(self.name, str(e)) from e
        except (ValueError, AttributeError) as e:
            logger.error(f"{self.name} returned a malformed response: {e}")
            raise TransientCallFailure(self.name, f"malformed envelope: {e}") from e


# ============================================================================
# MOCK MODEL
# ============================================================================

_DIFFICULTY_LINE = re.compile(r"target difficulty:\s*(\w+)", re.IGNORECASE)


class MockModel(_ExtendedCapabilitiesMixin, _HealthCheckMixin):
    """
    Deterministic model with canned output. Never touches the network.

    The reply shape is chosen from the prompt: question-set JSON,
    learning-path JSON (snake_case or camelCase, matching the prompt's
    schema) or plain analysis text.
    """

    def __init__(self, name: str = "Mock"):
        self._name = name
        self.prompts: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    async def close(self):
        pass

    async def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)

        if '"learning_steps"' in prompt:
            return json.dumps(self._path_payload(prompt, camel=False))
        if '"learningSteps"' in prompt:
            return json.dumps(self._path_payload(prompt, camel=True))
        if '"questions"' in prompt:
            canned = fallback_questions(prompt, self._difficulty(prompt))
            return json.dumps({
                "questions": canned.questions,
                "analysis": f"{self.name} canned analysis.",
                "difficulty": canned.difficulty.value.upper(),
            })
        if prompt == HEALTH_CHECK_PROMPT:
            return "OK"
        if "=== DOCUMENT ===" in prompt:
            document = prompt.split("=== DOCUMENT ===", 1)[1].strip()
            return f"Summary: {document[:150]}"
        return fallback_skill_analysis(prompt)

    @staticmethod
    def _difficulty(prompt: str) -> DifficultyTier:
        match = _DIFFICULTY_LINE.search(prompt)
        if match:
            try:
                return DifficultyTier(match.group(1).lower())
            except ValueError:
                pass
        return DifficultyTier.MIDDLE

    @staticmethod
    def _path_payload(prompt: str, camel: bool) -> dict:
        path = fallback_learning_path(prompt)
        steps = []
        for step in path.steps:
            steps.append({
                "title": step.title,
                "description": step.description,
                "difficulty": step.difficulty.value.upper(),
                ("estimatedTime" if camel else "estimated_time"): step.estimated_time,
                "resources": step.resources,
                ("learningObjective" if camel else "learning_objective"): step.objective,
            })
        if camel:
            return {
                "learningSteps": steps,
                "overallStrategy": path.strategy,
                "estimatedDuration": path.total_duration,
            }
        return {
            "learning_steps": steps,
            "overall_strategy": path.strategy,
            "estimated_duration": path.total_duration,
        }
