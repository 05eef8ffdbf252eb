"""
Orchestrator - sequences model calls into finished coaching results.

Call shapes:
    single-model:  PromptBuilder -> primary model -> ResponseParser
                   (interview questions, learning path)
    chained:       analysis model -> drafting model -> personalization pass
                   (orchestrated learning path)

Failure policy: a failed model call (transport error, non-2xx, malformed
envelope, timeout) is never retried. The orchestrator substitutes canned
content picked by keyword-matching the prompt, marks the result degraded
and logs it at WARNING. Parser and invariant errors are not recovered;
they propagate to the caller.

Every call is timed and reported to the CallMonitor. Successful raw
responses are kept in the ResultCache (ai_responses) so identical prompts
for the same profile are not sent twice. A reply the parser rejects is
evicted again, so the next request reaches the model.
"""

import asyncio
import hashlib
import logging
import time
from typing import Any, Callable

from careercoach.core.call_monitor import CallMonitor
from careercoach.core.errors import ResponseFormatError, TransientCallFailure
from careercoach.core.fallbacks import (
    fallback_learning_path,
    fallback_questions,
    fallback_skill_analysis,
)
from careercoach.core.knowledge_base import KnowledgeBase
from careercoach.core.model_clients import ExtendedModelClient, ModelClient
from careercoach.core.personalization import personalize_learning_path
from careercoach.core.response_parser import ResponseParser
from careercoach.core.result_cache import CacheKind, ResultCache
from careercoach.models.analysis import CombinedAnalysis
from careercoach.models.learning_path import LearningPath
from careercoach.models.monitoring import ModelResponse
from careercoach.models.profile import DifficultyTier, Profile, PromptContext
from careercoach.models.question import QuestionSet
from careercoach.prompts.coach import CoachPrompts
from careercoach.prompts.interviewer import InterviewerPrompts

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Runs the generation pipelines over the configured model clients.

    Models are selected explicitly by the caller:
    - primary: single-model question and learning-path generation
    - analysis_model: first stage of the chained path (skill analysis)
    - drafting_model: second stage of the chained path (structured draft)
    """

    def __init__(
        self,
        primary: ModelClient,
        analysis_model: ExtendedModelClient,
        drafting_model: ExtendedModelClient,
        monitor: CallMonitor,
        cache: ResultCache | None = None,
        knowledge_base: KnowledgeBase | None = None,
        reference_doc_limit: int = 3,
        call_timeout: float = 30.0,
        langfuse: Any = None,
    ):
        self.primary = primary
        self.analysis_model = analysis_model
        self.drafting_model = drafting_model
        self.monitor = monitor
        self.cache = cache
        self.knowledge_base = knowledge_base
        self.reference_doc_limit = reference_doc_limit
        self.call_timeout = call_timeout
        self.langfuse = langfuse

        self.parser = ResponseParser()
        self.question_builder = InterviewerPrompts().question_builder()
        self.learning_path_builder = CoachPrompts().learning_path_builder()

    @property
    def clients(self) -> list[ModelClient]:
        return [self.primary, self.analysis_model, self.drafting_model]

    # =========================================================================
    # MODEL CALLS
    # =========================================================================

    async def _call(self, client: ModelClient, prompt: str) -> ModelResponse:
        """One timed, monitored invocation. Raises TransientCallFailure."""
        start = time.perf_counter()
        try:
            text = await asyncio.wait_for(client.invoke(prompt), timeout=self.call_timeout)
        except asyncio.TimeoutError:
            duration_ms = int((time.perf_counter() - start) * 1000)
            detail = f"timed out after {self.call_timeout}s"
            self.monitor.record_call(client.name, duration_ms, False, detail)
            raise TransientCallFailure(client.name, detail) from None
        except TransientCallFailure as e:
            duration_ms = int((time.perf_counter() - start) * 1000)
            self.monitor.record_call(client.name, duration_ms, False, e.detail)
            raise

        duration_ms = int((time.perf_counter() - start) * 1000)
        self.monitor.record_call(client.name, duration_ms, True)
        return ModelResponse(text=text, service=client.name, latency_ms=duration_ms)

    async def _invoke(self, client: ModelClient, prompt: str, fingerprint: str) -> ModelResponse:
        """
        Invoke a model, going through the raw-response cache.

        Failures come back as an unsuccessful ModelResponse instead of
        raising, so every pipeline can take its fallback branch.
        """
        async def call() -> ModelResponse:
            return await self._call(client, prompt)

        try:
            if self.cache is None:
                return await call()
            key = self._response_key(client.name, prompt, fingerprint)
            return await self.cache.get_or_compute(CacheKind.AI_RESPONSES, key, call)

        except TransientCallFailure as e:
            return ModelResponse(text="", service=client.name, success=False, error=e.detail)

    @staticmethod
    def _response_key(service: str, prompt: str, fingerprint: str) -> str:
        prompt_hash = hashlib.sha256(prompt.encode("utf-8")).hexdigest()[:16]
        return f"{service}:{fingerprint}:{prompt_hash}"

    def _parse_reply(
        self,
        parse: Callable[[str], Any],
        response: ModelResponse,
        prompt: str,
        fingerprint: str,
    ) -> Any:
        """Parse a raw reply; an unparseable reply is evicted so the next request asks again."""
        try:
            return parse(response.text)
        except ResponseFormatError:
            if self.cache is not None:
                self.cache.discard(
                    CacheKind.AI_RESPONSES,
                    self._response_key(response.service, prompt, fingerprint),
                )
            raise

    @staticmethod
    def _log_degraded(operation: str, response: ModelResponse):
        logger.warning(
            f"Fallback response used for {operation}: "
            f"{response.service} unavailable ({response.error})"
        )

    async def _reference_docs(self, profile: Profile) -> list[str]:
        """Similarity-search enrichment. Optional; a failing search is skipped."""
        if self.knowledge_base is None or self.reference_doc_limit <= 0:
            return []

        query = " ".join([profile.role.display_name] + profile.skills)
        try:
            return await self.knowledge_base.search(query, self.reference_doc_limit)
        except Exception as e:
            logger.warning(f"Knowledge base search failed, continuing without references: {e}")
            return []

    # =========================================================================
    # TRACING
    # =========================================================================

    def _start_span(self, name: str, metadata: dict):
        if not self.langfuse:
            return None
        try:
            return self.langfuse.start_span(name=name, metadata=metadata)
        except Exception as lf_err:
            logger.warning(f"Langfuse span start failed: {lf_err}")
            return None

    def _end_span(self, span, output: dict):
        if not span:
            return
        try:
            span.update(output=output)
            span.end()
        except Exception as lf_err:
            logger.warning(f"Langfuse span end failed: {lf_err}")

    # =========================================================================
    # SINGLE-MODEL PATHS
    # =========================================================================

    async def generate_questions(
        self,
        profile: Profile,
        difficulty: DifficultyTier | None = None,
    ) -> QuestionSet:
        """
        Generate interview questions with the primary model.

        Args:
            profile: Candidate profile
            difficulty: Target tier; defaults to the profile's experience tier

        Returns:
            QuestionSet (degraded=True when the canned set was used)

        Raises:
            ResponseFormatError: If the model answered with unusable output
        """
        tier = difficulty or profile.experience_tier
        context = PromptContext.from_profile(profile, tier)
        docs = await self._reference_docs(profile)
        prompt = self.question_builder.build(context, reference_docs=docs)

        span = self._start_span("generate_questions", {
            "role": profile.role.value,
            "difficulty": tier.value,
            "reference_docs": len(docs),
        })

        try:
            response = await self._invoke(self.primary, prompt, profile.fingerprint)
            if response.success:
                result = self._parse_reply(
                    self.parser.parse_questions, response, prompt, profile.fingerprint
                )
            else:
                self._log_degraded("interview questions", response)
                result = fallback_questions(prompt, tier)
        except Exception as e:
            self._end_span(span, {"error": str(e)})
            raise

        logger.info(
            f"Generated {len(result.questions)} questions for {profile.role.value} "
            f"at {result.difficulty.value} (degraded={result.degraded})"
        )
        self._end_span(span, {
            "questions": len(result.questions),
            "difficulty": result.difficulty.value,
            "fallback_used": result.degraded,
        })
        return result

    async def generate_learning_path(self, profile: Profile) -> LearningPath:
        """
        Generate a learning path with the primary model alone.

        Raises:
            ResponseFormatError: If the model answered with unusable output
        """
        context = PromptContext.from_profile(profile)
        prompt = self.learning_path_builder.build(context)
        span = self._start_span("generate_learning_path", {"role": profile.role.value})

        try:
            response = await self._invoke(self.primary, prompt, profile.fingerprint)
            if response.success:
                path = self._parse_reply(
                    self.parser.parse_learning_path, response, prompt, profile.fingerprint
                )
            else:
                self._log_degraded("learning path", response)
                path = fallback_learning_path(prompt)
        except Exception as e:
            self._end_span(span, {"error": str(e)})
            raise

        path = path.model_copy(update={
            "job_role": profile.role.display_name,
            "experience_level": f"{profile.experience_years} years",
        })
        self._end_span(span, {"steps": len(path.steps), "fallback_used": path.degraded})
        return path

    # =========================================================================
    # CHAINED PATH
    # =========================================================================

    async def generate_orchestrated_learning_path(self, profile: Profile) -> LearningPath:
        """
        Chained generation: skill analysis -> structured draft -> personalization.

        Each model stage falls back independently; the result is degraded
        if either stage used canned content.

        Raises:
            ResponseFormatError: If the drafting model returned unusable output
            StructuralInvariantError: If personalization filtered out every step
        """
        context = PromptContext.from_profile(profile)
        degraded = False
        span = self._start_span("generate_orchestrated_learning_path", {
            "role": profile.role.value,
            "experience_years": profile.experience_years,
            "analysis_model": self.analysis_model.name,
            "drafting_model": self.drafting_model.name,
        })

        try:
            analysis_prompt = self.analysis_model.skill_analysis_prompt(context)
            analysis = await self._invoke(self.analysis_model, analysis_prompt, profile.fingerprint)
            if analysis.success:
                analysis_text = analysis.text
            else:
                self._log_degraded("skill analysis", analysis)
                analysis_text = fallback_skill_analysis(analysis_prompt)
                degraded = True

            draft_prompt = self.drafting_model.learning_path_draft_prompt(analysis_text, context)
            draft_response = await self._invoke(self.drafting_model, draft_prompt, profile.fingerprint)
            if draft_response.success:
                draft = self._parse_reply(
                    self.parser.parse_learning_path, draft_response, draft_prompt, profile.fingerprint
                )
            else:
                self._log_degraded("learning path draft", draft_response)
                draft = fallback_learning_path(draft_prompt)
                degraded = True

            path = personalize_learning_path(draft, profile)
        except Exception as e:
            self._end_span(span, {"error": str(e)})
            raise

        if degraded:
            path = path.model_copy(update={"degraded": True})

        logger.info(
            f"Orchestrated learning path for {profile.role.value}: "
            f"{len(draft.steps)} drafted, {len(path.steps)} kept (degraded={degraded})"
        )
        self._end_span(span, {
            "drafted_steps": len(draft.steps),
            "kept_steps": len(path.steps),
            "fallback_used": degraded,
        })
        return path

    async def combine_analysis(self, profile: Profile) -> CombinedAnalysis:
        """
        Skill analysis from the analysis model plus a summary of the
        candidate's career text from the drafting model.
        """
        context = PromptContext.from_profile(profile)
        degraded = False

        analysis_prompt = self.analysis_model.skill_analysis_prompt(context)
        document = "\n\n".join(
            part for part in (profile.summary, profile.project_text) if part
        ) or context.summary
        summary_prompt = self.drafting_model.document_summary_prompt(document, context)

        analysis, summary = await asyncio.gather(
            self._invoke(self.analysis_model, analysis_prompt, profile.fingerprint),
            self._invoke(self.drafting_model, summary_prompt, profile.fingerprint),
        )

        if analysis.success:
            analysis_text = analysis.text.strip()
        else:
            self._log_degraded("skill analysis", analysis)
            analysis_text = fallback_skill_analysis(analysis_prompt)
            degraded = True

        if summary.success:
            summary_text = summary.text.strip()
        else:
            self._log_degraded("career summary", summary)
            summary_text = f"Summary unavailable. Original text: {document[:200]}"
            degraded = True

        report = (
            f"=== Technical Analysis ({self.analysis_model.name}) ===\n{analysis_text}\n\n"
            f"=== Career Summary ({self.drafting_model.name}) ===\n{summary_text}"
        )
        return CombinedAnalysis(
            technical_analysis=analysis_text,
            career_summary=summary_text,
            report=report,
            degraded=degraded,
        )

    # =========================================================================
    # HEALTH
    # =========================================================================

    async def health_check(self, service: str) -> bool:
        """
        Real health check of one wired model. Slow; do not poll.

        Raises:
            KeyError: If no wired model has that name
        """
        for client in self.clients:
            if client.name == service:
                return await client.health_check()
        raise KeyError(service)
