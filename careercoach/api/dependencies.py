"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components.
"""

import logging

from fastapi import HTTPException
from langfuse import Langfuse

from careercoach.config.settings import Settings, get_settings
from careercoach.core.call_monitor import CallMonitor
from careercoach.core.coaching_service import CoachingService
from careercoach.core.errors import (
    CoachingError,
    QueueOverflowError,
    ResponseFormatError,
    StructuralInvariantError,
)
from careercoach.core.knowledge_base import SAMPLE_DOCUMENTS, StaticKnowledgeBase
from careercoach.core.model_clients import GatewayModel, GeminiModel, MockModel
from careercoach.core.orchestrator import Orchestrator
from careercoach.core.result_cache import CacheKind, CachePolicy, ResultCache
from careercoach.core.task_queues import BoundedTaskQueue, EventDispatcher

logger = logging.getLogger(__name__)


# ============================================================================
# BUILDERS
# ============================================================================

def build_model_clients(settings: Settings):
    """
    Select the model variants explicitly from settings.

    Returns:
        (primary, analysis_model, drafting_model)
    """
    if settings.use_mock_models:
        logger.info("Using mock models")
        return (
            MockModel("Gemini"),
            MockModel(settings.analysis_service_name),
            MockModel(settings.drafting_service_name),
        )

    primary = GeminiModel(
        api_key=settings.gemini_api_key,
        api_url=settings.gemini_api_url,
        timeout=settings.model_timeout_seconds,
        temperature=settings.gemini_temperature,
        top_k=settings.gemini_top_k,
        top_p=settings.gemini_top_p,
        max_output_tokens=settings.gemini_max_output_tokens,
    )
    analysis_model = GatewayModel(
        name=settings.analysis_service_name,
        base_url=settings.gateway_host,
        token=settings.gateway_token,
        endpoint=settings.analysis_endpoint,
        timeout=settings.model_timeout_seconds,
    )
    drafting_model = GatewayModel(
        name=settings.drafting_service_name,
        base_url=settings.gateway_host,
        token=settings.gateway_token,
        endpoint=settings.drafting_endpoint,
        timeout=settings.model_timeout_seconds,
    )
    return primary, analysis_model, drafting_model


def build_cache(settings: Settings) -> ResultCache:
    return ResultCache({
        CacheKind.INTERVIEW_QUESTIONS: CachePolicy(
            settings.cache_questions_max_size,
            settings.cache_questions_write_ttl,
            settings.cache_questions_access_ttl,
        ),
        CacheKind.LEARNING_PATHS: CachePolicy(
            settings.cache_paths_max_size,
            settings.cache_paths_write_ttl,
            settings.cache_paths_access_ttl,
        ),
        CacheKind.AI_RESPONSES: CachePolicy(
            settings.cache_responses_max_size,
            settings.cache_responses_write_ttl,
            settings.cache_responses_access_ttl,
        ),
    })


def build_dispatcher(settings: Settings) -> EventDispatcher:
    return EventDispatcher(
        general=BoundedTaskQueue(
            "general",
            workers=settings.general_queue_workers,
            capacity=settings.general_queue_capacity,
            drain_timeout=settings.general_queue_drain_seconds,
        ),
        ai=BoundedTaskQueue(
            "ai",
            workers=settings.ai_queue_workers,
            capacity=settings.ai_queue_capacity,
            drain_timeout=settings.ai_queue_drain_seconds,
        ),
    )


def build_knowledge_base(settings: Settings) -> StaticKnowledgeBase | None:
    if settings.use_mock_models or settings.use_sample_knowledge_base:
        return StaticKnowledgeBase(SAMPLE_DOCUMENTS)
    logger.info(
        "No similarity-search backend configured, prompts are built without reference material"
    )
    return None


def build_langfuse(settings: Settings) -> Langfuse | None:
    if not settings.langfuse_enabled:
        return None
    if not (settings.langfuse_secret_key and settings.langfuse_public_key):
        logger.info("Langfuse keys not configured, tracing disabled")
        return None
    try:
        client = Langfuse(
            secret_key=settings.langfuse_secret_key,
            public_key=settings.langfuse_public_key,
            host=settings.langfuse_base_url,
        )
        logger.info("Langfuse initialized for LLM observability")
        return client
    except Exception as e:
        logger.warning(f"Failed to initialize Langfuse: {e}")
        return None


def build_service(settings: Settings) -> CoachingService:
    """Wire every core component from settings."""
    primary, analysis_model, drafting_model = build_model_clients(settings)
    monitor = CallMonitor(
        base_costs=settings.service_base_costs,
        default_base_cost=settings.default_base_cost,
        cost_per_second=settings.cost_per_second,
        slow_call_threshold_ms=settings.slow_call_threshold_ms,
        error_rate_threshold=settings.error_rate_threshold,
    )
    cache = build_cache(settings)
    orchestrator = Orchestrator(
        primary=primary,
        analysis_model=analysis_model,
        drafting_model=drafting_model,
        monitor=monitor,
        cache=cache,
        knowledge_base=build_knowledge_base(settings),
        reference_doc_limit=settings.reference_doc_limit,
        call_timeout=settings.model_timeout_seconds,
        langfuse=build_langfuse(settings),
    )
    return CoachingService(orchestrator, monitor, cache, build_dispatcher(settings))


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_service: CoachingService | None = None


def get_service() -> CoachingService:
    """
    Get the coaching service singleton.

    Lazily initializes all required components.
    """
    global _service

    if _service is None:
        _service = build_service(get_settings())

    return _service


async def startup():
    """Validate configuration and start the background queues."""
    settings = get_settings()
    settings.validate_model_credentials()
    service = get_service()
    if service.dispatcher is not None:
        service.dispatcher.start()


async def cleanup():
    """Cleanup resources on shutdown."""
    global _service

    if _service is None:
        return

    if _service.dispatcher is not None:
        await _service.dispatcher.shutdown()

    for client in _service.orchestrator.clients:
        await client.close()

    langfuse = _service.orchestrator.langfuse
    if langfuse:
        try:
            langfuse.flush()
        except Exception as e:
            logger.warning(f"Failed to flush Langfuse: {e}")

    _service = None


# ============================================================================
# ERROR MAPPING
# ============================================================================

def to_http_error(error: CoachingError) -> HTTPException:
    """Translate a core error into an HTTP error for the edge."""
    if isinstance(error, (ResponseFormatError, StructuralInvariantError)):
        return HTTPException(status_code=502, detail=str(error))
    if isinstance(error, QueueOverflowError):
        return HTTPException(status_code=503, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
