"""
Knowledge base access for prompt enrichment.

The similarity-search backend is an external collaborator; the core only
consumes search(query, limit) -> [text]. StaticKnowledgeBase is a small
in-memory implementation used in mock mode and in tests.
"""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


SAMPLE_DOCUMENTS = [
    "Spring Boot auto-configuration and dependency injection best practices for backend services.",
    "Database indexing strategies and query optimization for large tables.",
    "Microservices resilience patterns: circuit breaker, retries, bulkheads and sagas.",
    "React component state management and rendering performance in frontend applications.",
    "Data pipeline design: idempotent batch loads, partitioning and data quality checks.",
]


@runtime_checkable
class KnowledgeBase(Protocol):
    async def search(self, query: str, limit: int) -> list[str]: ...


class StaticKnowledgeBase:
    """Ranks a fixed document list by word overlap with the query."""

    def __init__(self, documents: list[str] | None = None):
        self.documents = list(documents or [])

    async def search(self, query: str, limit: int) -> list[str]:
        if limit <= 0 or not self.documents:
            return []

        words = {w for w in query.lower().split() if len(w) > 2}
        scored = []
        for index, doc in enumerate(self.documents):
            overlap = len(words & set(doc.lower().split()))
            if overlap:
                scored.append((-overlap, index, doc))

        scored.sort()
        logger.debug(f"Knowledge base matched {len(scored)} document(s) for '{query}'")
        return [doc for _, _, doc in scored[:limit]]
