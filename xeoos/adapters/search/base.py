from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from xeoos.core.errors import ExternalServiceAppError

logger = logging.getLogger(__name__)


@dataclass
class SearchPage:
    """One page of raw hits plus the engine's paging metadata."""

    hits: list[dict[str, Any]] = field(default_factory=list)
    query: str = ""
    limit: int = 20
    offset: int = 0
    estimated_total_hits: int | None = None
    processing_time_ms: int | None = None


class AbstractSearchIndex(ABC):
    """Interface for the post search index."""

    @abstractmethod
    async def search(self, query: str, *, limit: int, offset: int, filter: str | None = None) -> SearchPage:
        ...

    @abstractmethod
    async def upsert(self, documents: list[dict[str, Any]]) -> None:
        """Add or replace documents (keyed by ``id``)."""
        ...

    @abstractmethod
    async def delete(self, document_id: int | str) -> None:
        ...


class DisabledSearchIndex(AbstractSearchIndex):
    """Stand-in used when no search host is configured.

    Writes are dropped; queries fail with ``search_unavailable``.
    """

    async def search(self, query: str, *, limit: int, offset: int, filter: str | None = None) -> SearchPage:
        raise ExternalServiceAppError(
            code="search_unavailable",
            message="Search is not configured",
            details={"service": "meilisearch"},
        )

    async def upsert(self, documents: list[dict[str, Any]]) -> None:
        logger.info("search.disabled", extra={"operation": "upsert", "count": len(documents)})

    async def delete(self, document_id: int | str) -> None:
        logger.info("search.disabled", extra={"operation": "delete", "document_id": document_id})
