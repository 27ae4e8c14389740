"""Meilisearch REST adapter."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from xeoos.adapters import http
from xeoos.adapters.search.base import AbstractSearchIndex, SearchPage

logger = logging.getLogger(__name__)


class MeiliSearchIndex(AbstractSearchIndex):
    def __init__(
        self,
        host: str,
        *,
        index: str = "posts",
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base = f"{host.rstrip('/')}/indexes/{quote(index, safe='')}"
        self._headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._timeout = timeout_seconds
        self._transport = transport

    async def _call(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        return await http.request(
            "meilisearch",
            method,
            f"{self._base}{path}",
            timeout=self._timeout,
            transport=self._transport,
            error_code="search_unavailable",
            headers=self._headers,
            **kwargs,
        )

    async def search(self, query: str, *, limit: int, offset: int, filter: str | None = None) -> SearchPage:
        payload: dict[str, Any] = {"q": query, "limit": limit, "offset": offset}
        if filter:
            payload["filter"] = filter

        data = (await self._call("POST", "/search", json=payload)).json()
        return SearchPage(
            hits=data.get("hits", []),
            query=data.get("query", query),
            limit=data.get("limit", limit),
            offset=data.get("offset", offset),
            estimated_total_hits=data.get("estimatedTotalHits"),
            processing_time_ms=data.get("processingTimeMs"),
        )

    async def upsert(self, documents: list[dict[str, Any]]) -> None:
        if not documents:
            return
        await self._call("POST", "/documents", params={"primaryKey": "id"}, json=documents)
        logger.info("search.upserted", extra={"count": len(documents)})

    async def delete(self, document_id: int | str) -> None:
        await self._call("DELETE", f"/documents/{quote(str(document_id), safe='')}")
        logger.info("search.deleted", extra={"document_id": document_id})
