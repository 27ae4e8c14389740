"""Ably REST adapter.

Uses HTTP basic auth with the API key (``keyName:secret``) against the REST
endpoints for publishing, presence and token issuing.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from xeoos.adapters import http
from xeoos.adapters.realtime.base import AbstractRealtime

logger = logging.getLogger(__name__)


class AblyRealtime(AbstractRealtime):
    def __init__(
        self,
        api_key: str,
        *,
        rest_host: str = "https://rest.ably.io",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if ":" not in api_key:
            raise ValueError("Ably API key must look like 'keyName:secret'")

        self._key_name, self._key_secret = api_key.split(":", 1)
        self._rest_host = rest_host.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport

    def _url(self, path: str) -> str:
        return f"{self._rest_host}{path}"

    async def _call(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        return await http.request(
            "ably",
            method,
            self._url(path),
            timeout=self._timeout,
            transport=self._transport,
            error_code="realtime_unavailable",
            auth=(self._key_name, self._key_secret),
            **kwargs,
        )

    async def publish(self, channel: str, name: str, data: Any) -> None:
        await self._call(
            "POST",
            f"/channels/{quote(channel, safe='')}/messages",
            json={"name": name, "data": data},
        )
        logger.info("realtime.published", extra={"channel": channel, "event": name})

    async def presence(self, channel: str) -> list[str]:
        response = await self._call("GET", f"/channels/{quote(channel, safe='')}/presence")
        members = response.json() or []
        return [member["clientId"] for member in members if member.get("clientId")]

    async def request_token(
        self,
        client_id: str,
        *,
        ttl_ms: int,
        capability: dict[str, list[str]],
    ) -> dict[str, Any]:
        token_params = {
            "keyName": self._key_name,
            "clientId": client_id,
            "ttl": ttl_ms,
            "capability": json.dumps(capability),
            "timestamp": int(time.time() * 1000),
        }
        response = await self._call(
            "POST",
            f"/keys/{quote(self._key_name, safe='')}/requestToken",
            json=token_params,
        )
        details = response.json()
        logger.info("realtime.token_issued", extra={"client_id": client_id, "expires": details.get("expires")})
        return details
