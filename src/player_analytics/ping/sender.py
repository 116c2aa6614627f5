# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Default HTTP sender for ping payloads.

A sender is any awaitable callable ``(url, body) -> parsed response``. The
transport only relies on that shape, so hosts can plug in their own HTTP
stack. This one uses ``httpx.AsyncClient``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

logger = logging.getLogger(__name__)

PingSender = Callable[[str, dict[str, Any]], Awaitable[Any]]


class HttpxPingSender:
    """POST a JSON body and return the decoded JSON response.

    Args:
        client: Shared client. When omitted one is created lazily and closed
            by ``aclose()``.
        timeout: Request timeout in seconds. None disables it.

    Raises:
        httpx.HTTPError: On connection failures and non-2xx responses.
        ValueError: When the response body is not JSON.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
            )
        return self._client

    async def __call__(self, url: str, body: dict[str, Any]) -> Any:
        client = self._get_client()
        response = await client.post(
            url,
            json=body,
            headers={"Content-Type": "application/json"},
        )
        response.raise_for_status()
        logger.debug(f"Ping delivered to {url} (status {response.status_code})")
        return response.json()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = ["HttpxPingSender", "PingSender"]
