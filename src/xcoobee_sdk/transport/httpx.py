"""
Httpx transport implementation for XcooBee SDK (the default transport).

One `httpx.AsyncClient` is shared by every call of an SDK instance: token
requests, GraphQL queries and outbox uploads reuse its connection pool.
"""

from typing import Any

import httpx

from .base import USER_AGENT
from .base import BaseTransport
from .base import UnifiedResponse


class HttpxTransport(BaseTransport):
    """
    Async transport implementation using httpx.AsyncClient.

    Args:
        timeout (float): Default timeout of a request, in seconds.
        client (httpx.AsyncClient | None): Use an existing client (custom
            proxies, `httpx.MockTransport` in tests). It is closed with the
            transport.
    """

    def __init__(self, timeout: float = 30.0, client: httpx.AsyncClient | None = None):
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(
            timeout=timeout, headers={"User-Agent": USER_AGENT}
        )

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: Any = None,
        files: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        # multipart uploads carry the form fields in `data`, never a JSON body
        body = {"data": data, "files": files} if files else {"json": json, "data": data}
        response = await self._client.request(
            method,
            url,
            headers=headers,
            params=params,
            timeout=timeout or self._timeout,
            **body,
        )
        return UnifiedResponse(response)

    async def close(self):
        await self._client.aclose()
