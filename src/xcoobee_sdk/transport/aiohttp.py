"""
Aiohttp transport implementation for XcooBee SDK.

This module provides AiohttpTransport, an alternative async HTTP client for the SDK.
The response body is read before the connection is released, so the returned
UnifiedResponse stays usable after the request context closes.
"""

from typing import Any

import aiohttp

from .base import USER_AGENT
from .base import BaseTransport
from .base import UnifiedResponse


class AiohttpTransport(BaseTransport):
    """
    Async transport implementation using aiohttp.ClientSession.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

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
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers={"User-Agent": USER_AGENT},
            )

        if files:
            form = aiohttp.FormData()
            for name, value in (data or {}).items():
                form.add_field(name, value)
            for name, (filename, fileobj) in files.items():
                form.add_field(name, fileobj, filename=filename)
            data = form

        timeout_obj = aiohttp.ClientTimeout(total=timeout or self._timeout)
        async with self._session.request(
            method=method,
            url=url,
            headers=headers,
            params=params,
            json=json,
            data=data,
            timeout=timeout_obj,
        ) as response:
            await response.read()
            text = await response.text()
            return UnifiedResponse(response, text=text)

    async def close(self):
        if self._session:
            await self._session.close()
