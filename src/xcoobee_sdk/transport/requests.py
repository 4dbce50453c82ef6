"""
Requests transport implementation for XcooBee SDK.

Wraps a blocking `requests.Session` for callers that already depend on
requests. Each exchange runs in a worker thread so the event loop is never
blocked.
"""

import asyncio
from typing import Any

import requests

from .base import USER_AGENT
from .base import BaseTransport
from .base import UnifiedResponse


class RequestsTransport(BaseTransport):
    """
    Sync transport implementation using requests.Session, behind the async
    transport interface.

    Args:
        timeout (float): Default timeout of a request, in seconds.
        session (requests.Session | None): Use an existing session.
    """

    def __init__(self, timeout: float = 30.0, session: requests.Session | None = None):
        self._timeout = timeout
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
        self._session = session

    def _send(self, method, url, headers, params, json, data, files, timeout):
        return self._session.request(
            method,
            url,
            headers=headers,
            params=params,
            json=None if files else json,
            data=data,
            files=files,
            timeout=timeout or self._timeout,
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
        response = await asyncio.to_thread(
            self._send, method, url, headers, params, json, data, files, timeout
        )
        return UnifiedResponse(response)

    async def close(self):
        await asyncio.to_thread(self._session.close)
