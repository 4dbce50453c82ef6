import asyncio
from typing import Any

USER_AGENT = "xcoobee-sdk-python"


class UnifiedResponse:
    """
    Unified response wrapper that handles differences between HTTP clients.
    Provides consistent async interface regardless of the underlying transport.

    Transports whose response text is only available asynchronously (aiohttp)
    read the body up front and pass it in as `text`.
    """

    def __init__(self, response, text: str | None = None):
        self._response = response
        # aiohttp exposes the status code as `status`
        self.status_code = getattr(response, "status_code", None)
        if self.status_code is None:
            self.status_code = response.status
        if text is not None:
            self.text = text
        else:
            self.text = (
                response.text if hasattr(response, "text") else str(response.content)
            )
        self.headers = response.headers if hasattr(response, "headers") else {}

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    async def json(self):
        """
        Unified JSON parsing that works with both sync and async HTTP clients.
        """
        if hasattr(self._response, "json") and callable(self._response.json):
            if asyncio.iscoroutinefunction(self._response.json):
                return await self._response.json()
            else:
                return self._response.json()
        raise NotImplementedError("Response doesn't support .json()")


class BaseTransport:
    """
    Abstract transport layer interface for XcooBee SDK.
    All HTTP client backends should inherit from this class.

    Supported transports:
    - httpx: Native async HTTP client
    - aiohttp: Native async HTTP client
    - requests: Sync HTTP client wrapped in async interface

    `files` maps a form field name to a `(filename, file object)` pair and turns
    the request into a multipart form submission together with `data`.
    """

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
        """
        Async request method for all transports.
        Override this method in transport implementations.
        """
        raise NotImplementedError(
            "Transport implementations must override this method."
        )

    async def close(self):
        """Releases connections held by the transport."""
