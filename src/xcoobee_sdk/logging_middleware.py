"""
Logging middleware for XcooBee SDK.

This module provides LoggingMiddleware, a built-in middleware that logs
all HTTP requests and responses with timing information.

Access tokens and API secrets never reach the log: the `Authorization`
header and the `secret` field of token requests are masked.
"""

import logging
import time

from xcoobee_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("xcoobee_sdk.middleware.logging")

REDACTED = "***"
_SENSITIVE_HEADERS = {"authorization"}
_SENSITIVE_FIELDS = {"secret", "X-Amz-Signature", "Policy"}


def _redact(values):
    if not isinstance(values, dict):
        return values
    return {
        key: REDACTED
        if key.lower() in _SENSITIVE_HEADERS or key in _SENSITIVE_FIELDS
        else value
        for key, value in values.items()
    }


class LoggingMiddleware:
    """
    Middleware for logging HTTP requests and responses.
    Uses standard Python logging.
    """

    def __init__(self, level: int = logging.INFO):
        self._start_time = None
        self.level = level

    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict,
        params,
        json,
        data,
    ):
        self._start_time = time.monotonic()
        logger.log(
            self.level,
            f"Request: {method} {url} | headers={_redact(headers)} | params={params} | json={_redact(json)} | data={_redact(data)}",
        )

    async def on_response(self, response: UnifiedResponse):
        elapsed = (time.monotonic() - self._start_time) if self._start_time else None
        logger.log(
            self.level,
            f"Response: {response.status_code}"
            + (f" | elapsed={elapsed:.3f}s" if elapsed is not None else ""),
        )
