"""
GraphQL executor for the XcooBee API.

`GraphQLClient` is the single gateway to the network used by the SDK. It owns
the HTTP transport and the middleware chain, and exposes two operations:

- `send`: one raw HTTP exchange (token endpoint, file uploads)
- `request`: one GraphQL query or mutation against `{api_url_root}/graphql`

Transport failures, non-2xx statuses, unparsable bodies and GraphQL `errors`
arrays are all raised as `TransportError`.
"""

import logging
from typing import Any

from xcoobee_sdk.exceptions import DomainError
from xcoobee_sdk.exceptions import TransportError
from xcoobee_sdk.middleware import Middleware
from xcoobee_sdk.transport.base import BaseTransport
from xcoobee_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("xcoobee_sdk.graphql")

GRAPHQL_PATH = "/graphql"


def graphql_url(api_url_root: str) -> str:
    return api_url_root.rstrip("/") + GRAPHQL_PATH


def require(data: Any, *path: str) -> Any:
    """
    Reads a nested member of a GraphQL result, e.g.
    `require(data, "send_consent_request", "ref_id")`.

    Raises:
        TransportError: If a member along the path is missing.
        DomainError: If a member along the path is null.
    """
    value = data
    for depth, name in enumerate(path, start=1):
        field = ".".join(path[:depth])
        if not isinstance(value, dict) or name not in value:
            raise TransportError(
                f"Malformed GraphQL response: missing {field}.", details=data
            )
        value = value[name]
        if value is None:
            raise DomainError(f"No {field} in the response.", details=data)
    return value


class GraphQLClient:
    """
    Sends GraphQL queries and raw HTTP requests through a transport.

    Args:
        transport (BaseTransport): HTTP backend (see `xcoobee_sdk.transport`).
        middlewares (list[Middleware] | None): Hooks run around every exchange.
    """

    def __init__(
        self,
        transport: BaseTransport,
        middlewares: list[Middleware] | None = None,
    ):
        self.transport = transport
        self.middlewares = middlewares or []

    async def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        json: Any = None,
        data: Any = None,
        files: dict[str, Any] | None = None,
    ) -> UnifiedResponse:
        """
        Performs one HTTP exchange, running the middleware chain around it.

        Raises:
            TransportError: If the transport itself fails (connection error,
                timeout, ...). HTTP error statuses are returned, not raised.
        """
        headers = dict(headers or {})

        # === MIDDLEWARE: before request ===
        for mw in self.middlewares:
            await mw.on_request(
                method=method,
                url=url,
                headers=headers,
                params=None,
                json=json,
                data=data,
            )

        try:
            response = await self.transport.request(
                method=method,
                url=url,
                headers=headers,
                json=json,
                data=data,
                files=files,
            )
        except TransportError:
            raise
        except Exception as exc:
            logger.error(f"{method} {url} failed: {exc}")
            raise TransportError(f"Request to {url} failed: {exc}", details=exc) from exc

        # === MIDDLEWARE: after response ===
        for mw in self.middlewares:
            await mw.on_response(response)

        return response

    async def request(
        self,
        api_url_root: str,
        api_access_token: str,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Executes a GraphQL query or mutation.

        Args:
            api_url_root (str): The root of the API URL.
            api_access_token (str): A valid API access token.
            query (str): The GraphQL document.
            variables (dict | None): Variables for the document.

        Returns:
            dict: The `data` member of the GraphQL response.

        Raises:
            TransportError: On transport failure, non-2xx status, a body that is
                not JSON, or a GraphQL `errors` array (first error's message).
        """
        response = await self.send(
            "POST",
            graphql_url(api_url_root),
            headers={"Authorization": api_access_token},
            json={"query": query, "variables": variables or {}},
        )

        try:
            payload = await response.json()
        except Exception as exc:
            raise TransportError(
                f"Malformed GraphQL response: {response.status_code} {response.text}",
                details=response.text,
                status_code=response.status_code,
            ) from exc

        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            message = errors[0].get("message", "GraphQL error")
            logger.debug(f"GraphQL errors: {errors}")
            raise TransportError(
                message, details=errors, status_code=response.status_code
            )

        if not response.is_success:
            raise TransportError(
                f"Unexpected status: {response.status_code}",
                details=response.text,
                status_code=response.status_code,
            )

        if not isinstance(payload, dict) or "data" not in payload:
            raise TransportError(
                "Malformed GraphQL response: missing data.",
                details=payload,
                status_code=response.status_code,
            )
        return payload["data"] or {}

    async def aclose(self):
        await self.transport.close()
