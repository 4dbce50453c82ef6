"""
Async-first XcooBee SDK entry point.

This module provides the XcooBee class that wires the SDK together:

- One HTTP transport (httpx, aiohttp or requests) behind a GraphQL client
- Pluggable middleware system for request/response processing
- One API access token cache and one user cache, shared by all services
- The Bees, Consents, System and Users services

Example usage:
    from xcoobee_sdk import Config, ErrorResponse, XcooBee

    config = Config(api_key="...", api_secret="...", campaign_id="...")
    async with XcooBee(config) as sdk:
        response = await sdk.consents.request_consent("~SomeUser", "ref1")
        if isinstance(response, ErrorResponse):
            print(response.error.message)
"""

import logging
from functools import partial
from typing import Optional

from xcoobee_sdk.api.tokens import get_api_access_token
from xcoobee_sdk.auth import ApiAccessTokenCache
from xcoobee_sdk.config import Config
from xcoobee_sdk.config import XcooBeeSettings
from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.middleware import Middleware
from xcoobee_sdk.services import Bees
from xcoobee_sdk.services import Consents
from xcoobee_sdk.services import System
from xcoobee_sdk.services import Users
from xcoobee_sdk.transport import get_transport
from xcoobee_sdk.transport.base import BaseTransport
from xcoobee_sdk.users_cache import UsersCache

logger = logging.getLogger("xcoobee_sdk.client")


class XcooBee:
    """
    The SDK: a default configuration plus the services that use it.

    Args:
        config (Config | None): The default configuration used when a call does
            not pass its own. Defaults to the one built from `settings`; when
            that has no API key either, every call raises IllegalStateError
            until `config` is assigned.
        settings (XcooBeeSettings | None): SDK settings (timeout, transport,
            token expiration tolerance, error code). Loaded from the
            environment when omitted.
        transport (BaseTransport | None): HTTP transport instance. Defaults to
            `get_transport(settings.transport)`.
        middlewares (list[Middleware] | None): Hooks run around every HTTP
            exchange.
        token_cache (ApiAccessTokenCache | None): Share a token cache between
            SDK instances. A new one is created by default.

    Example:
        from xcoobee_sdk.logging_middleware import LoggingMiddleware

        sdk = XcooBee(config, middlewares=[LoggingMiddleware()])
        try:
            response = await sdk.system.ping()
        finally:
            await sdk.aclose()
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        settings: Optional[XcooBeeSettings] = None,
        transport: Optional[BaseTransport] = None,
        middlewares: list[Middleware] | None = None,
        token_cache: Optional[ApiAccessTokenCache] = None,
    ):
        self.settings = settings or XcooBeeSettings()
        if transport is None:
            transport = get_transport(self.settings.transport, timeout=self.settings.timeout)
        self.client = GraphQLClient(transport, middlewares=middlewares)

        self.token_cache = token_cache or ApiAccessTokenCache(
            partial(get_api_access_token, self.client),
            expiration_tolerance_ms=self.settings.token_expiration_tolerance_ms,
        )
        self.users_cache = UsersCache(self.token_cache, self.client)

        services = dict(
            config=None,
            token_cache=self.token_cache,
            client=self.client,
            users_cache=self.users_cache,
            error_code=self.settings.error_response_code,
        )
        self._bees = Bees(**services)
        self._consents = Consents(**services)
        self._system = System(**services)
        self._users = Users(**services)

        self._config: Optional[Config] = None
        self.config = config if config is not None else self.settings.to_config()

    @property
    def config(self) -> Optional[Config]:
        return self._config

    @config.setter
    def config(self, config: Optional[Config]):
        if config is not None and config.api_url_root is None:
            config = config.model_copy(update={"api_url_root": self.settings.api_url_root})
        self._config = config
        for service in (self._bees, self._consents, self._system, self._users):
            service.config = config

    @property
    def bees(self) -> Bees:
        return self._bees

    @property
    def consents(self) -> Consents:
        return self._consents

    @property
    def system(self) -> System:
        return self._system

    @property
    def users(self) -> Users:
        return self._users

    async def aclose(self):
        """
        Gracefully close the transport and its connections.
        """
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
