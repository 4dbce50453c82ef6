import logging
from typing import Any, Awaitable, Callable, Optional

from xcoobee_sdk.auth import ApiAccessTokenCache
from xcoobee_sdk.config import DEFAULT_ERROR_CODE
from xcoobee_sdk.config import Config
from xcoobee_sdk.exceptions import DomainError
from xcoobee_sdk.exceptions import IllegalStateError
from xcoobee_sdk.exceptions import InvalidArgumentError
from xcoobee_sdk.exceptions import XcooBeeError
from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.paging import FetchPage
from xcoobee_sdk.paging import start_paging
from xcoobee_sdk.resolver import resolve_campaign_id
from xcoobee_sdk.resolver import resolve_config
from xcoobee_sdk.responses import ErrorResponse
from xcoobee_sdk.responses import Response
from xcoobee_sdk.responses import SuccessResponse

logger = logging.getLogger("xcoobee_sdk.services")


class Service:
    """
    Base class of the SDK services.

    Every public service method returns a response envelope. Failures of token
    acquisition or of remote calls come back as `ErrorResponse(error_code, cause)`;
    argument and state validation errors are raised.

    Args:
        config (Config | None): Default config, used when a call does not
            override it.
        token_cache (ApiAccessTokenCache): Shared API access token cache.
        client (GraphQLClient): Executes remote queries.
        users_cache (UsersCache): Shared cache of API user records.
        error_code (int): Code of returned ErrorResponses (400 by default).
    """

    def __init__(
        self,
        config: Optional[Config],
        token_cache: ApiAccessTokenCache,
        client: GraphQLClient,
        users_cache,
        error_code: int = DEFAULT_ERROR_CODE,
    ):
        self.config = config
        self.token_cache = token_cache
        self.client = client
        self.users_cache = users_cache
        self.error_code = error_code

    def _assert_valid_state(self):
        if self.config is None:
            raise IllegalStateError("Illegal State: Default config has not been set yet.")

    def _resolve(self, config: Optional[Config]) -> Config:
        self._assert_valid_state()
        return resolve_config(config, self.config)

    def _resolve_campaign_id(
        self, campaign_id: Optional[str], config: Optional[Config]
    ) -> Optional[str]:
        return resolve_campaign_id(campaign_id, config, self.config)

    @staticmethod
    def _require_campaign_id(campaign_id: Optional[str]) -> str:
        if not campaign_id:
            raise DomainError("Campaign ID could not be resolved.")
        return campaign_id

    async def _token(self, config: Config) -> str:
        return await self.token_cache.get(
            config.api_url_root, config.api_key, config.api_secret
        )

    async def _user(self, config: Config) -> dict:
        return await self.users_cache.get(
            config.api_url_root, config.api_key, config.api_secret
        )

    async def _call(self, operation: Callable[[], Awaitable[Any]]) -> Response:
        """
        Runs `operation` and wraps its result in a SuccessResponse, or its
        failure in an ErrorResponse.
        """
        try:
            result = await operation()
        except (InvalidArgumentError, IllegalStateError):
            raise
        except XcooBeeError as exc:
            logger.warning(f"{type(self).__name__} call failed: {exc}")
            return ErrorResponse(self.error_code, exc)
        if isinstance(result, Response):
            return result
        return SuccessResponse(result)

    async def _page(self, fetch_page: FetchPage, config: Config, params: dict):
        return await start_paging(fetch_page, config, params, error_code=self.error_code)
