"""
Cache of the API user record, per API key/secret pair.

Several operations need the cursor of the user that owns the API key (listing
campaigns, events, uploads) or its public PGP key (ping). The record never
changes for a given key, so it is fetched once and kept for the lifetime of
the process in an in-memory aiocache.
"""

import logging
import uuid
from typing import Any, Optional

from aiocache import Cache

from xcoobee_sdk.api import users as users_api
from xcoobee_sdk.auth import ApiAccessTokenCache
from xcoobee_sdk.auth import cache_key
from xcoobee_sdk.exceptions import DomainError
from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.graphql import require

logger = logging.getLogger("xcoobee_sdk.users_cache")


class UsersCache:
    """
    Args:
        token_cache (ApiAccessTokenCache): Supplies tokens to fetch the record.
        client (GraphQLClient): Executes the user query.
        cache (aiocache.BaseCache | None): Backing cache. Defaults to an
            in-memory cache with a namespace of its own; memory backends may
            share storage between instances.
    """

    def __init__(
        self,
        token_cache: ApiAccessTokenCache,
        client: GraphQLClient,
        cache: Optional[Any] = None,
    ):
        self.token_cache = token_cache
        self.client = client
        self._cache = (
            cache
            if cache is not None
            else Cache(Cache.MEMORY, namespace=f"xcoobee_users:{uuid.uuid4().hex}:")
        )

    async def get(
        self,
        api_url_root: str,
        api_key: str,
        api_secret: str,
        fresh: bool = False,
    ) -> dict:
        """
        Returns the user record (`cursor`, `xcoobee_id`, `pgp_public_key`).

        Raises:
            DomainError: If the API returns no user for the credentials.
        """
        api_access_token = await self.token_cache.get(api_url_root, api_key, api_secret)
        key = f"user:{cache_key(api_url_root, api_key, api_secret)}"

        if not fresh:
            cached = await self._cache.get(key)
            if cached is not None:
                logger.debug(f"Cache HIT for user of {api_key}")
                return cached

        logger.debug(f"Cache MISS for user of {api_key}, fetching from API")
        user = await users_api.get_user(self.client, api_url_root, api_access_token)
        if not user:
            raise DomainError("User not found.")
        require(user, "cursor")
        await self._cache.set(key, user)
        return user

    async def clear(self):
        await self._cache.clear(namespace=self._cache.namespace)
