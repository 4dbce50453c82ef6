"""
This module provides the ApiAccessTokenCache class responsible for:
- handing out API access tokens per API key/secret pair
- reusing a cached token while it is not about to expire
- fetching a fresh token when the cached one is missing, expiring or unreadable.

Expiry is read from the token itself: access tokens are JWTs carrying an `exp`
claim (epoch seconds). The signature is not verified here, the API does that.
"""

import logging
import time
from typing import Awaitable
from typing import Callable
from typing import Optional

import jwt

from xcoobee_sdk.config import EXPIRATION_TOLERANCE_IN_MS_DEFAULT
from xcoobee_sdk.exceptions import InvalidArgumentError

logger = logging.getLogger("xcoobee_sdk.auth")

TokenFetcher = Callable[[str, str, str], Awaitable[str]]


def cache_key(api_url_root: str, api_key: str, api_secret: str) -> str:
    # Fields containing ':' may collide; keys are compared verbatim.
    return f"{api_url_root}:{api_key}:{api_secret}"


def token_expiry(api_access_token: str) -> Optional[float]:
    """
    Returns the `exp` claim of the token in epoch seconds.

    Returns:
        float | None: None when the token has no numeric `exp` claim.

    Raises:
        jwt.PyJWTError: If the token cannot be decoded.
    """
    payload = jwt.decode(
        api_access_token,
        options={"verify_signature": False, "verify_exp": False},
    )
    exp = payload.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    return float(exp)


class ApiAccessTokenCache:
    """
    A cache for API access tokens, keyed by API URL root, key and secret.

    Entries are created on the first successful fetch, overwritten on refresh
    and never evicted. Concurrent lookups for the same credentials may each
    trigger a fetch; the last one stored wins.

    Attributes:
        expiration_tolerance_ms (int): A cached token is only reused while it
            has more than this many milliseconds left before it expires.

    Example:
        cache = ApiAccessTokenCache(fetch_token)
        token = await cache.get("https://api.xcoobee.net", key, secret)
    """

    def __init__(
        self,
        fetch_token: TokenFetcher,
        expiration_tolerance_ms: int = EXPIRATION_TOLERANCE_IN_MS_DEFAULT,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initializes the cache.

        Args:
            fetch_token: Async callable `(api_url_root, api_key, api_secret)`
                returning a fresh token from the token-issuing endpoint.
            expiration_tolerance_ms (int, optional): Defaults to 10000.
            clock (callable, optional): Returns the current time in epoch seconds.
        """
        self._fetch_token = fetch_token
        self.expiration_tolerance_ms = expiration_tolerance_ms
        self._clock = clock
        self._tokens: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, key: str) -> bool:
        return key in self._tokens

    async def get(
        self,
        api_url_root: str,
        api_key: str,
        api_secret: str,
        fresh: bool = False,
    ) -> str:
        """
        Returns an API access token for the specified API key/secret pair.

        If a cached token is expired or about to expire, then a fresh token is
        automatically fetched. Fetch failures are propagated unmodified.

        Args:
            api_url_root (str): The root of the API URL.
            api_key (str): Your API key.
            api_secret (str): Your API secret.
            fresh (bool, optional): Force a fresh token instead of the cached one.

        Raises:
            InvalidArgumentError: If an identity field is missing or not a string.
        """
        for name, value in (
            ("api_url_root", api_url_root),
            ("api_key", api_key),
            ("api_secret", api_secret),
        ):
            if not value:
                raise InvalidArgumentError(f"{name} is required.")
            if not isinstance(value, str):
                raise InvalidArgumentError(f"{name} must be a string.")

        key = cache_key(api_url_root, api_key, api_secret)

        if not fresh and key in self._tokens:
            api_access_token = self._tokens[key]
            if self._ms_until_expiry(api_access_token) > self.expiration_tolerance_ms:
                logger.debug("Using cached API access token")
                return api_access_token
            logger.debug("Cached API access token expired or about to expire")

        logger.debug("Fetching API access token...")
        api_access_token = await self._fetch_token(api_url_root, api_key, api_secret)
        self._tokens[key] = api_access_token
        return api_access_token

    def clear(self):
        """Drops every cached token."""
        self._tokens.clear()

    def _ms_until_expiry(self, api_access_token: str) -> float:
        now_ms = self._clock() * 1000
        try:
            exp = token_expiry(api_access_token)
        except jwt.PyJWTError as e:
            logger.debug(f"Unable to decode cached token: {e}")
            return 0
        if exp is None:
            return 0
        return exp * 1000 - now_ms
