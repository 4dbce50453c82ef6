"""
Tests for the API access token cache.

Tokens are real JWTs minted with PyJWT; the cache reads their `exp` claim
without verifying the signature.
"""

import time
from unittest.mock import AsyncMock

import pytest

from tests.fakes import API_KEY
from tests.fakes import API_SECRET
from tests.fakes import API_URL_ROOT
from tests.fakes import make_token
from xcoobee_sdk.auth import ApiAccessTokenCache
from xcoobee_sdk.auth import cache_key
from xcoobee_sdk.auth import token_expiry
from xcoobee_sdk.exceptions import InvalidArgumentError
from xcoobee_sdk.exceptions import TokenError


@pytest.mark.asyncio
async def test_cached_token_is_reused():
    """
    GIVEN: a token valid for an hour was already fetched
    WHEN: we ask for a token again
    THEN: the cached token is returned without another fetch
    """
    token = make_token(expires_in=3600)
    fetch_token = AsyncMock(return_value=token)
    cache = ApiAccessTokenCache(fetch_token)

    first = await cache.get(API_URL_ROOT, API_KEY, API_SECRET)
    second = await cache.get(API_URL_ROOT, API_KEY, API_SECRET)

    assert first == second == token
    fetch_token.assert_awaited_once_with(API_URL_ROOT, API_KEY, API_SECRET)
    assert cache_key(API_URL_ROOT, API_KEY, API_SECRET) in cache


@pytest.mark.asyncio
async def test_token_within_tolerance_is_refetched():
    """
    GIVEN: a cached token expiring in 5 seconds and a 10 second tolerance
    WHEN: we ask for a token
    THEN: a fresh token is fetched and replaces the cached one
    """
    expiring = make_token(expires_in=5)
    fresh = make_token(expires_in=3600, jti="fresh")
    fetch_token = AsyncMock(side_effect=[expiring, fresh])
    cache = ApiAccessTokenCache(fetch_token, expiration_tolerance_ms=10000)

    assert await cache.get(API_URL_ROOT, API_KEY, API_SECRET) == expiring
    assert await cache.get(API_URL_ROOT, API_KEY, API_SECRET) == fresh
    assert fetch_token.await_count == 2
    assert len(cache) == 1


@pytest.mark.asyncio
async def test_expiry_is_measured_with_the_injected_clock():
    """
    This test verifies that the cache compares `exp` against its clock, so a
    token becomes stale once the clock passes exp minus the tolerance.
    """
    now = time.time()
    token = make_token(expires_in=60)
    fetch_token = AsyncMock(return_value=token)
    current = [now]
    cache = ApiAccessTokenCache(
        fetch_token, expiration_tolerance_ms=10000, clock=lambda: current[0]
    )

    await cache.get(API_URL_ROOT, API_KEY, API_SECRET)
    await cache.get(API_URL_ROOT, API_KEY, API_SECRET)
    assert fetch_token.await_count == 1

    current[0] = now + 55  # ~5s left
    await cache.get(API_URL_ROOT, API_KEY, API_SECRET)
    assert fetch_token.await_count == 2


@pytest.mark.asyncio
async def test_fresh_bypasses_cache():
    fetch_token = AsyncMock(side_effect=[make_token(), make_token(jti="second")])
    cache = ApiAccessTokenCache(fetch_token)

    first = await cache.get(API_URL_ROOT, API_KEY, API_SECRET)
    second = await cache.get(API_URL_ROOT, API_KEY, API_SECRET, fresh=True)

    assert first != second
    assert fetch_token.await_count == 2


@pytest.mark.asyncio
async def test_undecodable_cached_token_is_refetched():
    fetch_token = AsyncMock(side_effect=["not-a-jwt", make_token()])
    cache = ApiAccessTokenCache(fetch_token)

    assert await cache.get(API_URL_ROOT, API_KEY, API_SECRET) == "not-a-jwt"
    second = await cache.get(API_URL_ROOT, API_KEY, API_SECRET)

    assert second != "not-a-jwt"
    assert fetch_token.await_count == 2


@pytest.mark.asyncio
async def test_tokens_are_cached_per_credentials():
    fetch_token = AsyncMock(side_effect=[make_token(jti="a"), make_token(jti="b")])
    cache = ApiAccessTokenCache(fetch_token)

    await cache.get(API_URL_ROOT, API_KEY, API_SECRET)
    await cache.get(API_URL_ROOT, "other-key", API_SECRET)

    assert len(cache) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "root, key, secret",
    [
        ("", API_KEY, API_SECRET),
        (API_URL_ROOT, None, API_SECRET),
        (API_URL_ROOT, API_KEY, ""),
        (API_URL_ROOT, 42, API_SECRET),
    ],
)
async def test_missing_or_malformed_identity_raises(root, key, secret):
    fetch_token = AsyncMock()
    cache = ApiAccessTokenCache(fetch_token)

    with pytest.raises(InvalidArgumentError):
        await cache.get(root, key, secret)
    fetch_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_fetch_failure_is_propagated_and_nothing_cached():
    fetch_token = AsyncMock(side_effect=TokenError("Unable to get an API access token."))
    cache = ApiAccessTokenCache(fetch_token)

    with pytest.raises(TokenError):
        await cache.get(API_URL_ROOT, API_KEY, API_SECRET)
    assert len(cache) == 0


def test_token_expiry_reads_exp_claim():
    token = make_token(expires_in=100)
    assert token_expiry(token) == pytest.approx(time.time() + 100, abs=5)


def test_token_expiry_without_exp_is_none():
    import jwt

    from tests.fakes import SIGNING_KEY

    token = jwt.encode({"sub": "no-exp"}, SIGNING_KEY, algorithm="HS256")
    assert token_expiry(token) is None


@pytest.mark.asyncio
async def test_clear_drops_cached_tokens():
    fetch_token = AsyncMock(side_effect=[make_token(jti="a"), make_token(jti="b")])
    cache = ApiAccessTokenCache(fetch_token)
    await cache.get(API_URL_ROOT, API_KEY, API_SECRET)

    cache.clear()
    await cache.get(API_URL_ROOT, API_KEY, API_SECRET)

    assert fetch_token.await_count == 2
