"""
Tests for cursor-driven paging.
"""

from unittest.mock import AsyncMock

import pytest

from tests.fakes import page
from xcoobee_sdk.config import Config
from xcoobee_sdk.exceptions import InvalidArgumentError
from xcoobee_sdk.exceptions import TransportError
from xcoobee_sdk.paging import PagingResponse
from xcoobee_sdk.paging import start_paging
from xcoobee_sdk.responses import ErrorResponse

CONFIG = Config(api_key="k", api_secret="s", api_url_root="https://api.test")


def three_pages():
    pages = {
        None: page([1, 2], end_cursor="c1", has_next_page=True),
        "c1": page([3, 4], end_cursor="c2", has_next_page=True),
        "c2": page([5], end_cursor="c3", has_next_page=False),
    }
    return AsyncMock(side_effect=lambda config, params: pages[params["after"]])


@pytest.mark.asyncio
async def test_pages_are_fetched_in_cursor_order():
    """
    GIVEN: a list spread over three pages
    WHEN: we follow get_next_page from the first page
    THEN: each page is fetched once with the previous end cursor, then None
    """
    fetch_page = three_pages()

    first = await start_paging(fetch_page, CONFIG, {"limit": 2})
    second = await first.get_next_page()
    third = await second.get_next_page()

    assert isinstance(first, PagingResponse)
    assert [p.result["data"] for p in (first, second, third)] == [[1, 2], [3, 4], [5]]
    assert await third.get_next_page() is None
    assert fetch_page.await_count == 3
    assert [c.args[1] for c in fetch_page.await_args_list] == [
        {"after": None, "limit": 2},
        {"after": "c1", "limit": 2},
        {"after": "c2", "limit": 2},
    ]


@pytest.mark.asyncio
async def test_single_page_makes_no_further_request():
    fetch_page = AsyncMock(return_value=page(["only"], end_cursor="x", has_next_page=False))

    first = await start_paging(fetch_page, CONFIG, {})

    assert first.has_next_page() is False
    assert await first.get_next_page() is None
    fetch_page.assert_awaited_once()


@pytest.mark.asyncio
async def test_missing_end_cursor_means_no_next_page():
    fetch_page = AsyncMock(return_value=page([1], end_cursor=None, has_next_page=True))

    first = await start_paging(fetch_page, CONFIG, {})

    assert await first.get_next_page() is None


@pytest.mark.asyncio
async def test_earlier_page_can_fetch_its_successor_again():
    fetch_page = three_pages()
    first = await start_paging(fetch_page, CONFIG, {"limit": 2})
    await (await first.get_next_page()).get_next_page()

    again = await first.get_next_page()

    assert again.result["data"] == [3, 4]
    assert again.params == {"after": "c1", "limit": 2}


@pytest.mark.asyncio
async def test_iter_pages_walks_every_page():
    first = await start_paging(three_pages(), CONFIG, {"limit": 2})

    collected = [item async for p in first.iter_pages() for item in p.result["data"]]

    assert collected == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_first_page_failure_returns_error_response():
    fetch_page = AsyncMock(side_effect=TransportError("boom"))

    response = await start_paging(fetch_page, CONFIG, {}, error_code=400)

    assert isinstance(response, ErrorResponse)
    assert response.code == 400
    assert response.error.message == "boom"


@pytest.mark.asyncio
async def test_next_page_failure_is_raised():
    fetch_page = AsyncMock(
        side_effect=[page([1], end_cursor="c1", has_next_page=True), TransportError("later")]
    )
    first = await start_paging(fetch_page, CONFIG, {})

    with pytest.raises(TransportError):
        await first.get_next_page()


@pytest.mark.asyncio
async def test_argument_errors_are_not_wrapped():
    fetch_page = AsyncMock(side_effect=InvalidArgumentError("bad"))

    with pytest.raises(InvalidArgumentError):
        await start_paging(fetch_page, CONFIG, {})
