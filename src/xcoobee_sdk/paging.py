"""
Cursor-driven paging over list operations.

A list operation supplies a `fetch_page(config, params)` coroutine that fetches
exactly one page. `start_paging` fetches the first page and wraps it in a
`PagingResponse`, which knows how to fetch the page after it:

    response = await sdk.bees.list_bees("social", limit=10)
    async for page in response.iter_pages():
        for bee in page.result["data"]:
            ...

Pages hold no shared iteration state. Each `PagingResponse` carries the params
it was fetched with, so any previously seen page can fetch its successor again.
"""

import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from xcoobee_sdk.config import DEFAULT_ERROR_CODE
from xcoobee_sdk.config import Config
from xcoobee_sdk.exceptions import IllegalStateError
from xcoobee_sdk.exceptions import InvalidArgumentError
from xcoobee_sdk.exceptions import XcooBeeError
from xcoobee_sdk.responses import ErrorResponse
from xcoobee_sdk.responses import SuccessResponse

logger = logging.getLogger("xcoobee_sdk.paging")

PageResult = dict[str, Any]
FetchPage = Callable[[Config, dict[str, Any]], Awaitable[PageResult]]


class PagingResponse(SuccessResponse):
    """
    A successful response holding one page of a list.

    `result` is `{"data": [...], "page_info": {"end_cursor", "has_next_page"}}`.
    """

    def __init__(
        self,
        result: PageResult,
        fetch_page: FetchPage,
        config: Config,
        params: dict[str, Any],
    ):
        super().__init__(result)
        self._fetch_page = fetch_page
        self._config = config
        self._params = params

    @property
    def page_info(self) -> dict[str, Any]:
        return (self.result or {}).get("page_info") or {}

    @property
    def params(self) -> dict[str, Any]:
        return dict(self._params)

    def has_next_page(self) -> bool:
        page_info = self.page_info
        return bool(page_info.get("has_next_page")) and (
            page_info.get("end_cursor") is not None
        )

    async def get_next_page(self) -> Optional["PagingResponse"]:
        """
        Fetches the page after this one.

        Returns:
            PagingResponse | None: None when there is no further page; nothing is
                fetched in that case.

        Raises:
            XcooBeeError: Fetch failures are propagated, not wrapped.
        """
        if not self.has_next_page():
            return None
        params = {**self._params, "after": self.page_info["end_cursor"]}
        logger.debug(f"Fetching page after cursor {params['after']!r}")
        page = await self._fetch_page(self._config, params)
        return PagingResponse(page, self._fetch_page, self._config, params)

    async def iter_pages(self) -> AsyncIterator["PagingResponse"]:
        """Yields this page and every following page, in cursor order."""
        page: Optional[PagingResponse] = self
        while page is not None:
            yield page
            page = await page.get_next_page()


async def start_paging(
    fetch_page: FetchPage,
    config: Config,
    params: dict[str, Any],
    error_code: int = DEFAULT_ERROR_CODE,
) -> "PagingResponse | ErrorResponse":
    """
    Fetches the first page of a list.

    Args:
        fetch_page: Coroutine fetching one page given `(config, params)`.
        config (Config): Effective config, passed through to `fetch_page`.
        params (dict): Operation params. `after` defaults to None; `limit` is
            passed through unchanged on every page request.
        error_code (int): Code of the ErrorResponse returned on failure.

    Returns:
        PagingResponse | ErrorResponse
    """
    params = {"after": None, **params}
    try:
        page = await fetch_page(config, params)
    except (InvalidArgumentError, IllegalStateError):
        raise
    except XcooBeeError as exc:
        logger.warning(f"Failed to fetch first page: {exc}")
        return ErrorResponse(error_code, exc)
    return PagingResponse(page, fetch_page, config, params)
