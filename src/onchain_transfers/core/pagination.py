"""Exhaustive retrieval of cursor-paginated listings."""

import logging
from collections import deque
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from onchain_transfers.core.errors import ProtocolViolationError
from onchain_transfers.core.models import Page

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Queue entry meaning "first page, no cursor"
FIRST_PAGE = ""


async def iter_pages(fetch_page: Callable[[str | None], Awaitable[Page[T]]]) -> AsyncIterator[Page[T]]:
    """
    Walk a cursor-paginated listing until the server reports no more pages.

    Parameters
    ----------
    fetch_page : Callable[[str | None], Awaitable[Page[T]]]
        Coroutine function taking a cursor, None for the first page

    Yields
    ------
    Page[T]
        Each page in server order

    Raises
    ------
    ProtocolViolationError
        If a page reports more data without a cursor to fetch it

    """
    queue: deque[str] = deque([FIRST_PAGE])

    while queue:
        cursor = queue.popleft()
        page = await fetch_page(cursor or None)
        logger.debug("Fetched page (cursor=%r): %d records, has_more=%s", cursor, len(page.data), page.has_more)

        if page.has_more:
            if not page.next_page:
                msg = f"Page (cursor={cursor!r}) has more results but no next page cursor"
                raise ProtocolViolationError(msg)
            queue.append(page.next_page)

        yield page


async def collect_pages(fetch_page: Callable[[str | None], Awaitable[Page[T]]]) -> list[T]:
    """
    Drain a cursor-paginated listing into one list.

    Nothing is returned if any page fails; the error propagates.

    Parameters
    ----------
    fetch_page : Callable[[str | None], Awaitable[Page[T]]]
        Coroutine function taking a cursor, None for the first page

    Returns
    -------
    list[T]
        Records of all pages, concatenated in page order

    """
    records: list[T] = []
    async for page in iter_pages(fetch_page):
        records.extend(page.data)
    return records
