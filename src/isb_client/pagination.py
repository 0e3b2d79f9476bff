"""Draining of paginated listings."""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from isb_client.models import PageIdentifiable

T = TypeVar("T")
R = TypeVar("R", bound=PageIdentifiable)


async def paginate_all(
    request: R,
    fetch_page: Callable[[R], Awaitable[tuple[list[T], str | None]]],
) -> list[T]:
    """
    Fetch every page of a listing, one request at a time.

    ``fetch_page`` returns a page's items and the next page identifier.
    The identifier is written back into ``request`` before the next call;
    an empty identifier ends the listing. Any error aborts the drain and
    propagates, discarding the pages collected so far.

    There is no page limit: a server that never returns an empty
    identifier keeps this loop running.
    """
    all_items: list[T] = []
    while True:
        items, next_page = await fetch_page(request)
        all_items.extend(items)
        if not next_page:
            return all_items
        request.set_page_identifier(next_page)
