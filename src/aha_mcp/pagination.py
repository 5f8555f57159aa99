"""Aggregate paginated Aha! REST collections.

REST list endpoints answer with one page of items plus a pagination block:

    {"features": [...], "pagination": {"total_records": 250, "total_pages": 3, "current_page": 1}}

paginate() walks pages 1..total_pages in order. total_pages is re-read from
every response, and a missing or zero value counts as a single page.
"""
import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, Field

logger = logging.getLogger("aha-mcp.pagination")


class Page(BaseModel):
    """One fetched page of a collection."""

    items: list[Any] = Field(default_factory=list)
    total_pages: int = 1

    @classmethod
    def from_payload(cls, payload: dict, collection_key: str) -> "Page":
        """Read a REST list response, e.g. Page.from_payload(data, "releases")."""
        items = payload.get(collection_key) or []
        pagination = payload.get("pagination") or {}
        return cls(items=items, total_pages=pagination.get("total_pages") or 1)


FetchPage = Callable[[int], Awaitable[Page]]


async def paginate(fetch_page: FetchPage) -> list[Any]:
    """Fetch every page and return the concatenated items.

    Pages are fetched one at a time because each response decides whether
    another request is needed. Any exception from fetch_page propagates and
    the items gathered so far are dropped.
    """
    items: list[Any] = []
    page_number = 1
    total_pages = 1

    while page_number <= total_pages:
        page = await fetch_page(page_number)
        items.extend(page.items)
        total_pages = page.total_pages or 1
        logger.debug(f"Fetched page {page_number} of {total_pages} ({len(page.items)} items)")
        page_number += 1

    return items
