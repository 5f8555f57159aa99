"""Tests for paginated collection aggregation."""
import pytest

from aha_mcp.pagination import Page, paginate


def scripted_pages(pages: list[Page]):
    """Return a fetch_page function serving `pages` in order, and the list of requested page numbers."""
    requested: list[int] = []

    async def fetch_page(page_number: int) -> Page:
        requested.append(page_number)
        return pages[page_number - 1]

    return fetch_page, requested


class TestPaginate:
    """Test the page loop."""

    async def test_three_pages(self):
        pages = [Page(items=[i], total_pages=3) for i in range(3)]
        fetch_page, requested = scripted_pages(pages)

        items = await paginate(fetch_page)

        assert items == [0, 1, 2]
        assert requested == [1, 2, 3]

    async def test_single_page(self):
        fetch_page, requested = scripted_pages([Page(items=["a", "b", "c"], total_pages=1)])
        assert await paginate(fetch_page) == ["a", "b", "c"]
        assert requested == [1]

    async def test_zero_total_pages_fetches_once(self):
        fetch_page, requested = scripted_pages([Page(items=["a"], total_pages=0)])
        assert await paginate(fetch_page) == ["a"]
        assert requested == [1]

    async def test_total_pages_reread_each_response(self):
        """A later page may report a smaller total and stop the loop early."""
        pages = [Page(items=[1], total_pages=5), Page(items=[2], total_pages=2)]
        fetch_page, requested = scripted_pages(pages)
        assert await paginate(fetch_page) == [1, 2]
        assert requested == [1, 2]

    async def test_failure_discards_partial_results(self):
        calls = []

        async def fetch_page(page_number: int) -> Page:
            calls.append(page_number)
            if page_number == 2:
                raise RuntimeError("page 2 failed")
            return Page(items=[page_number], total_pages=3)

        with pytest.raises(RuntimeError, match="page 2 failed"):
            await paginate(fetch_page)
        assert calls == [1, 2]


class TestPageFromPayload:
    """Test reading REST list envelopes."""

    def test_reads_items_and_total(self):
        page = Page.from_payload({"features": [{"id": "1"}], "pagination": {"total_pages": 4}}, "features")
        assert page.items == [{"id": "1"}]
        assert page.total_pages == 4

    def test_missing_pagination_defaults_to_one(self):
        page = Page.from_payload({"releases": []}, "releases")
        assert page.items == []
        assert page.total_pages == 1

    def test_missing_collection_is_empty(self):
        page = Page.from_payload({"pagination": {"total_pages": 2}}, "products")
        assert page.items == []
        assert page.total_pages == 2

    def test_null_total_pages(self):
        page = Page.from_payload({"products": [], "pagination": {"total_pages": None}}, "products")
        assert page.total_pages == 1
