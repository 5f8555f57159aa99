"""Shared formatting functions for MCP responses.

Tool answers are JSON text; these helpers project REST records to the fixed
shapes the tools promise and build the not-found messages.
"""
from typing import Any, Iterable

from .schemas import Product, ReleaseDetail, ReleaseSummary, WorkspaceSummary


def format_release_summary(release: dict) -> dict:
    """Project a REST release to the list_releases shape."""
    return ReleaseSummary.model_validate(_known_keys(release, ReleaseSummary.model_fields)).model_dump()


def format_release_detail(release: dict) -> dict:
    """Project a REST release to the update_release shape."""
    return ReleaseDetail.model_validate(_known_keys(release, ReleaseDetail.model_fields)).model_dump()


def format_workspace(product: Product) -> dict:
    return WorkspaceSummary(
        prefix=product.reference_prefix,
        name=product.name,
        id=product.id,
    ).model_dump()


def format_workspace_not_found(prefix: str, products: Iterable[Product]) -> str:
    """List the known prefixes so the caller can retry with a valid one."""
    known = ", ".join(str(p.reference_prefix) for p in products if p.reference_prefix) or "none"
    return f'No workspace found with prefix "{prefix}". Available workspaces: {known}'


def format_record_not_found(reference: str) -> str:
    return f"No record found for reference {reference}"


def format_page_not_found(reference: str) -> str:
    return f"No page found for reference {reference}"


def _known_keys(record: dict, fields: Iterable[str]) -> dict[str, Any]:
    # Projections keep only their declared keys; absent keys become None
    return {name: record.get(name) for name in fields}
