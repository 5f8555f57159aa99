"""MCP tool handlers for Aha! records.

All handlers follow a consistent pattern:
- Accept: arguments dict and an AhaClient
- Validate required arguments before any request is sent
- Return: a ToolResult (OK, NOT_FOUND or ERROR), never raise
- Log all operations for debugging

Handlers are wrapped by tool_operation(), the single place where failures are
turned into ERROR results. Protocol errors (McpError) keep their original
exception; everything else is reported as "<operation failed>: <cause>".
"""
import functools
import logging
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional

from .client import AhaClient
from .errors import ErrorKind, InvalidArgumentError, McpError
from . import formatters
from .pagination import Page, paginate
from .queries import (
    DEFAULT_PER_PAGE,
    RESPONSE_ENVELOPES,
    build_get_feature,
    build_introspection_query,
    build_page_query,
    build_product_releases_page,
    build_products_page,
    build_record_query,
    build_release_features_page,
    build_search_query,
    build_update_feature,
    build_update_release,
)
from .references import RecordKind, require_kind
from .results import ToolResult
from .schemas import Product

logger = logging.getLogger("aha-mcp.handlers")

Handler = Callable[[dict, AhaClient], Awaitable[ToolResult]]

EMPTY_SEARCH_RESULT = {
    "nodes": [],
    "currentPage": 1,
    "totalCount": 0,
    "totalPages": 0,
    "isLastPage": True,
}


def tool_operation(failure_message: str) -> Callable[[Handler], Handler]:
    """Turn exceptions raised by a handler into ERROR results.

    Args:
        failure_message: Prefix for wrapped failures, e.g. "Failed to fetch record"
    """
    def decorator(func: Handler) -> Handler:
        @functools.wraps(func)
        async def wrapper(arguments: Optional[dict], client: AhaClient) -> ToolResult:
            try:
                return await func(arguments or {}, client)
            except InvalidArgumentError as e:
                logger.info(f"{func.__name__} rejected arguments: {e}")
                return ToolResult.error(ErrorKind.INVALID_ARGUMENT, str(e), cause=e)
            except McpError as e:
                logger.warning(f"{func.__name__} raised protocol error: {e}")
                return ToolResult.error(ErrorKind.PROTOCOL, str(e), cause=e)
            except Exception as e:
                error_message = str(e) or type(e).__name__
                logger.error(f"API Error: {error_message}")
                return ToolResult.error(
                    ErrorKind.UPSTREAM,
                    f"{failure_message}: {error_message}",
                    cause=e,
                )
        return wrapper
    return decorator


def require_argument(arguments: dict, name: str, message: str) -> str:
    """Return a required string argument or raise InvalidArgumentError."""
    value = arguments.get(name)
    if not value or not isinstance(value, str):
        raise InvalidArgumentError(message)
    return value


def require_fields(arguments: dict) -> Mapping[str, Any]:
    """Return the non-empty `fields` mapping of an update call."""
    fields = arguments.get("fields")
    if not fields or not isinstance(fields, Mapping):
        raise InvalidArgumentError("Fields object is required with at least one field to update")
    return fields


# ============================================================================
# GraphQL Handlers
# ============================================================================

@tool_operation("Failed to fetch record")
async def handle_get_record(arguments: dict, client: AhaClient) -> ToolResult:
    """Fetch a feature (DEVELOP-123) or requirement (ADT-123-1) by reference number.

    The reference shape picks the query; page references are rejected here
    and served by get_page instead.
    """
    reference = require_argument(arguments, "reference", "Reference number is required")
    kind = require_kind(reference, (RecordKind.FEATURE, RecordKind.REQUIREMENT))

    data = await client.graphql(build_record_query(kind, reference))
    record = data.get(RESPONSE_ENVELOPES[kind])
    if not record:
        logger.info(f"No {kind.value} found for {reference}")
        return ToolResult.not_found(formatters.format_record_not_found(reference))

    logger.info(f"Successfully retrieved {kind.value} {reference}")
    return ToolResult.ok(record)


@tool_operation("Failed to fetch page")
async def handle_get_page(arguments: dict, client: AhaClient) -> ToolResult:
    """Fetch a page (ABC-N-213), with its parent only when includeParent is set."""
    reference = require_argument(arguments, "reference", "Reference number is required")
    require_kind(reference, (RecordKind.PAGE,))
    include_parent = arguments.get("includeParent") is True

    data = await client.graphql(build_page_query(reference, include_parent=include_parent))
    page = data.get(RESPONSE_ENVELOPES[RecordKind.PAGE])
    if not page:
        logger.info(f"No page found for {reference}")
        return ToolResult.not_found(formatters.format_page_not_found(reference))

    logger.info(f"Successfully retrieved page {reference} (include_parent={include_parent})")
    return ToolResult.ok(page)


@tool_operation("Failed to search documents")
async def handle_search_documents(arguments: dict, client: AhaClient) -> ToolResult:
    """Search documents; no hits is an empty `nodes` list, not a failure."""
    query = require_argument(arguments, "query", "Search query is required")
    searchable_type = arguments.get("searchableType") or "Page"

    data = await client.graphql(build_search_query(query, searchable_type))
    result = data.get("searchDocuments") or dict(EMPTY_SEARCH_RESULT)
    logger.info(f"Search for {query!r} ({searchable_type}) returned {len(result.get('nodes') or [])} nodes")
    return ToolResult.ok(result)


@tool_operation("Failed to introspect")
async def handle_introspect_feature(arguments: dict, client: AhaClient) -> ToolResult:
    data = await client.graphql(build_introspection_query())
    logger.info("Successfully introspected Feature type")
    return ToolResult.ok(data)


# ============================================================================
# REST Handlers
# ============================================================================

@tool_operation("Failed to fetch record via REST")
async def handle_get_record_rest(arguments: dict, client: AhaClient) -> ToolResult:
    """Fetch the raw REST representation of a feature.

    Useful for seeing custom field keys, which the GraphQL API reports differently.
    A missing feature surfaces as the backend's 404 error.
    """
    reference = require_argument(arguments, "reference", "Reference number is required")
    data = await client.rest(build_get_feature(reference))
    logger.info(f"Successfully retrieved feature {reference} via REST")
    return ToolResult.ok(data)


@tool_operation("Failed to update feature")
async def handle_update_feature(arguments: dict, client: AhaClient) -> ToolResult:
    """Update a feature's standard and custom fields in one PUT.

    Keys outside the standard attribute set are sent as custom fields, e.g.
    {"name": "New", "go_live_date": "2025-04-01"} becomes
    {"feature": {"name": "New", "custom_fields": {"go_live_date": "2025-04-01"}}}.
    """
    reference = require_argument(arguments, "reference", "Reference number is required")
    fields = require_fields(arguments)

    request = build_update_feature(reference, fields)
    data = await client.rest(request)
    logger.info(f"Successfully updated feature {reference}: {sorted(fields)}")
    return ToolResult.ok(data)


@tool_operation("Failed to list features in release")
async def handle_list_features_in_release(arguments: dict, client: AhaClient) -> ToolResult:
    """List every feature in a release, following pagination to the last page.

    RETURNS:
    • total_count: number of features actually received across all pages
    • features: the concatenated feature list
    """
    release_reference = require_argument(
        arguments,
        "releaseReference",
        "Release reference is required (e.g., ACT-R-14 or ACTIVATION-R-14)",
    )
    per_page = arguments.get("perPage") or DEFAULT_PER_PAGE

    async def fetch_page(page_number: int) -> Page:
        data = await client.rest(build_release_features_page(release_reference, page_number, per_page))
        return Page.from_payload(data, "features")

    features = await paginate(fetch_page)
    logger.info(f"Successfully listed {len(features)} features in release {release_reference}")
    return ToolResult.ok({"total_count": len(features), "features": features})


@tool_operation("Failed to list releases")
async def handle_list_releases(arguments: dict, client: AhaClient) -> ToolResult:
    """List the releases of a workspace, optionally filtered by name.

    COMMON PATTERNS:
    • All releases: list_releases(workspacePrefix="ACT")
    • Find a quarter: list_releases(workspacePrefix="act", name="fy2027")

    The workspace prefix and the name filter are both case-insensitive. An
    unknown prefix is answered with the list of known prefixes.
    """
    workspace_prefix = require_argument(
        arguments,
        "workspacePrefix",
        "Workspace prefix is required (e.g., ACT, ACTIVATION, DEVELOP)",
    )
    name_filter = arguments.get("name")
    if name_filter is not None and not isinstance(name_filter, str):
        raise InvalidArgumentError("Release name filter must be a string")

    products = await list_products(client)
    product = resolve_workspace(products, workspace_prefix)
    if product is None:
        logger.info(f"No workspace matches prefix {workspace_prefix!r} among {len(products)} products")
        return ToolResult.not_found(formatters.format_workspace_not_found(workspace_prefix, products))

    async def fetch_page(page_number: int) -> Page:
        data = await client.rest(build_product_releases_page(product.id, page_number))
        return Page.from_payload(data, "releases")

    releases = await paginate(fetch_page)
    if name_filter:
        releases = filter_releases_by_name(releases, name_filter)

    formatted = [formatters.format_release_summary(release) for release in releases]
    logger.info(f"Successfully listed {len(formatted)} releases for workspace {product.reference_prefix}")
    return ToolResult.ok({
        "workspace": formatters.format_workspace(product),
        "total_count": len(formatted),
        "releases": formatted,
    })


@tool_operation("Failed to update release")
async def handle_update_release(arguments: dict, client: AhaClient) -> ToolResult:
    """Update a release's dates, name, parking lot flag or custom fields."""
    reference = require_argument(arguments, "reference", "Release reference number is required")
    fields = require_fields(arguments)

    data = await client.rest(build_update_release(reference, fields))
    release = (data or {}).get("release") or {}
    logger.info(f"Successfully updated release {reference}: {sorted(fields)}")
    return ToolResult.ok({
        "message": "Release updated successfully",
        "release": formatters.format_release_detail(release),
    })


# ============================================================================
# Workspace helpers
# ============================================================================

async def list_products(client: AhaClient) -> list[Product]:
    """Fetch every product visible to the token."""
    async def fetch_page(page_number: int) -> Page:
        data = await client.rest(build_products_page(page_number))
        return Page.from_payload(data, "products")

    return [Product.model_validate(item) for item in await paginate(fetch_page)]


def resolve_workspace(products: Iterable[Product], prefix: str) -> Optional[Product]:
    """Return the product whose reference prefix equals `prefix`, ignoring case."""
    wanted = prefix.lower()
    for product in products:
        if product.reference_prefix and product.reference_prefix.lower() == wanted:
            return product
    return None


def filter_releases_by_name(releases: Iterable[dict], name: str) -> list[dict]:
    """Keep releases whose name contains `name`, ignoring case."""
    needle = name.lower()
    return [r for r in releases if needle in (r.get("name") or "").lower()]
