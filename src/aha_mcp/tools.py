"""MCP tool definitions for Aha! records.

This module provides the definitive list of tools exposed by the server; the
tool names here are the keys of server.HANDLERS.
"""

from mcp.types import Tool


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools for Aha! records."""
    return [
        # ============================================================================
        # GraphQL Tools
        # ============================================================================
        Tool(
            name="get_record",
            description="Get an Aha! feature or requirement by reference number. "
                       "Feature references look like DEVELOP-123, requirement references like ADT-123-1. "
                       "For pages (ABC-N-213) use get_page().",
            inputSchema={
                "type": "object",
                "properties": {
                    "reference": {
                        "type": "string",
                        "description": "Reference number (e.g., DEVELOP-123 or ADT-123-1)"
                    }
                },
                "required": ["reference"]
            }
        ),
        Tool(
            name="get_page",
            description="Get an Aha! page by reference number with optional relationships.",
            inputSchema={
                "type": "object",
                "properties": {
                    "reference": {
                        "type": "string",
                        "description": "Reference number (e.g., ABC-N-213)"
                    },
                    "includeParent": {
                        "type": "boolean",
                        "description": "Include parent page in the response",
                        "default": False
                    }
                },
                "required": ["reference"]
            }
        ),
        Tool(
            name="search_documents",
            description="Search for Aha! documents. "
                       "Returns matching nodes with paging details (currentPage, totalCount, totalPages, isLastPage).",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Search query string"
                    },
                    "searchableType": {
                        "type": "string",
                        "description": "Type of document to search for (e.g., Page)",
                        "default": "Page"
                    }
                },
                "required": ["query"]
            }
        ),
        Tool(
            name="introspect_feature",
            description="Introspect the Feature type schema to see available fields.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        # ============================================================================
        # REST Tools
        # ============================================================================
        Tool(
            name="get_record_rest",
            description="Get an Aha! feature using the REST API (for debugging custom fields).",
            inputSchema={
                "type": "object",
                "properties": {
                    "reference": {
                        "type": "string",
                        "description": "Reference number (e.g., DEVELOP-123)"
                    }
                },
                "required": ["reference"]
            }
        ),
        Tool(
            name="update_feature",
            description="Update a feature's fields including custom fields. "
                       "Custom fields use their API key (e.g., 'go_live_date' for Release target date). "
                       "Date format: YYYY-MM-DD",
            inputSchema={
                "type": "object",
                "properties": {
                    "reference": {
                        "type": "string",
                        "description": "Feature reference number (e.g., ACTIVATION-59)"
                    },
                    "fields": {
                        "type": "object",
                        "description": "Object containing field keys and values to update. "
                                       "Standard fields: name, workflow_kind, workflow_status, release, description, "
                                       "assigned_to_user, tags, start_date, due_date, initiative, epic, "
                                       "progress_source, progress, team. "
                                       "Custom fields use their API key (e.g., go_live_date, release_stage). "
                                       "Dates must be in YYYY-MM-DD format."
                    }
                },
                "required": ["reference", "fields"]
            }
        ),
        Tool(
            name="list_features_in_release",
            description="List all features in a release. Follows pagination and returns the combined list.",
            inputSchema={
                "type": "object",
                "properties": {
                    "releaseReference": {
                        "type": "string",
                        "description": "Release reference number (e.g., ACT-R-14 or ACTIVATION-R-14)"
                    },
                    "perPage": {
                        "type": "integer",
                        "description": "Number of features per page (default 100, max 200)",
                        "default": 100
                    }
                },
                "required": ["releaseReference"]
            }
        ),
        Tool(
            name="list_releases",
            description="List releases in a workspace, optionally filtered by name. "
                       "Common pattern: list_releases(workspacePrefix='ACT', name='FY2027') → "
                       "list_features_in_release(releaseReference=...).",
            inputSchema={
                "type": "object",
                "properties": {
                    "workspacePrefix": {
                        "type": "string",
                        "description": "Workspace reference prefix, case-insensitive (e.g., ACT, ACTIVATION, DEVELOP)"
                    },
                    "name": {
                        "type": "string",
                        "description": "Only return releases whose name contains this text (case-insensitive)"
                    }
                },
                "required": ["workspacePrefix"]
            }
        ),
        Tool(
            name="update_release",
            description="Update a release's fields such as name, start_date, release_date, "
                       "development_started_on or parking_lot. Other keys are sent as custom fields. "
                       "Date format: YYYY-MM-DD",
            inputSchema={
                "type": "object",
                "properties": {
                    "reference": {
                        "type": "string",
                        "description": "Release reference number (e.g., ACT-R-14)"
                    },
                    "fields": {
                        "type": "object",
                        "description": "Object containing field keys and values to update "
                                       "(e.g., {\"release_date\": \"2027-03-31\", \"parking_lot\": false})."
                    }
                },
                "required": ["reference", "fields"]
            }
        ),
    ]
