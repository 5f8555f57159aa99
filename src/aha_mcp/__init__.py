"""Aha! MCP Server - Model Context Protocol integration.

This package provides MCP (Model Context Protocol) integration for Aha!,
enabling AI assistants to read and update features, requirements, pages
and releases.

Modules:
- server: stdio MCP server implementation
- tools: MCP tool definitions
- handlers: Tool implementation handlers
- references: Reference number classification
- queries: GraphQL and REST request builders
- fields: Standard/custom field partitioning for updates
- pagination: REST collection aggregation
- client: HTTP transport
- formatters: Response projection utilities
"""

__version__ = "1.0.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
