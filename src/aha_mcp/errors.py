"""Error taxonomy for Aha! tool calls.

Four conditions can end a tool call:
- InvalidArgumentError: bad or missing arguments, raised before any request is sent
- not found: not an exception at all, see results.ToolResult.not_found
- UpstreamError: the Aha! backend answered with a failure (HTTP status or GraphQL errors)
- McpError: already in the protocol's structured shape, passed through untouched
"""
import enum
from typing import Optional

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS


class ErrorKind(str, enum.Enum):
    """Classification carried by an error ToolResult."""
    INVALID_ARGUMENT = "invalid_argument"
    UPSTREAM = "upstream"
    PROTOCOL = "protocol"


class InvalidArgumentError(ValueError):
    """Raised when tool arguments are missing, empty or malformed."""


class ConfigurationError(RuntimeError):
    """Raised at startup when required environment configuration is missing."""


class UpstreamError(Exception):
    """Raised when the Aha! API answers with a non-success result."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.body = body


def invalid_params(message: str) -> McpError:
    """Build the protocol error for rejected arguments."""
    return McpError(ErrorData(code=INVALID_PARAMS, message=message))


def internal_error(message: str) -> McpError:
    """Build the protocol error for failed backend calls."""
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))


__all__ = [
    "ErrorKind",
    "InvalidArgumentError",
    "ConfigurationError",
    "UpstreamError",
    "McpError",
    "invalid_params",
    "internal_error",
]
