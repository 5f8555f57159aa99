"""Tool call outcomes.

Every handler returns a ToolResult tagged with one of:
- OK: the backend answered with data
- NOT_FOUND: the request was well formed but no record exists (not a failure)
- ERROR: the call failed; carries an ErrorKind and, for protocol errors, the original exception
"""
import enum
import json
from typing import Any, Optional

from mcp.types import TextContent
from pydantic import BaseModel, ConfigDict

from .errors import ErrorKind, McpError, internal_error, invalid_params


class ResultKind(str, enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"


class ToolResult(BaseModel):
    """Tagged outcome of one tool call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: ResultKind
    data: Any = None
    message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    cause: Optional[BaseException] = None

    @classmethod
    def ok(cls, data: Any) -> "ToolResult":
        return cls(kind=ResultKind.OK, data=data)

    @classmethod
    def not_found(cls, message: str) -> "ToolResult":
        return cls(kind=ResultKind.NOT_FOUND, message=message)

    @classmethod
    def error(
        cls,
        error_kind: ErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> "ToolResult":
        return cls(kind=ResultKind.ERROR, error_kind=error_kind, message=message, cause=cause)

    @property
    def is_ok(self) -> bool:
        return self.kind == ResultKind.OK

    @property
    def is_not_found(self) -> bool:
        return self.kind == ResultKind.NOT_FOUND

    @property
    def is_error(self) -> bool:
        return self.kind == ResultKind.ERROR

    def raise_for_error(self) -> None:
        """Raise the protocol error for an ERROR result; no-op otherwise.

        Protocol errors are re-raised as the exact original exception.
        """
        if not self.is_error:
            return
        if self.error_kind == ErrorKind.PROTOCOL and isinstance(self.cause, McpError):
            raise self.cause
        if self.error_kind == ErrorKind.INVALID_ARGUMENT:
            raise invalid_params(self.message or "Invalid arguments") from self.cause
        raise internal_error(self.message or "Internal error") from self.cause

    def to_text(self) -> str:
        """Render an OK or NOT_FOUND result as the tool's text answer."""
        self.raise_for_error()
        if self.is_not_found:
            return self.message or ""
        if isinstance(self.data, str):
            return self.data
        return json.dumps(self.data, indent=2)

    def to_content(self) -> list[TextContent]:
        return [TextContent(type="text", text=self.to_text())]
