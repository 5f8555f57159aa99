"""Pydantic schemas for request descriptors and API payloads."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# Request descriptors

class GraphQLRequest(BaseModel):
    """A query against the Aha! GraphQL API (/api/v2/graphql)."""

    query: str
    variables: dict[str, Any] = Field(default_factory=dict)
    operation_name: Optional[str] = None

    def to_body(self) -> dict[str, Any]:
        """JSON body for the GraphQL POST."""
        body: dict[str, Any] = {"query": self.query}
        if self.variables:
            body["variables"] = self.variables
        if self.operation_name:
            body["operationName"] = self.operation_name
        return body


class RestRequest(BaseModel):
    """A call against the Aha! REST API (/api/v1)."""

    method: str = "GET"
    path: str
    params: dict[str, Any] = Field(default_factory=dict)
    json_body: Optional[dict[str, Any]] = None

    @property
    def is_mutation(self) -> bool:
        return self.method.upper() != "GET"


# REST payloads
# Aha! returns many more attributes than listed here; extra="allow" keeps them.

class Product(BaseModel):
    """An Aha! product (workspace) as listed by /api/v1/products."""

    model_config = ConfigDict(extra="allow")

    id: Any = None
    reference_prefix: Optional[str] = None
    name: Optional[str] = None


class ReleaseSummary(BaseModel):
    """The fixed projection of a release returned by list_releases."""

    reference_num: Optional[str] = None
    name: Optional[str] = None
    start_date: Any = None
    release_date: Any = None
    parking_lot: Any = None
    url: Optional[str] = None


class ReleaseDetail(ReleaseSummary):
    """The projection of a release returned by update_release."""

    development_started_on: Any = None


class WorkspaceSummary(BaseModel):
    """The workspace block of a list_releases answer."""

    prefix: Optional[str] = None
    name: Optional[str] = None
    id: Any = None
