"""HTTP transport for the Aha! GraphQL and REST APIs."""
import logging
from typing import Any, Optional

import httpx

from .config import AhaSettings
from .errors import UpstreamError
from .schemas import GraphQLRequest, RestRequest

logger = logging.getLogger("aha-mcp.client")

GRAPHQL_PATH = "/api/v2/graphql"


class AhaClient:
    """Executes request descriptors against one Aha! account.

    The wrapped httpx.AsyncClient must already carry the account's base URL and
    bearer token; AhaClient.from_settings() builds such a client.
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @classmethod
    def from_settings(cls, settings: AhaSettings) -> "AhaClient":
        http = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            headers={
                "Authorization": f"Bearer {settings.api_token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )
        return cls(http)

    async def __aenter__(self) -> "AhaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    async def graphql(self, request: GraphQLRequest) -> dict[str, Any]:
        """Run a GraphQL query and return its `data` object.

        Raises:
            UpstreamError: On a non-2xx status or when the answer carries `errors`
        """
        response = await self.http.post(GRAPHQL_PATH, json=request.to_body())
        if not response.is_success:
            raise _status_error("GraphQL API error", response)

        payload = response.json()
        errors = payload.get("errors")
        if errors:
            messages = "; ".join(str(error.get("message", error)) for error in errors)
            raise UpstreamError(
                f"GraphQL error: {messages}",
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug(f"GraphQL {request.operation_name or 'query'} succeeded")
        return payload.get("data") or {}

    async def rest(self, request: RestRequest) -> Any:
        """Send a REST call and return the decoded JSON answer.

        Raises:
            UpstreamError: On a non-2xx status; mutation errors include the response body
        """
        response = await self.http.request(
            request.method,
            request.path,
            params=request.params or None,
            json=request.json_body,
        )
        if not response.is_success:
            raise _status_error("REST API error", response, include_body=request.is_mutation)

        logger.debug(f"{request.method} {request.path} -> {response.status_code}")
        return response.json()


def _status_error(
    label: str,
    response: httpx.Response,
    include_body: bool = False,
) -> UpstreamError:
    """Describe a failed response as 'REST API error: 404 Not Found[ - body]'."""
    body: Optional[str] = response.text
    message = f"{label}: {response.status_code} {response.reason_phrase}"
    if include_body and body:
        message = f"{message} - {body}"
    return UpstreamError(
        message,
        status_code=response.status_code,
        reason=response.reason_phrase,
        body=body,
    )
