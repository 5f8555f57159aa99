"""Tests for the HTTP transport."""
import httpx
import pytest

from aha_mcp.client import AhaClient
from aha_mcp.config import AhaSettings
from aha_mcp.errors import UpstreamError
from aha_mcp.queries import build_get_feature, build_record_query, build_update_feature
from aha_mcp.references import RecordKind


class TestGraphQL:
    """Test GraphQL execution."""

    async def test_posts_query_and_returns_data(self, aha, client):
        aha.reply({"data": {"feature": {"referenceNum": "PROJ-1"}}})

        data = await client.graphql(build_record_query(RecordKind.FEATURE, "PROJ-1"))

        assert data == {"feature": {"referenceNum": "PROJ-1"}}
        request = aha.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/v2/graphql"
        assert aha.body()["variables"] == {"id": "PROJ-1"}

    async def test_graphql_errors_raise(self, aha, client):
        aha.reply({"errors": [{"message": "Record not accessible"}, {"message": "Second"}]})

        with pytest.raises(UpstreamError) as exc_info:
            await client.graphql(build_record_query(RecordKind.FEATURE, "PROJ-1"))
        assert str(exc_info.value) == "GraphQL error: Record not accessible; Second"

    async def test_http_failure_raises(self, aha, client):
        aha.fail(401)

        with pytest.raises(UpstreamError) as exc_info:
            await client.graphql(build_record_query(RecordKind.FEATURE, "PROJ-1"))
        assert str(exc_info.value) == "GraphQL API error: 401 Unauthorized"
        assert exc_info.value.status_code == 401

    async def test_missing_data_is_empty(self, aha, client):
        aha.reply({"data": None})
        assert await client.graphql(build_record_query(RecordKind.FEATURE, "PROJ-1")) == {}


class TestRest:
    """Test REST execution."""

    async def test_get(self, aha, client):
        aha.reply({"feature": {"reference_num": "PROJ-1"}})

        data = await client.rest(build_get_feature("PROJ-1"))

        assert data == {"feature": {"reference_num": "PROJ-1"}}
        assert aha.requests[0].url.path == "/api/v1/features/PROJ-1"
        assert aha.requests[0].headers["Authorization"] == "Bearer test-token"

    async def test_get_failure_omits_body(self, aha, client):
        aha.fail(404, text="Feature not found")

        with pytest.raises(UpstreamError) as exc_info:
            await client.rest(build_get_feature("PROJ-999"))
        assert str(exc_info.value) == "REST API error: 404 Not Found"
        assert exc_info.value.body == "Feature not found"

    async def test_mutation_failure_includes_body(self, aha, client):
        aha.fail(422, text="Invalid date format")

        with pytest.raises(UpstreamError) as exc_info:
            await client.rest(build_update_feature("PROJ-1", {"due_date": "soon"}))
        message = str(exc_info.value)
        assert message.startswith("REST API error: 422 ")
        assert message.endswith(" - Invalid date format")

    async def test_put_sends_json_body(self, aha, client):
        aha.reply({"feature": {}})

        await client.rest(build_update_feature("PROJ-1", {"name": "X", "go_live_date": "2025-04-01"}))

        assert aha.requests[0].method == "PUT"
        assert aha.body() == {"feature": {"name": "X", "custom_fields": {"go_live_date": "2025-04-01"}}}

    async def test_transport_errors_propagate(self, aha, client):
        aha.raise_error(httpx.ConnectError("Network unreachable"))

        with pytest.raises(httpx.ConnectError):
            await client.rest(build_get_feature("PROJ-1"))


class TestFromSettings:
    """Test client construction from configuration."""

    async def test_binds_domain_and_token(self):
        settings = AhaSettings(api_token="secret", domain="acme", timeout=12.5)
        async with AhaClient.from_settings(settings) as client:
            assert client.http.base_url.host == "acme.aha.io"
            assert client.http.base_url.scheme == "https"
            assert client.http.headers["Authorization"] == "Bearer secret"
            assert client.http.headers["Accept"] == "application/json"
            assert client.http.timeout.read == 12.5
