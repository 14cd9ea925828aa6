"""Tests for the GraphQL transport client."""

from __future__ import annotations

import json

import httpx
import pytest

from opslevel_sync.errors import GraphQLError, ResponseShapeError, TransportError
from opslevel_sync.graphql.client import GraphQLClient, endpoint_for

_ENDPOINT = "http://backstage.test/api/proxy/opslevel/graphql"


def _client_with(handler) -> GraphQLClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GraphQLClient(http=http, endpoint=_ENDPOINT)


class TestEndpointFor:
    def test_appends_proxy_path(self):
        assert endpoint_for("http://backstage.test") == _ENDPOINT

    def test_strips_trailing_slash(self):
        assert endpoint_for("http://backstage.test/") == _ENDPOINT


class TestRequest:
    async def test_posts_query_variables_and_headers(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"ok": True}})

        client = _client_with(handler)
        data = await client.request(
            "query { ok }", {"alias": "svc-a"}, headers={"GraphQL-Visibility": "internal"}
        )

        assert data == {"ok": True}
        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert str(seen[0].url) == _ENDPOINT
        assert seen[0].headers["GraphQL-Visibility"] == "internal"
        body = json.loads(seen[0].content)
        assert body == {"query": "query { ok }", "variables": {"alias": "svc-a"}}

    async def test_no_visibility_header_unless_given(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {}})

        await _client_with(handler).request("mutation { x }")

        assert "GraphQL-Visibility" not in seen[0].headers
        assert json.loads(seen[0].content)["variables"] == {}

    async def test_null_variables_sent_as_json_null(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {}})

        await _client_with(handler).request("m", {"alias": "a", "language": None})

        assert json.loads(seen[0].content)["variables"] == {"alias": "a", "language": None}

    async def test_http_status_error_raises_transport_error(self):
        client = _client_with(lambda request: httpx.Response(502, text="bad gateway"))

        with pytest.raises(TransportError, match="failed"):
            await client.request("query { ok }")

    async def test_connect_error_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError):
            await _client_with(handler).request("query { ok }")

    async def test_graphql_errors_raise(self):
        client = _client_with(
            lambda request: httpx.Response(
                200, json={"data": None, "errors": [{"message": "Field 'x' doesn't exist"}]}
            )
        )

        with pytest.raises(GraphQLError) as exc_info:
            await client.request("query { x }")

        assert exc_info.value.messages == ["Field 'x' doesn't exist"]

    async def test_non_json_body_raises_shape_error(self):
        client = _client_with(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ResponseShapeError):
            await client.request("query { ok }")

    async def test_missing_data_raises_shape_error(self):
        client = _client_with(lambda request: httpx.Response(200, json={"other": 1}))

        with pytest.raises(ResponseShapeError, match="data"):
            await client.request("query { ok }")
