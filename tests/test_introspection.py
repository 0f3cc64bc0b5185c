"""Tests for schema introspection."""

import json

import httpx
import pytest
from graphql import build_schema, introspection_from_schema

from gql_typegen.core.introspection import IntrospectionError, TimeoutConfig, introspect_schema


SDL = '''
type Query {
  user(id: ID!): User
}

type User {
  id: ID!
  name: String
}
'''


def _transport(handler):
    return httpx.MockTransport(handler)


class TestIntrospectSchema:
    """Tests for introspect_schema."""

    def test_returns_sdl(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"data": introspection_from_schema(build_schema(SDL))})

        sdl = introspect_schema(
            "https://api.example.com/graphql",
            headers={"Authorization": "Bearer abc"},
            transport=_transport(handler),
        )
        assert "type User" in sdl
        assert "name: String" in sdl

        request = requests[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer abc"
        assert "__schema" in json.loads(request.content)["query"]

    def test_graphql_errors(self):
        def handler(request):
            return httpx.Response(200, json={"errors": [{"message": "introspection disabled"}]})

        with pytest.raises(IntrospectionError) as exc_info:
            introspect_schema("https://api.example.com/graphql", transport=_transport(handler))
        assert "introspection disabled" in exc_info.value.message
        assert exc_info.value.errors == [{"message": "introspection disabled"}]

    def test_http_error(self):
        def handler(request):
            return httpx.Response(500, text="boom")

        with pytest.raises(IntrospectionError, match="failed"):
            introspect_schema("https://api.example.com/graphql", transport=_transport(handler))

    def test_missing_schema_data(self):
        def handler(request):
            return httpx.Response(200, json={"data": {}})

        with pytest.raises(IntrospectionError, match="no schema data"):
            introspect_schema("https://api.example.com/graphql", transport=_transport(handler))

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(IntrospectionError, match="not JSON"):
            introspect_schema("https://api.example.com/graphql", transport=_transport(handler))


class TestTimeoutConfig:
    """Tests for TimeoutConfig."""

    def test_defaults(self):
        timeout = TimeoutConfig().to_httpx()
        assert timeout.connect == 5.0
        assert timeout.read == 15.0
