"""Schema introspection against a running GraphQL endpoint.

Runs the standard introspection query over HTTP and converts the result to
SDL, which SchemaParser can then read like any local schema file.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from graphql import build_client_schema, get_introspection_query, print_schema

logger = logging.getLogger(__name__)


class IntrospectionError(Exception):
    """Exception raised when the introspection query fails."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


@dataclass(frozen=True)
class TimeoutConfig:
    """Connect and read timeouts in seconds."""
    connect: float = 5.0
    read: float = 15.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(self.read, connect=self.connect)


def introspect_schema(
    endpoint: str,
    headers: dict[str, str] | None = None,
    timeout: TimeoutConfig = TimeoutConfig(),
    *,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Run the introspection query against endpoint and return the schema as SDL.

    Args:
        endpoint: GraphQL endpoint URL
        headers: Extra HTTP headers, e.g. authorization
        timeout: Connect/read timeouts
        transport: Optional httpx transport (used by tests)

    Raises:
        IntrospectionError: On HTTP failures or GraphQL errors in the response
    """
    request_headers = {"Content-Type": "application/json"}
    request_headers.update(headers or {})
    payload = {"query": get_introspection_query(descriptions=True)}

    logger.debug("Running introspection query against %s", endpoint)
    try:
        with httpx.Client(
            timeout=timeout.to_httpx(),
            headers=request_headers,
            transport=transport,
        ) as client:
            response = client.post(endpoint, json=payload)
            response.raise_for_status()
            result = response.json()
    except httpx.HTTPError as e:
        raise IntrospectionError(f"Introspection request to {endpoint} failed: {e}") from e
    except ValueError as e:
        raise IntrospectionError(f"Introspection response from {endpoint} is not JSON: {e}") from e

    if result.get("errors"):
        error_messages = "; ".join(e.get("message", str(e)) for e in result["errors"])
        raise IntrospectionError(f"GraphQL errors: {error_messages}", result["errors"])

    data = result.get("data")
    if not data or "__schema" not in data:
        raise IntrospectionError(f"Introspection response from {endpoint} has no schema data")

    sdl = print_schema(build_client_schema(data))
    logger.debug("Introspected schema from %s", endpoint)
    return sdl
