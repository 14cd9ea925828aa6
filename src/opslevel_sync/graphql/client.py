"""HTTP client for the OpsLevel GraphQL API, reached through the backend proxy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from opslevel_sync.errors import GraphQLError, ResponseShapeError, TransportError

logger = logging.getLogger(__name__)

PROXY_PATH = "/api/proxy/opslevel/graphql"


def endpoint_for(base_url: str) -> str:
    """Build the proxied GraphQL endpoint from a backend base URL."""
    return f"{base_url.rstrip('/')}{PROXY_PATH}"


@dataclass
class GraphQLClient:
    """Async GraphQL client. One endpoint, no retries, no caching."""

    http: httpx.AsyncClient
    endpoint: str

    async def request(
        self,
        query: str,
        variables: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """POST a query or mutation and return the ``data`` mapping.

        Args:
            query: GraphQL document text.
            variables: Operation variables; ``None`` values are sent as null.
            headers: Extra headers for this call only.

        Raises:
            TransportError: On connection failure or a non-2xx status.
            GraphQLError: If the body carries a top-level ``errors`` list.
            ResponseShapeError: If the body is not JSON or has no ``data``.
        """
        try:
            response = await self.http.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(
                f"GraphQL request to {self.endpoint} failed: {exc}"
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ResponseShapeError(
                f"GraphQL endpoint {self.endpoint} returned a non-JSON body."
            ) from exc

        if not isinstance(body, dict):
            raise ResponseShapeError("GraphQL response body must be a JSON object.")

        errors = body.get("errors")
        if errors:
            raise GraphQLError(self._error_messages(errors))

        data = body.get("data")
        if not isinstance(data, dict):
            raise ResponseShapeError("GraphQL response has no 'data' object.")

        logger.debug("GraphQL request to %s succeeded", self.endpoint)
        return data

    @staticmethod
    def _error_messages(errors: object) -> list[str]:
        if not isinstance(errors, list):
            return [str(errors)]
        messages = []
        for err in errors:
            if isinstance(err, dict):
                messages.append(str(err.get("message", err)))
            else:
                messages.append(str(err))
        return messages
