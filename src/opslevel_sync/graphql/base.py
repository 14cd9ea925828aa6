"""Port: GraphQL transport."""

from __future__ import annotations

from typing import Any, Protocol


class GraphQLClientPort(Protocol):
    """Port for sending a query or mutation to a single GraphQL endpoint."""

    async def request(
        self,
        query: str,
        variables: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send ``query`` and return the response's ``data`` mapping."""
        ...
