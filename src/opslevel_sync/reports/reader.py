"""Read-only rubric and maturity reports."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from opslevel_sync.errors import ServiceNotFoundError
from opslevel_sync.graphql.base import GraphQLClientPort
from opslevel_sync.graphql.payloads import dig
from opslevel_sync.graphql.queries import (
    SERVICE_MATURITY_QUERY,
    SERVICES_REPORT_QUERY,
    VISIBILITY_HEADERS,
)

logger = logging.getLogger(__name__)


@dataclass
class ReportReader:
    """Fetches maturity reports. Responses are returned unmodified."""

    client: GraphQLClientPort

    async def get_service_maturity_by_alias(self, alias: str) -> dict[str, Any]:
        """Fetch rubric levels plus one service's maturity report and check results.

        Raises:
            ValueError: If ``alias`` is empty.
            ServiceNotFoundError: If the alias does not resolve remotely.
        """
        if not alias:
            raise ValueError("Service alias must not be empty.")

        logger.debug("Fetching maturity report for '%s'", alias)
        data = await self.client.request(
            SERVICE_MATURITY_QUERY,
            {"alias": alias},
            headers=dict(VISIBILITY_HEADERS),
        )
        if dig(data, "account", "service") is None:
            raise ServiceNotFoundError(alias)
        return data

    async def get_services_report(self) -> dict[str, Any]:
        """Fetch account-wide level counts and per-category level counts."""
        logger.debug("Fetching account services report")
        return await self.client.request(
            SERVICES_REPORT_QUERY,
            {},
            headers=dict(VISIBILITY_HEADERS),
        )
