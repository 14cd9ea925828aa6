"""Tests for the maturity report reader."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from opslevel_sync.errors import ServiceNotFoundError, TransportError
from opslevel_sync.graphql.queries import (
    SERVICE_MATURITY_QUERY,
    SERVICES_REPORT_QUERY,
    VISIBILITY_HEADERS,
)
from opslevel_sync.reports.reader import ReportReader


def _make_client(*responses: object) -> MagicMock:
    """GraphQL client whose ``request`` returns ``responses`` in order."""
    client = MagicMock()
    client.request = AsyncMock(side_effect=list(responses))
    return client


MATURITY_DATA = {
    "account": {
        "rubric": {"levels": {"nodes": [{"index": 0, "name": "Beginner", "description": ""}]}},
        "service": {
            "htmlUrl": "https://app.opslevel.com/services/svc-a",
            "maturityReport": {
                "overallLevel": {"index": 1, "name": "Bronze", "description": "ok"},
                "categoryBreakdown": [
                    {"category": {"name": "Security"}, "level": {"name": "Silver"}}
                ],
            },
            "serviceStats": {"rubric": {"checkResults": {"byLevel": {"nodes": []}}}},
            "checkStats": {"totalChecks": 10, "totalPassingChecks": 7},
        },
    }
}


class TestServiceMaturity:
    async def test_returns_raw_response_unmodified(self):
        client = _make_client(MATURITY_DATA)
        reader = ReportReader(client)

        result = await reader.get_service_maturity_by_alias("svc-a")

        assert result is MATURITY_DATA

    async def test_sends_alias_and_visibility_header(self):
        client = _make_client(MATURITY_DATA)

        await ReportReader(client).get_service_maturity_by_alias("svc-a")

        args, kwargs = client.request.call_args
        assert args[0] == SERVICE_MATURITY_QUERY
        assert args[1] == {"alias": "svc-a"}
        assert kwargs["headers"] == VISIBILITY_HEADERS

    def test_query_selects_report_fields(self):
        for fragment in ("maturityReport", "categoryBreakdown", "warnMessage", "checkStats"):
            assert fragment in SERVICE_MATURITY_QUERY

    async def test_unknown_alias_raises_not_found(self):
        client = _make_client({"account": {"rubric": {}, "service": None}})

        with pytest.raises(ServiceNotFoundError) as exc_info:
            await ReportReader(client).get_service_maturity_by_alias("ghost")

        assert exc_info.value.alias == "ghost"

    async def test_empty_alias_rejected_without_request(self):
        client = _make_client()

        with pytest.raises(ValueError):
            await ReportReader(client).get_service_maturity_by_alias("")

        client.request.assert_not_called()

    async def test_transport_error_propagates(self):
        client = _make_client(TransportError("down"))

        with pytest.raises(TransportError):
            await ReportReader(client).get_service_maturity_by_alias("svc-a")


class TestServicesReport:
    async def test_returns_raw_response_with_visibility_header(self):
        data = {
            "account": {
                "rubric": {"levels": {"totalCount": 2, "nodes": []}, "categories": {"nodes": []}},
                "servicesReport": {
                    "levelCounts": [{"level": {"name": "Bronze"}, "serviceCount": 4}],
                    "categoryLevelCounts": [],
                },
            }
        }
        client = _make_client(data)

        result = await ReportReader(client).get_services_report()

        assert result is data
        args, kwargs = client.request.call_args
        assert args[0] == SERVICES_REPORT_QUERY
        assert args[1] == {}
        assert kwargs["headers"] == VISIBILITY_HEADERS

    async def test_header_dict_not_shared(self):
        client = _make_client({}, {})
        reader = ReportReader(client)

        await reader.get_services_report()
        client.request.call_args.kwargs["headers"]["extra"] = "x"
        await reader.get_services_report()

        assert "extra" not in VISIBILITY_HEADERS
