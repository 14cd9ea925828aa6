"""MCP server exposing OpsLevel maturity reports and catalog sync operations."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from opslevel_sync.api import OpsLevelApi
from opslevel_sync.settings import Settings, load_settings
from opslevel_sync.tools.export import export_entity
from opslevel_sync.tools.reports import service_maturity, services_report
from opslevel_sync.tools.update import update_service


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared state across all tool invocations."""

    http_client: httpx.AsyncClient
    settings: Settings
    api: OpsLevelApi


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Manage shared adapter lifecycle — the composition root."""
    settings = load_settings()
    # No transport retries: a failed call surfaces to the caller as-is.
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout, connect=10.0),
        follow_redirects=True,
    ) as http_client:
        yield AppContext(
            http_client=http_client,
            settings=settings,
            api=OpsLevelApi.from_settings(settings, http_client),
        )


mcp = FastMCP(
    "opslevel-sync",
    instructions=(
        "opslevel-sync reads OpsLevel service maturity and exports catalog "
        "entities into OpsLevel.\n\n"
        "- **service_maturity** — rubric level and check results for one service alias.\n"
        "- **services_report** — how many services sit at each level, overall and "
        "per category.\n"
        "- **export_entity** — create or update the OpsLevel service for an entity "
        "in a catalog-info.yaml file.\n"
        "- **update_service** — after exporting, set the service's primary language "
        "(from its repository) and framework (from annotation or tags).\n\n"
        "Always run export_entity before update_service for a new entity. "
        "A result with success=false and a non-empty errors list means OpsLevel "
        "rejected the change; report the errors to the user verbatim."
    ),
    lifespan=app_lifespan,
)

# ─── Read-only tools ──────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(service_maturity)
mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))(services_report)

# ─── Write tools ──────────────────────────────────────────────
mcp.tool(annotations=ToolAnnotations(destructiveHint=False))(export_entity)
mcp.tool(annotations=ToolAnnotations(destructiveHint=False))(update_service)
