"""service_maturity and services_report tools -- read rubric reports."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from opslevel_sync.errors import OpsLevelSyncError
from opslevel_sync.models import ReportToolResult
from opslevel_sync.tools._helpers import get_api


async def service_maturity(alias: str, ctx: Context) -> dict[str, object]:
    """Get the maturity report of one OpsLevel service.

    Returns rubric levels, the service's overall level, its level per
    category, check results grouped by level, and passing/total check counts.

    Args:
        alias: OpsLevel service alias (the catalog entity name).

    Returns:
        Result with success status and the raw report under ``data``.
    """
    if not alias:
        return asdict(ReportToolResult(success=False, message="alias must not be empty."))
    try:
        data = await get_api(ctx).get_service_maturity_by_alias(alias)
        return asdict(ReportToolResult(success=True, data=data))
    except OpsLevelSyncError as exc:
        return asdict(ReportToolResult(success=False, message=str(exc)))
    except Exception as exc:
        await ctx.error(f"Unexpected error in service_maturity: {exc}")
        return asdict(
            ReportToolResult(success=False, message=f"Internal error: {type(exc).__name__}")
        )


async def services_report(ctx: Context) -> dict[str, object]:
    """Get account-wide maturity statistics.

    Returns rubric levels and categories, the number of services at each
    level, and the number of services at each level within each category.
    """
    try:
        data = await get_api(ctx).get_services_report()
        return asdict(ReportToolResult(success=True, data=data))
    except OpsLevelSyncError as exc:
        return asdict(ReportToolResult(success=False, message=str(exc)))
    except Exception as exc:
        await ctx.error(f"Unexpected error in services_report: {exc}")
        return asdict(
            ReportToolResult(success=False, message=f"Internal error: {type(exc).__name__}")
        )
