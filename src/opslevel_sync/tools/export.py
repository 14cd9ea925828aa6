"""export_entity tool -- push a catalog entity into OpsLevel."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from opslevel_sync.catalog.entity import stringify_entity_ref
from opslevel_sync.catalog.loader import find_entity, load_entities
from opslevel_sync.errors import OpsLevelSyncError
from opslevel_sync.models import ExportToolResult
from opslevel_sync.tools._helpers import get_api


async def export_entity(
    catalog_path: str,
    ctx: Context,
    entity_name: str = "",
) -> dict[str, object]:
    """Create or update the OpsLevel service for a catalog entity.

    The entity is sent with a ``type:<spec.type>`` tag added and its type
    set to "service". The catalog file on disk is not modified.

    Args:
        catalog_path: Path to a catalog-info.yaml file.
        entity_name: Entity to export when the file holds several.
            Empty to export the only entity in the file.

    Returns:
        Result with success status, OpsLevel's action message, the
        service URL, and any validation errors OpsLevel reported.
    """
    try:
        entity = find_entity(load_entities(catalog_path), entity_name)
    except OpsLevelSyncError as exc:
        return asdict(
            ExportToolResult(success=False, entity_name=entity_name, message=str(exc))
        )

    try:
        result = await get_api(ctx).export_entity(entity)
    except OpsLevelSyncError as exc:
        return asdict(
            ExportToolResult(success=False, entity_name=entity.name, message=str(exc))
        )
    except Exception as exc:
        await ctx.error(f"Unexpected error in export_entity: {exc}")
        return asdict(
            ExportToolResult(
                success=False,
                entity_name=entity.name,
                message=f"Internal error: {type(exc).__name__}",
            )
        )

    if result.ok:
        await ctx.info(f"Exported {entity.name}: {result.action_message}")
    return asdict(
        ExportToolResult(
            success=result.ok,
            entity_name=entity.name,
            entity_ref=stringify_entity_ref(entity),
            action_message=result.action_message,
            html_url=result.html_url,
            errors=[e.message for e in result.errors],
            message="" if result.ok else "OpsLevel rejected the export.",
        )
    )
