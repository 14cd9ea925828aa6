"""update_service tool -- set language and framework on an exported service."""

from __future__ import annotations

from dataclasses import asdict

from mcp.server.fastmcp import Context

from opslevel_sync.catalog.loader import find_entity, load_entities
from opslevel_sync.errors import OpsLevelSyncError
from opslevel_sync.models import UpdateToolResult
from opslevel_sync.tools._helpers import get_api


async def update_service(
    catalog_path: str,
    ctx: Context,
    entity_name: str = "",
) -> dict[str, object]:
    """Refresh an OpsLevel service's primary language and framework.

    The language is the most-used language of the service's first linked
    repository. The framework comes from the ``opslevel.com/framework``
    annotation, else from the first entity tag that is a configured
    framework. Either may end up empty.

    Args:
        catalog_path: Path to a catalog-info.yaml file.
        entity_name: Entity to update when the file holds several.

    Returns:
        Result with success status, the language and framework sent, and
        any errors OpsLevel reported.
    """
    try:
        entity = find_entity(load_entities(catalog_path), entity_name)
    except OpsLevelSyncError as exc:
        return asdict(UpdateToolResult(success=False, alias=entity_name, message=str(exc)))

    try:
        result = await get_api(ctx).update_service(entity)
    except OpsLevelSyncError as exc:
        return asdict(UpdateToolResult(success=False, alias=entity.name, message=str(exc)))
    except Exception as exc:
        await ctx.error(f"Unexpected error in update_service: {exc}")
        return asdict(
            UpdateToolResult(
                success=False,
                alias=entity.name,
                message=f"Internal error: {type(exc).__name__}",
            )
        )

    return asdict(
        UpdateToolResult(
            success=result.ok,
            alias=result.alias,
            language=result.input.language,
            framework=result.input.framework,
            errors=[e.message for e in result.errors],
            message="" if result.ok else "OpsLevel rejected the update.",
        )
    )
