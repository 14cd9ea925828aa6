"""Resolve the OpsLevelApi a tool call should use."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import Context

if TYPE_CHECKING:
    from opslevel_sync.api import OpsLevelApi


def get_api(ctx: Context) -> OpsLevelApi:
    """Return the OpsLevelApi built by ``app_lifespan`` for this server.

    Raises TypeError when the server was started without ``app_lifespan``,
    so a wiring mistake surfaces as an internal error in the tool result.
    """
    from opslevel_sync.server import AppContext

    app = ctx.request_context.lifespan_context
    if not isinstance(app, AppContext):
        msg = (
            f"Expected AppContext in lifespan_context, got {type(app).__name__}. "
            "Start the server through opslevel_sync.server.mcp."
        )
        raise TypeError(msg)
    return app.api
