"""Reconcile derived metadata (language, framework) onto an exported service."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from opslevel_sync.catalog.entity import Entity
from opslevel_sync.errors import ResponseShapeError, ServiceNotFoundError
from opslevel_sync.graphql.base import GraphQLClientPort
from opslevel_sync.graphql.payloads import dig, parse_mutation_errors
from opslevel_sync.graphql.queries import SERVICE_LANGUAGE_QUERY, SERVICE_UPDATE_MUTATION
from opslevel_sync.models import LanguageUsage, ServiceUpdateResult
from opslevel_sync.reconcile.resolution import build_update_input

logger = logging.getLogger(__name__)


def parse_languages(data: dict[str, Any], alias: str) -> list[LanguageUsage]:
    """Extract the language list of the service's first linked repository.

    A service without linked repositories yields an empty list.
    """
    service = dig(data, "account", "service")
    if service is None:
        raise ServiceNotFoundError(alias)

    edges = dig(service, "repos", "edges") or []
    if not isinstance(edges, list):
        raise ResponseShapeError("'repos.edges' must be a list.")
    if not edges:
        return []

    raw_languages = dig(edges[0], "node", "languages") or []
    if not isinstance(raw_languages, list):
        raise ResponseShapeError("'languages' must be a list.")

    languages = []
    for entry in raw_languages:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ResponseShapeError(f"Malformed language entry: {entry!r}")
        try:
            usage = float(entry.get("usage"))
        except (TypeError, ValueError) as exc:
            raise ResponseShapeError(
                f"Language '{entry['name']}' has a non-numeric usage."
            ) from exc
        languages.append(LanguageUsage(name=entry["name"], usage=usage))
    return languages


@dataclass
class MetadataReconciler:
    """Reads a service's repository languages, then writes language and framework.

    Args:
        client: GraphQL transport.
        frameworks: Tag values recognised as framework names.
    """

    client: GraphQLClientPort
    frameworks: tuple[str, ...] = ("",)
    _pending: set[asyncio.Task[ServiceUpdateResult]] = field(
        default_factory=set,
        init=False,
        repr=False,
    )

    async def fetch_languages(self, alias: str) -> list[LanguageUsage]:
        data = await self.client.request(SERVICE_LANGUAGE_QUERY, {"alias": alias})
        return parse_languages(data, alias)

    async def update_service(self, entity: Entity) -> ServiceUpdateResult:
        """Run read -> derive -> write and return once the update was answered.

        Failures of either call propagate to the caller.
        """
        alias = entity.name
        languages = await self.fetch_languages(alias)
        update = build_update_input(entity, languages, self.frameworks)
        logger.debug(
            "Updating '%s' with language=%s framework=%s",
            alias,
            update.language,
            update.framework,
        )

        data = await self.client.request(SERVICE_UPDATE_MUTATION, update.to_variables())
        payload = dig(data, "serviceUpdate")
        if not isinstance(payload, dict):
            raise ResponseShapeError("serviceUpdate mutation returned no payload.")

        result = ServiceUpdateResult(input=update, errors=parse_mutation_errors(payload))
        if result.ok:
            logger.info("Updated service '%s'", alias)
        else:
            logger.warning(
                "Update of service '%s' returned errors: %s",
                alias,
                "; ".join(e.message for e in result.errors),
            )
        return result

    def schedule_update(self, entity: Entity) -> asyncio.Task[ServiceUpdateResult]:
        """Start ``update_service`` in the background and return its task.

        The caller is not blocked. Awaiting the task yields the result or
        re-raises the failure; unawaited failures are still logged.
        Must be called from a running event loop.
        """
        task = asyncio.create_task(
            self.update_service(entity),
            name=f"opslevel-update-{entity.name}",
        )
        self._pending.add(task)
        task.add_done_callback(self._on_update_done)
        return task

    def _on_update_done(self, task: asyncio.Task[ServiceUpdateResult]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.info("Background update %s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background update %s failed: %s", task.get_name(), exc)
