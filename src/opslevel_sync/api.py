"""OpsLevelApi -- one object exposing every sync operation over a shared client."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from opslevel_sync.catalog.entity import Entity
from opslevel_sync.export.exporter import EntityExporter
from opslevel_sync.graphql.base import GraphQLClientPort
from opslevel_sync.graphql.client import GraphQLClient, endpoint_for
from opslevel_sync.models import ImportResult, ServiceUpdateResult
from opslevel_sync.reconcile.reconciler import MetadataReconciler
from opslevel_sync.reports.reader import ReportReader
from opslevel_sync.settings import Settings


@dataclass(frozen=True, slots=True)
class OpsLevelApi:
    """Facade over the report reader, entity exporter and metadata reconciler.

    The three parts are independent: exporting does not trigger a
    reconcile. Call ``update_service`` after ``export_entity`` when the
    language and framework should be refreshed.
    """

    reader: ReportReader
    exporter: EntityExporter
    reconciler: MetadataReconciler

    @classmethod
    def from_client(
        cls,
        client: GraphQLClientPort,
        frameworks: tuple[str, ...] = ("",),
    ) -> OpsLevelApi:
        return cls(
            reader=ReportReader(client),
            exporter=EntityExporter(client),
            reconciler=MetadataReconciler(client, frameworks=frameworks),
        )

    @classmethod
    def from_settings(cls, settings: Settings, http: httpx.AsyncClient) -> OpsLevelApi:
        client = GraphQLClient(http, endpoint_for(settings.base_url))
        return cls.from_client(client, settings.frameworks)

    async def get_service_maturity_by_alias(self, alias: str) -> dict[str, Any]:
        return await self.reader.get_service_maturity_by_alias(alias)

    async def get_services_report(self) -> dict[str, Any]:
        return await self.reader.get_services_report()

    async def export_entity(self, entity: Entity) -> ImportResult:
        return await self.exporter.export_entity(entity)

    async def update_service(self, entity: Entity) -> ServiceUpdateResult:
        return await self.reconciler.update_service(entity)

    def schedule_update(self, entity: Entity) -> asyncio.Task[ServiceUpdateResult]:
        return self.reconciler.schedule_update(entity)
