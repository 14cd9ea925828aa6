"""Export a catalog entity into OpsLevel as a service."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass

from opslevel_sync.catalog.entity import Entity, stringify_entity_ref
from opslevel_sync.errors import EntityError, ResponseShapeError
from opslevel_sync.graphql.base import GraphQLClientPort
from opslevel_sync.graphql.payloads import dig, parse_mutation_errors
from opslevel_sync.graphql.queries import IMPORT_ENTITY_MUTATION
from opslevel_sync.models import ExportRequest, ImportResult

logger = logging.getLogger(__name__)

SERVICE_TYPE = "service"


def prepare_export(entity: Entity) -> ExportRequest:
    """Build the import variables from a transformed copy of ``entity``.

    The copy gets a ``type:<spec.type>`` tag appended (``type:undefined``
    when the spec declares no type) and, when it has a spec, its type is
    forced to ``service``. The caller's entity is left untouched.

    Raises:
        EntityError: If the entity has no tag list to append to.
    """
    if entity.metadata.tags is None:
        raise EntityError(
            f"Entity '{entity.name}' has no 'metadata.tags' list; "
            "add 'tags: []' to export it."
        )

    prepared = copy.deepcopy(entity)
    declared_type = prepared.spec.get("type") if prepared.spec is not None else None
    type_text = "undefined" if declared_type is None else str(declared_type)
    prepared.metadata.tags.append(f"type:{type_text}")
    if prepared.spec is not None:
        prepared.spec["type"] = SERVICE_TYPE

    return ExportRequest(
        entity_ref=stringify_entity_ref(prepared),
        entity=prepared.to_dict(),
        entity_alias=prepared.name,
    )


@dataclass
class EntityExporter:
    """Submits catalog entities to ``importEntityFromBackstage``."""

    client: GraphQLClientPort

    async def export_entity(self, entity: Entity) -> ImportResult:
        """Create or update the OpsLevel service for ``entity``.

        Remote validation errors come back in ``ImportResult.errors``;
        only transport and GraphQL-level failures raise.
        """
        request = prepare_export(entity)
        data = await self.client.request(IMPORT_ENTITY_MUTATION, request.to_variables())

        payload = dig(data, "import")
        if not isinstance(payload, dict):
            raise ResponseShapeError("Import mutation returned no 'import' payload.")

        result = ImportResult(
            errors=parse_mutation_errors(payload),
            action_message=payload.get("actionMessage") or "",
            html_url=payload.get("htmlUrl") or "",
        )
        if result.ok:
            logger.info("Exported %s: %s", request.entity_ref, result.action_message)
        else:
            logger.warning(
                "Export of %s returned errors: %s",
                request.entity_ref,
                "; ".join(e.message for e in result.errors),
            )
        return result
