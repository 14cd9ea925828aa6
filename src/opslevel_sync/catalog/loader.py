"""Load catalog entities from ``catalog-info.yaml`` files."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from opslevel_sync.catalog.entity import Entity
from opslevel_sync.errors import EntityError

logger = logging.getLogger(__name__)


def load_entities(path: str | Path) -> list[Entity]:
    """Load every entity from a (possibly multi-document) catalog YAML file.

    Raises:
        EntityError: If the file is missing, is not valid YAML, or holds an
            entity without the fields the sync workflow needs.
    """
    path = Path(path)
    if not path.exists():
        raise EntityError(f"Catalog file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EntityError(f"Failed to read catalog file '{path}': {exc}") from exc
    return parse_entities(text, source=str(path))


def parse_entities(text: str, source: str = "") -> list[Entity]:
    """Parse YAML text into entities. Documents that are not mappings are skipped."""
    try:
        documents = list(yaml.safe_load_all(text))
    except yaml.YAMLError as exc:
        raise EntityError(f"Invalid YAML in {source or 'catalog text'}: {exc}") from exc

    entities: list[Entity] = []
    for index, doc in enumerate(documents):
        if not isinstance(doc, dict):
            if doc is not None:
                logger.debug("Skipping non-mapping document %d in %s", index, source)
            continue
        entities.append(Entity.from_dict(doc))
    return entities


def find_entity(entities: list[Entity], name: str = "") -> Entity:
    """Pick an entity by name, or the only entity when ``name`` is empty."""
    if not entities:
        raise EntityError("No catalog entities found.")
    if not name:
        if len(entities) > 1:
            names = ", ".join(e.name for e in entities)
            raise EntityError(
                f"Catalog holds several entities ({names}). Pass entity_name to choose one."
            )
        return entities[0]
    for entity in entities:
        if entity.name == name:
            return entity
    raise EntityError(f"Entity '{name}' not found in catalog.")
