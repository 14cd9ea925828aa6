"""Catalog entity model and its canonical reference encoding.

Only the fields the sync workflow reads are typed; every other key is kept
verbatim in ``extra``. A ``from_dict``/``to_dict`` round trip is lossless
except that annotations with a null value are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from opslevel_sync.errors import EntityError

DEFAULT_NAMESPACE = "default"

_METADATA_KEYS = frozenset({"name", "namespace", "tags", "annotations"})
_ENTITY_KEYS = frozenset({"apiVersion", "kind", "metadata", "spec"})


@dataclass(slots=True)
class EntityMetadata:
    name: str
    namespace: str | None = None
    # None means the entity declares no tag list at all, which differs from [].
    tags: list[str] | None = None
    # Same for annotations: None is an absent key, {} an explicit empty mapping.
    annotations: dict[str, str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> EntityMetadata:
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise EntityError("Catalog entity is missing 'metadata.name'.")

        tags = raw.get("tags")
        if tags is not None:
            if not isinstance(tags, list):
                raise EntityError(f"Entity '{name}': 'metadata.tags' must be a list.")
            bad = [t for t in tags if not isinstance(t, str)]
            if bad:
                raise EntityError(
                    f"Entity '{name}': 'metadata.tags' must hold strings, got {bad[0]!r}."
                )

        annotations = raw.get("annotations")
        if annotations is not None:
            if not isinstance(annotations, dict):
                raise EntityError(f"Entity '{name}': 'metadata.annotations' must be a mapping.")
            annotations = _parse_annotations(name, annotations)

        return cls(
            name=name,
            namespace=raw.get("namespace"),
            tags=list(tags) if tags is not None else None,
            annotations=annotations,
            extra={k: v for k, v in raw.items() if k not in _METADATA_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.namespace is not None:
            result["namespace"] = self.namespace
        if self.tags is not None:
            result["tags"] = list(self.tags)
        if self.annotations is not None:
            result["annotations"] = dict(self.annotations)
        result.update(self.extra)
        return result


def _parse_annotations(name: str, raw: dict[Any, Any]) -> dict[str, str]:
    """Keep set annotations only. A blank YAML value (null) counts as unset."""
    annotations: dict[str, str] = {}
    for key, value in raw.items():
        if value is None:
            continue
        if not isinstance(value, str):
            raise EntityError(
                f"Entity '{name}': annotation '{key}' must be a string, got {value!r}."
            )
        annotations[str(key)] = value
    return annotations


@dataclass(slots=True)
class Entity:
    """A software-catalog entity (Backstage ``catalog-info.yaml`` shape)."""

    kind: str
    metadata: EntityMetadata
    api_version: str = "backstage.io/v1alpha1"
    spec: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.metadata.name

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Entity:
        metadata = raw.get("metadata")
        if not isinstance(metadata, dict):
            raise EntityError("Catalog entity is missing its 'metadata' mapping.")

        kind = raw.get("kind")
        if not isinstance(kind, str) or not kind:
            raise EntityError(f"Entity '{metadata.get('name', '?')}' is missing 'kind'.")

        spec = raw.get("spec")
        if spec is not None and not isinstance(spec, dict):
            raise EntityError(f"Entity '{metadata.get('name', '?')}': 'spec' must be a mapping.")

        return cls(
            kind=kind,
            metadata=EntityMetadata.from_dict(metadata),
            api_version=raw.get("apiVersion", "backstage.io/v1alpha1"),
            spec=dict(spec) if spec is not None else None,
            extra={k: v for k, v in raw.items() if k not in _ENTITY_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata.to_dict(),
        }
        if self.spec is not None:
            result["spec"] = dict(self.spec)
        result.update(self.extra)
        return result


def stringify_entity_ref(entity: Entity) -> str:
    """Encode an entity's identity as ``kind:namespace/name``.

    Kind and namespace are case-insensitive in the catalog and are
    lowercased; the name keeps its case.
    """
    namespace = entity.metadata.namespace or DEFAULT_NAMESPACE
    return f"{entity.kind.lower()}:{namespace.lower()}/{entity.metadata.name}"
