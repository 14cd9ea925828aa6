"""Derive a service's primary language and framework.

Pure functions of their inputs: no I/O and no hidden state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from opslevel_sync.catalog.entity import Entity
from opslevel_sync.graphql.queries import FRAMEWORK_ANNOTATION
from opslevel_sync.models import LanguageUsage, ServiceUpdateInput


def primary_language(languages: Sequence[LanguageUsage]) -> str | None:
    """Name of the entry with the highest usage; the first one wins ties."""
    best: LanguageUsage | None = None
    for lang in languages:
        if best is None or lang.usage > best.usage:
            best = lang
    return best.name if best is not None else None


def resolve_framework(
    tags: Iterable[str] | None,
    annotations: Mapping[str, str] | None,
    frameworks: Iterable[str],
) -> str | None:
    """Pick the framework label for a service.

    The ``opslevel.com/framework`` annotation wins. Otherwise the first tag,
    in tag order, that is a configured framework. Otherwise None.
    """
    if annotations:
        annotated = annotations.get(FRAMEWORK_ANNOTATION)
        if annotated is not None:
            return annotated

    known = frozenset(frameworks)
    for tag in tags or ():
        if tag in known:
            return tag
    return None


def build_update_input(
    entity: Entity,
    languages: Sequence[LanguageUsage],
    frameworks: Iterable[str],
) -> ServiceUpdateInput:
    return ServiceUpdateInput(
        alias=entity.name,
        language=primary_language(languages),
        framework=resolve_framework(
            entity.metadata.tags, entity.metadata.annotations, frameworks
        ),
    )
