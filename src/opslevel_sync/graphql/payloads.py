"""Helpers for walking GraphQL ``data`` payloads into typed records."""

from __future__ import annotations

from typing import Any

from opslevel_sync.errors import ResponseShapeError
from opslevel_sync.models import MutationError


def dig(data: dict[str, Any], *path: str) -> Any:
    """Follow ``path`` through nested mappings.

    Returns ``None`` when the final key holds null. Raises
    ResponseShapeError when an intermediate value is not a mapping.
    """
    current: Any = data
    walked: list[str] = []
    for key in path:
        if not isinstance(current, dict):
            where = ".".join(walked) or "<root>"
            raise ResponseShapeError(f"Expected an object at '{where}' in GraphQL response.")
        current = current.get(key)
        walked.append(key)
    return current


def parse_mutation_errors(payload: dict[str, Any]) -> list[MutationError]:
    """Parse the ``errors { message }`` selection of a mutation payload."""
    raw = payload.get("errors") or []
    if not isinstance(raw, list):
        raise ResponseShapeError("Mutation payload 'errors' must be a list.")
    errors = []
    for err in raw:
        if isinstance(err, dict):
            errors.append(MutationError(message=str(err.get("message", ""))))
        else:
            errors.append(MutationError(message=str(err)))
    return errors
