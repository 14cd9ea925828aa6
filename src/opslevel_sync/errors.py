"""Exception hierarchy for opslevel-sync.

All exceptions inherit from OpsLevelSyncError (single catch point).
Messages are written to be actionable -- they name the alias, file or
setting that needs attention.
"""

from __future__ import annotations


class OpsLevelSyncError(Exception):
    """Base exception for all opslevel-sync errors."""


class ConfigError(OpsLevelSyncError):
    """Settings are missing or malformed."""


class EntityError(OpsLevelSyncError):
    """A catalog entity lacks a field the sync workflow requires."""


class TransportError(OpsLevelSyncError):
    """The GraphQL endpoint was unreachable or answered with a non-success status."""


class ResponseShapeError(OpsLevelSyncError):
    """The GraphQL response did not have the shape the request declared."""


class GraphQLError(OpsLevelSyncError):
    """The GraphQL endpoint reported request-level errors."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        joined = "; ".join(self.messages) or "unknown error"
        super().__init__(f"GraphQL request failed: {joined}")


class ServiceNotFoundError(OpsLevelSyncError):
    """No service with the given alias exists on the remote platform."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(
            f"Service '{alias}' not found in OpsLevel. "
            "Export the catalog entity first or check the alias."
        )
