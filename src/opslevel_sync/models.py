"""Domain models for opslevel-sync. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ─── Remote Payload Models ────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MutationError:
    """A validation error returned as data inside a mutation payload."""

    message: str


@dataclass(frozen=True, slots=True)
class LanguageUsage:
    """One language entry of a repository, as reported by OpsLevel.

    ``usage`` is a relative weight; entries need not sum to 1 or 100.
    """

    name: str
    usage: float


# ─── Export Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ExportRequest:
    """Variables of the import mutation, built from a prepared entity copy."""

    entity_ref: str
    entity: dict[str, Any]
    entity_alias: str

    def to_variables(self) -> dict[str, object]:
        return {
            "entityRef": self.entity_ref,
            "entity": self.entity,
            "entityAlias": self.entity_alias,
        }


@dataclass(frozen=True, slots=True)
class ImportResult:
    """Payload of the import mutation.

    Remote-side validation errors arrive here as data; callers must check
    ``ok`` rather than assume success because no exception was raised.
    """

    errors: list[MutationError] = field(default_factory=list)
    action_message: str = ""
    html_url: str = ""

    @property
    def ok(self) -> bool:
        return not self.errors


# ─── Reconcile Models ─────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ServiceUpdateInput:
    """Derived fields sent to ``serviceUpdate``. ``None`` means undefined."""

    alias: str
    language: str | None = None
    framework: str | None = None

    def to_variables(self) -> dict[str, object]:
        return {
            "alias": self.alias,
            "language": self.language,
            "framework": self.framework,
        }


@dataclass(frozen=True, slots=True)
class ServiceUpdateResult:
    """Outcome of a reconcile: what was sent and what the platform answered."""

    input: ServiceUpdateInput
    errors: list[MutationError] = field(default_factory=list)

    @property
    def alias(self) -> str:
        return self.input.alias

    @property
    def ok(self) -> bool:
        return not self.errors


# ─── Tool Results ─────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ReportToolResult:
    """Result of a report tool invocation."""

    success: bool
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ExportToolResult:
    """Result of exporting one catalog entity."""

    success: bool
    entity_name: str
    entity_ref: str = ""
    action_message: str = ""
    html_url: str = ""
    errors: list[str] = field(default_factory=list)
    message: str = ""


@dataclass(frozen=True, slots=True)
class UpdateToolResult:
    """Result of reconciling language and framework for one service."""

    success: bool
    alias: str
    language: str | None = None
    framework: str | None = None
    errors: list[str] = field(default_factory=list)
    message: str = ""
