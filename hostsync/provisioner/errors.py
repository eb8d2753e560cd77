"""Domain exceptions raised by the provisioner.

Managers and the reconciler raise these, never ``SystemExit`` or click
exceptions -- translating them into exit codes is the CLI's responsibility.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class HostSyncError(Exception):
    """Base class for all provisioner errors."""


class ConfigurationError(HostSyncError, ValueError):
    """The manifest or settings are missing something required."""


class InvalidCronJobError(ConfigurationError):
    """A cron entry cannot be encoded."""


class AmbiguousMatchError(HostSyncError, LookupError):
    """More than one active resource matches a name that must be unique."""

    def __init__(self, kind: str, name: str, count: int) -> None:
        super().__init__(
            f'Found {count} active {kind} resources named "{name}" and cannot know which one to deploy to. '
            "Remove the duplicates on the provider side."
        )
        self.kind = kind
        self.name = name
        self.count = count


@dataclass(frozen=True)
class PartialProvisioningHazard:
    """An earlier step of a multi-step create succeeded and a later one failed.

    Nothing is rolled back.  The orphaned resource stays on the provider and a
    re-run will create a fresh one next to it.
    """

    completed_step: str
    failed_step: str
    orphaned_id: str | None
    orphaned_name: str

    def describe(self) -> str:
        return (
            f"{self.completed_step} succeeded but {self.failed_step} failed; "
            f'"{self.orphaned_name}" (id={self.orphaned_id}) is left behind and must be removed manually'
        )


class RemoteOperationError(HostSyncError, RuntimeError):
    """The provider rejected a call or returned no result envelope.

    ``errors`` is the provider's raw error payload, kept verbatim for
    operator diagnosis.
    """

    def __init__(
        self,
        operation: str,
        errors: Any = None,
        *,
        status_code: int | None = None,
        hazard: PartialProvisioningHazard | None = None,
    ) -> None:
        detail = "no result returned" if errors is None else repr(errors)
        super().__init__(f"{operation} failed: {detail}")
        self.operation = operation
        self.errors = errors
        self.status_code = status_code
        self.hazard = hazard
