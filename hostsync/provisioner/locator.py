"""Resource locator -- read-only lookups against the provider.

Every kind maps to a provider ``*Find`` method plus the filter field names
for its id, name and status.  "Active" lookups add a status filter so
soft-deleted or otherwise inactive instances are invisible to the engine.

``find_one_by_name`` is the guard every create-or-update decision goes
through: it raises ``AmbiguousMatchError`` rather than guess which of two
instances to mutate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import BaseModel

from hostsync.provisioner.errors import AmbiguousMatchError
from hostsync.provisioner.gateway import unwrap_find
from hostsync.provisioner.models.enums import ResourceKind, ResourceStatus
from hostsync.provisioner.models.resources import Database, DatabaseUser, Vhost, Webspace, WebspaceUser

if TYPE_CHECKING:
    from hostsync.provisioner.gateway import Gateway


@dataclass(frozen=True)
class KindSpec:
    """How to query one resource kind."""

    service: str
    find_method: str
    model: type[BaseModel]
    id_field: str
    name_field: str
    status_field: str | None = None


KINDS: dict[ResourceKind, KindSpec] = {
    ResourceKind.WEBSPACE: KindSpec(
        "webhosting", "webspacesFind", Webspace, "webspaceId", "webspaceName", "webspaceStatus"
    ),
    ResourceKind.VHOST: KindSpec("webhosting", "vhostsFind", Vhost, "vHostId", "vHostDomainName", "vHostStatus"),
    ResourceKind.DATABASE: KindSpec(
        "database", "databasesFind", Database, "databaseId", "databaseName", "databaseStatus"
    ),
    ResourceKind.DATABASE_USER: KindSpec("database", "usersFind", DatabaseUser, "userId", "userName"),
    ResourceKind.WEBSPACE_USER: KindSpec("webhosting", "usersFind", WebspaceUser, "userId", "userName"),
}


def build_filter(*conditions: tuple[str, str]) -> dict[str, Any]:
    """Build a provider filter; several conditions are AND-ed."""
    if len(conditions) == 1:
        field, value = conditions[0]
        return {"field": field, "value": value}
    return {
        "subFilterConnective": "AND",
        "subFilter": [{"field": field, "value": value} for field, value in conditions],
    }


class ResourceLocator:
    """Finds existing remote resources.  Has no side effects."""

    def __init__(self, gateway: Gateway) -> None:
        self._gateway = gateway

    async def _find(
        self,
        kind: ResourceKind,
        *conditions: tuple[str, str],
        limit: int | None = None,
    ) -> tuple[list[Any], int]:
        spec = KINDS[kind]
        payload: dict[str, Any] = {"filter": build_filter(*conditions)}
        if limit is not None:
            payload["limit"] = limit
        envelope = await self._gateway.call(spec.service, spec.find_method, payload)
        data, total = unwrap_find(envelope, f"{spec.service}.{spec.find_method}")
        return [spec.model.model_validate(item) for item in data], total

    def _active(self, kind: ResourceKind) -> tuple[tuple[str, str], ...]:
        spec = KINDS[kind]
        if spec.status_field is None:
            return ()
        return ((spec.status_field, ResourceStatus.ACTIVE.value),)

    # -- Public API ------------------------------------------------------------

    async def find_by_prefix(self, kind: ResourceKind, prefix: str) -> list[Any]:
        """All active resources whose name starts with ``prefix``."""
        spec = KINDS[kind]
        resources, _ = await self._find(kind, (spec.name_field, f"{prefix}*"), *self._active(kind))
        return resources

    async def find_one_by_name(self, kind: ResourceKind, name: str) -> Any | None:
        """The single active resource called ``name``, or ``None``.

        Raises ``AmbiguousMatchError`` if more than one active resource matches.
        """
        spec = KINDS[kind]
        resources, total = await self._find(kind, (spec.name_field, name), *self._active(kind), limit=2)
        if total > 1:
            raise AmbiguousMatchError(kind.value, name, total)
        if not resources:
            logger.debug("Locator: no active {} named {}", kind, name)
            return None
        return resources[0]

    async def find_by_id(self, kind: ResourceKind, resource_id: str) -> Any | None:
        spec = KINDS[kind]
        resources, _ = await self._find(kind, (spec.id_field, resource_id), limit=1)
        return resources[0] if resources else None

    async def find_vhosts_by_webspace(self, webspace_id: str) -> list[Vhost]:
        """Active vhosts bound to a webspace."""
        resources, _ = await self._find(
            ResourceKind.VHOST, ("webspaceId", webspace_id), *self._active(ResourceKind.VHOST)
        )
        return resources

    async def find_database_accesses(self, user_name: str, database_id: str) -> list[DatabaseUser]:
        """Database users called ``user_name`` that already have access to the database."""
        resources, _ = await self._find(
            ResourceKind.DATABASE_USER, ("userName", user_name), ("userAccessesDatabaseId", database_id)
        )
        return resources
