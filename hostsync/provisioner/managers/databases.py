"""Database create, access grants and deletion.

``databaseUpdate`` replaces the whole object, but the provider only lets us
echo a fixed set of database fields; everything else (status, usage,
billing dates) is read-only and is left out of the payload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic.alias_generators import to_camel

from hostsync.provisioner.gateway import ensure_success, unwrap_result
from hostsync.provisioner.models.enums import AccessLevel
from hostsync.provisioner.models.resources import Database, DatabaseAccess

if TYPE_CHECKING:
    from hostsync.provisioner.gateway import Gateway

FULL_ACCESS: list[str] = [AccessLevel.READ.value, AccessLevel.WRITE.value, AccessLevel.SCHEMA.value]

UPDATABLE_FIELDS = ("id", "name", "product_code", "force_ssl", "storage_quota", "comments")


async def create_database(
    gateway: Gateway,
    *,
    name: str,
    user_id: str,
    comments: str,
    product_code: str,
    storage_quota: int,
    pool_id: str | None = None,
    account_id: str | None = None,
) -> Database:
    """Create a database with read/write/schema access for ``user_id``."""
    envelope = await gateway.call(
        "database",
        "databaseCreate",
        {
            "poolId": pool_id,
            "database": {
                "name": name,
                "comments": comments,
                "productCode": product_code,
                "storageQuota": storage_quota,
                "accountId": account_id,
            },
            "accesses": [{"userId": user_id, "accessLevel": FULL_ACCESS}],
        },
    )
    return Database.model_validate(unwrap_result(envelope, "database.databaseCreate"))


def with_access(database: Database, user_id: str) -> Database:
    """Return a copy of ``database`` with a full-access grant for ``user_id`` appended."""
    grant = DatabaseAccess(user_id=user_id, database_id=database.id, access_level=list(FULL_ACCESS))
    accesses = [access.model_copy(deep=True) for access in database.accesses]
    return database.model_copy(update={"accesses": [*accesses, grant]}, deep=True)


async def update_database(gateway: Gateway, database: Database) -> Database:
    """Resubmit the updatable database fields and the complete access list.

    Fields the read object did not carry are left out rather than sent as nulls.
    """
    fields = [field for field in UPDATABLE_FIELDS if field in database.model_fields_set]
    payload = {to_camel(field): getattr(database, field) for field in fields}
    envelope = await gateway.call(
        "database",
        "databaseUpdate",
        {
            "database": payload,
            "accesses": [access.to_payload(exclude_unset=True) for access in database.accesses],
        },
    )
    return Database.model_validate(unwrap_result(envelope, "database.databaseUpdate"))


async def delete_database(gateway: Gateway, database_id: str) -> None:
    envelope = await gateway.call("database", "databaseDelete", {"databaseId": database_id})
    ensure_success(envelope, "database.databaseDelete")
