"""Webspace and database user creation.

The caller supplies the password; it is sent once and never read back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hostsync.provisioner.gateway import unwrap_result
from hostsync.provisioner.models.resources import DatabaseUser, WebspaceUser

if TYPE_CHECKING:
    from hostsync.provisioner.gateway import Gateway


async def create_webspace_user(
    gateway: Gateway,
    *,
    name: str,
    ssh_key: str,
    password: str,
    comment: str,
) -> WebspaceUser:
    """Create an SSH-enabled webspace user.  Raises ``RemoteOperationError``."""
    envelope = await gateway.call(
        "webhosting",
        "userCreate",
        {
            "user": {"sshKey": ssh_key, "name": name, "comment": comment},
            "password": password,
        },
    )
    return WebspaceUser.model_validate(unwrap_result(envelope, "webhosting.userCreate"))


async def create_database_user(
    gateway: Gateway,
    *,
    name: str,
    password: str,
    comment: str,
    account_id: str | None = None,
) -> DatabaseUser:
    """Create a database user.  Raises ``RemoteOperationError``."""
    envelope = await gateway.call(
        "database",
        "userCreate",
        {
            "user": {"name": name, "comment": comment, "accountId": account_id},
            "password": password,
        },
    )
    return DatabaseUser.model_validate(unwrap_result(envelope, "database.userCreate"))
