"""Webspace create, diff, update and delete.

``webspaceUpdate`` is a full-object replace: the whole webspace, as read,
is resubmitted with only the owned fields (cron jobs, ``redisEnabled``)
overridden.  ``diff_webspace`` produces that new value without touching the
object it was given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hostsync.provisioner.gateway import ensure_success, unwrap_result
from hostsync.provisioner.models.resources import CronJob, Webspace

if TYPE_CHECKING:
    from hostsync.provisioner.gateway import Gateway


async def create_webspace(
    gateway: Gateway,
    *,
    name: str,
    user_id: str,
    cron_jobs: list[CronJob],
    comments: str,
    product_code: str,
    redis_enabled: bool = False,
    pool_id: str | None = None,
    account_id: str | None = None,
) -> Webspace:
    """Create a webspace granting SSH access to ``user_id``.  Raises ``RemoteOperationError``."""
    envelope = await gateway.call(
        "webhosting",
        "webspaceCreate",
        {
            "poolId": pool_id,
            "webspace": {
                "name": name,
                "accountId": account_id,
                "comments": comments,
                "productCode": product_code,
                "cronJobs": [job.to_payload() for job in cron_jobs],
                "redisEnabled": redis_enabled,
            },
            "accesses": [{"userId": user_id, "sshAccess": True}],
        },
    )
    return Webspace.model_validate(unwrap_result(envelope, "webhosting.webspaceCreate"))


def same_cron_jobs(current: list[CronJob], desired: list[CronJob]) -> bool:
    return [job.normalized() for job in current] == [job.normalized() for job in desired]


def diff_webspace(
    current: Webspace,
    *,
    cron_jobs: list[CronJob] | None = None,
    redis_enabled: bool | None = None,
) -> Webspace | None:
    """Return ``current`` with the owned fields overridden, or ``None`` if nothing changes.

    ``None`` arguments mean "not owned": the read value is kept.
    """
    changes: dict = {}
    if cron_jobs is not None and not same_cron_jobs(current.cron_jobs, cron_jobs):
        # Replacement jobs are sent with every field, defaults included.
        changes["cron_jobs"] = [CronJob.model_validate(job.model_dump()) for job in cron_jobs]
    if redis_enabled is not None and redis_enabled != current.redis_enabled:
        changes["redis_enabled"] = redis_enabled
    if not changes:
        return None
    return current.model_copy(update=changes, deep=True)


async def update_webspace(gateway: Gateway, webspace: Webspace) -> Webspace:
    """Submit the webspace together with its (unchanged) access list.

    Only keys present in the read object, plus the overridden owned fields,
    are sent; defaults of fields the provider never returned are not added.
    """
    envelope = await gateway.call(
        "webhosting",
        "webspaceUpdate",
        {
            "webspace": webspace.to_payload(exclude_unset=True),
            "accesses": [access.to_payload(exclude_unset=True) for access in webspace.accesses],
        },
    )
    return Webspace.model_validate(unwrap_result(envelope, "webhosting.webspaceUpdate"))


async def delete_webspace(gateway: Gateway, webspace_id: str) -> None:
    envelope = await gateway.call("webhosting", "webspaceDelete", {"webspaceId": webspace_id})
    ensure_success(envelope, "webhosting.webspaceDelete")
