"""Prune deployments that are no longer wanted.

Only resources under the project's ``{project}-`` prefix are considered;
anything else on the account is invisible here.  A webspace's active
vhosts are deleted before the webspace itself.  Databases are shared
between deployments and are only pruned on request, when no application
in the manifest references them any more.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from loguru import logger

from hostsync.provisioner.errors import ConfigurationError
from hostsync.provisioner.locator import ResourceLocator
from hostsync.provisioner.managers import databases, vhosts, webspaces
from hostsync.provisioner.models.enums import ResourceKind
from hostsync.provisioner.models.results import PruneReport

if TYPE_CHECKING:
    from hostsync.provisioner.gateway import Gateway
    from hostsync.provisioner.models.manifest import Manifest


class Pruner:
    def __init__(self, gateway: Gateway, *, locator: ResourceLocator | None = None) -> None:
        self._gateway = gateway
        self._locator = locator or ResourceLocator(gateway)

    async def prune(
        self,
        manifest: Manifest,
        project: str,
        *,
        keep: Iterable[str] = (),
        include_databases: bool = False,
        dry_run: bool = False,
    ) -> PruneReport:
        """Delete every ``{project}-*`` webspace whose deployment name is not in ``keep``.

        Raises ``ConfigurationError`` unless the manifest sets ``project.prune``.
        """
        if not manifest.project.prune:
            msg = "Pruning is disabled for this project (set project.prune: true in the manifest)."
            raise ConfigurationError(msg)

        prefix = f"{project}-"
        keep_names = {f"{prefix}{name}" for name in keep}
        report = PruneReport(dry_run=dry_run)

        for webspace in await self._locator.find_by_prefix(ResourceKind.WEBSPACE, prefix):
            if webspace.name in keep_names:
                continue
            for vhost in await self._locator.find_vhosts_by_webspace(webspace.id):
                logger.info("Prune: vhost {} (id={}){}", vhost.domain_name, vhost.id, _suffix(dry_run))
                if not dry_run:
                    await vhosts.delete_vhost(self._gateway, vhost.id)
                report.vhosts.append(vhost.domain_name)
            logger.info("Prune: webspace {} (id={}){}", webspace.name, webspace.id, _suffix(dry_run))
            if not dry_run:
                await webspaces.delete_webspace(self._gateway, webspace.id)
            report.webspaces.append(webspace.name)

        if include_databases:
            referenced = {
                f"{prefix}{logical_name}"
                for app in manifest.applications.values()
                for logical_name in app.databases.values()
            }
            for database in await self._locator.find_by_prefix(ResourceKind.DATABASE, prefix):
                if database.name in referenced:
                    continue
                logger.info("Prune: database {} (id={}){}", database.name, database.id, _suffix(dry_run))
                if not dry_run:
                    await databases.delete_database(self._gateway, database.id)
                report.databases.append(database.name)

        return report


def _suffix(dry_run: bool) -> str:
    return " [dry run]" if dry_run else ""
