"""Deployment context.

Resolves the naming convention once per invocation so every reconciliation
step derives remote names the same way::

    webspace        {project}-{deployment}
    webspace user   {managed_user_prefix}{project}-{deployment}
    database        {project}-{logical name}
    database user   {project}-{deployment}-{alias}

Only resources under the ``{project}-`` prefix are ever adopted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hostsync.provisioner.errors import ConfigurationError

if TYPE_CHECKING:
    from hostsync.provisioner.models.manifest import Manifest, ManifestApp
    from hostsync.provisioner.settings import HostSyncSettings


@dataclass(frozen=True)
class DeploymentContext:
    """Everything the reconciler needs to know about one application deploy."""

    # -- Identity --------------------------------------------------------------
    project: str
    app_key: str
    deployment: str
    app: ManifestApp

    # -- Resolved settings -----------------------------------------------------
    php_version: str | None = None
    managed_user_prefix: str = ""

    @classmethod
    def resolve(
        cls,
        manifest: Manifest,
        app_key: str,
        settings: HostSyncSettings,
        *,
        deployment: str | None = None,
        project: str | None = None,
    ) -> DeploymentContext:
        """Build the context.

        Project prefix precedence: explicit argument -> manifest
        ``project.prefix`` -> ``HOSTSYNC_PROJECT``.  PHP version precedence:
        manifest ``php.version`` -> ``HOSTSYNC_PHP_VERSION`` -> unset.
        """
        app = manifest.application(app_key)
        return cls(
            project=resolve_project(manifest, settings, project),
            app_key=app_key,
            deployment=deployment or app_key,
            app=app,
            php_version=app.php.version or settings.php_version,
            managed_user_prefix=settings.managed_user_prefix,
        )

    # -- Derived names ---------------------------------------------------------

    @property
    def webspace_name(self) -> str:
        return f"{self.project}-{self.deployment}"

    @property
    def webspace_user_name(self) -> str:
        return f"{self.managed_user_prefix}{self.webspace_name}"

    def database_name(self, logical_name: str) -> str:
        return f"{self.project}-{logical_name}"

    def database_user_name(self, alias: str) -> str:
        return f"{self.webspace_name}-{alias}"


def resolve_project(manifest: Manifest, settings: HostSyncSettings, project: str | None = None) -> str:
    """Explicit argument -> manifest ``project.prefix`` -> ``HOSTSYNC_PROJECT``."""
    prefix = project or manifest.project.prefix or settings.project
    if not prefix:
        msg = "No project prefix configured (set project.prefix in the manifest or HOSTSYNC_PROJECT)."
        raise ConfigurationError(msg)
    return prefix
