"""Resource reconciler -- find, then create or update, one application.

Per resource the state machine is::

    LOOKUP -> absent    -> build create -> submit -> CREATED
           -> present   -> diff against normalized read state
                             -> changed   -> submit full object -> UPDATED
                             -> unchanged -> UNCHANGED
           -> ambiguous -> AmbiguousMatchError

Steps run strictly in order; a created user's id feeds the following
create call.  Nothing is rolled back: when the second step of a two-step
create fails, the orphaned user is logged as a ``PartialProvisioningHazard``
and attached to the re-raised ``RemoteOperationError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from pydantic import SecretStr

from hostsync.provisioner.context import DeploymentContext
from hostsync.provisioner.encoding.credentials import CredentialFactory
from hostsync.provisioner.encoding.schedule import encode_cron_jobs
from hostsync.provisioner.errors import AmbiguousMatchError, PartialProvisioningHazard, RemoteOperationError
from hostsync.provisioner.locator import ResourceLocator
from hostsync.provisioner.managers import databases, users, vhosts, webspaces
from hostsync.provisioner.models.enums import ReconcileAction, ResourceKind
from hostsync.provisioner.models.results import (
    DatabaseCredentials,
    DatabaseOutcome,
    DeploymentResult,
    VhostOutcome,
    WebspaceOutcome,
)

if TYPE_CHECKING:
    from hostsync.provisioner.gateway import Gateway
    from hostsync.provisioner.models.manifest import Manifest, WebSettings
    from hostsync.provisioner.models.resources import CronJob, Database, Webspace
    from hostsync.provisioner.settings import HostSyncSettings


class Reconciler:
    """Reconciles the resources of one manifest application against the provider.

    Holds no state between calls beyond its collaborators; every run reads
    the current remote state fresh through the locator.
    """

    def __init__(
        self,
        gateway: Gateway,
        settings: HostSyncSettings,
        *,
        locator: ResourceLocator | None = None,
        credentials: CredentialFactory | None = None,
    ) -> None:
        self._gateway = gateway
        self._settings = settings
        self._locator = locator or ResourceLocator(gateway)
        self._credentials = credentials or CredentialFactory()

    # -- Entry point -----------------------------------------------------------

    async def deploy(
        self,
        manifest: Manifest,
        app_key: str,
        *,
        deployment: str | None = None,
        project: str | None = None,
    ) -> DeploymentResult:
        """Reconcile webspace, vhosts and databases of ``applications.{app_key}``."""
        ctx = DeploymentContext.resolve(manifest, app_key, self._settings, deployment=deployment, project=project)
        logger.info("Deploying application {} as {}", app_key, ctx.webspace_name)

        webspace = await self.reconcile_webspace(ctx)
        result = DeploymentResult(app_key=app_key, webspace=webspace)
        for domain_name, web in ctx.app.web.items():
            result.vhosts.append(await self.reconcile_vhost(ctx, webspace.webspace, domain_name, web))
        for alias, logical_name in ctx.app.databases.items():
            result.databases.append(await self.reconcile_database(ctx, alias, logical_name))
        return result

    # -- Webspace --------------------------------------------------------------

    async def reconcile_webspace(self, ctx: DeploymentContext) -> WebspaceOutcome:
        cron_jobs = encode_cron_jobs(ctx.app.cron, ctx.php_version, comments=self._settings.managed_comment)
        current = await self._locator.find_one_by_name(ResourceKind.WEBSPACE, ctx.webspace_name)

        if current is None:
            webspace = await self._create_webspace(ctx, cron_jobs)
            logger.info("Webspace {} created (id={})", webspace.name, webspace.id)
            return WebspaceOutcome(action=ReconcileAction.CREATED, webspace=webspace)

        desired = webspaces.diff_webspace(current, cron_jobs=cron_jobs, redis_enabled=ctx.app.redis)
        if desired is None:
            logger.info("Webspace {} is up to date (id={})", current.name, current.id)
            return WebspaceOutcome(action=ReconcileAction.UNCHANGED, webspace=current)

        webspace = await webspaces.update_webspace(self._gateway, desired)
        logger.info("Webspace {} updated (id={})", webspace.name, webspace.id)
        return WebspaceOutcome(action=ReconcileAction.UPDATED, webspace=webspace)

    async def _create_webspace(self, ctx: DeploymentContext, cron_jobs: list[CronJob]) -> Webspace:
        ssh_key = self._settings.require_ssh_public_key()
        user = await users.create_webspace_user(
            self._gateway,
            name=ctx.webspace_user_name,
            ssh_key=ssh_key,
            password=self._credentials.new_credential(),
            comment=self._settings.managed_comment,
        )
        logger.info("Webspace user {} created (id={})", user.name, user.id)

        try:
            return await webspaces.create_webspace(
                self._gateway,
                name=ctx.webspace_name,
                user_id=user.id,
                cron_jobs=cron_jobs,
                comments=self._settings.managed_comment,
                product_code=self._settings.webspace_product_code,
                redis_enabled=bool(ctx.app.redis),
                pool_id=ctx.app.pool,
                account_id=ctx.app.account,
            )
        except RemoteOperationError as exc:
            exc.hazard = _report_hazard("webspace user creation", "webspace creation", user.id, user.name)
            raise

    # -- Vhosts ----------------------------------------------------------------

    async def reconcile_vhost(
        self, ctx: DeploymentContext, webspace: Webspace, domain_name: str, web: WebSettings
    ) -> VhostOutcome:
        """Create the vhost for ``domain_name`` unless the webspace already serves it.

        Existing vhosts are never modified.  More than one active vhost for the
        domain raises ``AmbiguousMatchError`` before anything is created.
        """
        if not webspace.id:
            msg = f'webspace "{webspace.name}" has no id'
            raise RemoteOperationError("webhosting.vhostsFind", msg)

        existing = await self._locator.find_vhosts_by_webspace(webspace.id)
        matches = [vhost for vhost in existing if vhost.domain_name == domain_name]
        if len(matches) > 1:
            raise AmbiguousMatchError(ResourceKind.VHOST.value, domain_name, len(matches))
        if matches:
            (vhost,) = matches
            logger.info("Vhost {} already exists (id={})", domain_name, vhost.id)
            return VhostOutcome(action=ReconcileAction.UNCHANGED, vhost=vhost)

        desired = vhosts.build_vhost(
            webspace_id=webspace.id,
            domain_name=domain_name,
            web=web,
            php_version=ctx.php_version,
            web_root_prefix=self._settings.web_root_prefix,
            ssl_profile=self._settings.ssl_profile,
            ssl_product_code=self._settings.ssl_product_code,
        )
        vhost = await vhosts.create_vhost(self._gateway, desired, vhosts.php_ini_values(ctx.app.php.ini))
        logger.info("Vhost {} created (id={})", vhost.domain_name, vhost.id)
        return VhostOutcome(action=ReconcileAction.CREATED, vhost=vhost)

    # -- Databases -------------------------------------------------------------

    async def reconcile_database(self, ctx: DeploymentContext, alias: str, logical_name: str) -> DatabaseOutcome:
        """Create the database, or grant this deployment access to an existing one.

        Credentials are only returned when a new database user was created.
        """
        name = ctx.database_name(logical_name)
        user_name = ctx.database_user_name(alias)
        current = await self._locator.find_one_by_name(ResourceKind.DATABASE, name)

        if current is None:
            database, credentials = await self._create_database(ctx, name, user_name)
            logger.info("Database {} created (id={})", database.name, database.id)
            return DatabaseOutcome(
                alias=alias, action=ReconcileAction.CREATED, database=database, credentials=credentials
            )

        if await self._locator.find_database_accesses(user_name, current.id):
            logger.info("Database {} already grants access to {}", current.name, user_name)
            return DatabaseOutcome(alias=alias, action=ReconcileAction.UNCHANGED, database=current)

        database, credentials = await self._add_database_access(ctx, current, user_name)
        logger.info("Database {} access added for {}", database.name, user_name)
        return DatabaseOutcome(alias=alias, action=ReconcileAction.UPDATED, database=database, credentials=credentials)

    async def _create_database(
        self, ctx: DeploymentContext, name: str, user_name: str
    ) -> tuple[Database, DatabaseCredentials]:
        password = self._credentials.new_credential()
        user = await users.create_database_user(
            self._gateway,
            name=user_name,
            password=password,
            comment=self._settings.managed_comment,
            account_id=ctx.app.account,
        )
        try:
            database = await databases.create_database(
                self._gateway,
                name=name,
                user_id=user.id,
                comments=self._settings.managed_comment,
                product_code=self._settings.database_product_code,
                storage_quota=self._settings.database_storage_quota,
                pool_id=ctx.app.pool,
                account_id=ctx.app.account,
            )
        except RemoteOperationError as exc:
            exc.hazard = _report_hazard("database user creation", "database creation", user.id, user.name)
            raise
        return database, _credentials_for(database, user.id, user.name, password)

    async def _add_database_access(
        self, ctx: DeploymentContext, current: Database, user_name: str
    ) -> tuple[Database, DatabaseCredentials]:
        password = self._credentials.new_credential()
        user = await users.create_database_user(
            self._gateway,
            name=user_name,
            password=password,
            comment=self._settings.managed_comment,
            account_id=ctx.app.account,
        )
        try:
            database = await databases.update_database(self._gateway, databases.with_access(current, user.id))
        except RemoteOperationError as exc:
            exc.hazard = _report_hazard("database user creation", "database access grant", user.id, user.name)
            raise
        return database, _credentials_for(database, user.id, user.name, password)


# -- Helpers -------------------------------------------------------------------


def _credentials_for(database: Database, user_id: str, user_name: str, password: str) -> DatabaseCredentials:
    """The login is assigned by the provider and only visible on the grant."""
    access = database.access_for(user_id)
    login = access.db_login if access is not None and access.db_login else user_name
    return DatabaseCredentials(user_name=login, password=SecretStr(password))


def _report_hazard(completed: str, failed: str, orphaned_id: str, orphaned_name: str) -> PartialProvisioningHazard:
    hazard = PartialProvisioningHazard(
        completed_step=completed,
        failed_step=failed,
        orphaned_id=orphaned_id,
        orphaned_name=orphaned_name,
    )
    logger.warning("Partial provisioning: {}", hazard.describe())
    return hazard
