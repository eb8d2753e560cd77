"""Reconciliation result models returned to the caller."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

from hostsync.provisioner.models.enums import ReconcileAction
from hostsync.provisioner.models.resources import Database, Vhost, Webspace


class DatabaseCredentials(BaseModel):
    """Freshly generated login.  Returned exactly once, at creation time."""

    user_name: str
    password: SecretStr


class WebspaceOutcome(BaseModel):
    action: ReconcileAction
    webspace: Webspace


class VhostOutcome(BaseModel):
    action: ReconcileAction
    vhost: Vhost


class DatabaseOutcome(BaseModel):
    alias: str
    action: ReconcileAction
    database: Database
    credentials: DatabaseCredentials | None = Field(
        default=None, description="Only set when a new database user was created during this run"
    )


class DeploymentResult(BaseModel):
    app_key: str
    webspace: WebspaceOutcome
    vhosts: list[VhostOutcome] = Field(default_factory=list)
    databases: list[DatabaseOutcome] = Field(default_factory=list)

    def outputs(self, *, reveal_secrets: bool = False) -> dict:
        """Flat summary for the CLI; passwords stay masked unless ``reveal_secrets``."""
        databases = {}
        for outcome in self.databases:
            entry: dict = {"action": outcome.action, "name": outcome.database.name, "id": outcome.database.id}
            if outcome.credentials is not None:
                password = outcome.credentials.password
                entry["user"] = outcome.credentials.user_name
                entry["password"] = password.get_secret_value() if reveal_secrets else str(password)
            databases[outcome.alias] = entry
        return {
            "app": self.app_key,
            "webspace": {
                "action": self.webspace.action,
                "id": self.webspace.webspace.id,
                "name": self.webspace.webspace.name,
            },
            "vhosts": [
                {"action": v.action, "id": v.vhost.id, "domain": v.vhost.domain_name} for v in self.vhosts
            ],
            "databases": databases,
        }


class PruneReport(BaseModel):
    """Names of the resources a prune run deleted (or would delete on a dry run)."""

    dry_run: bool = False
    webspaces: list[str] = Field(default_factory=list)
    vhosts: list[str] = Field(default_factory=list)
    databases: list[str] = Field(default_factory=list)
