"""Unit tests for result summaries and error messages."""

from __future__ import annotations

from pydantic import SecretStr

from hostsync.provisioner.errors import AmbiguousMatchError, PartialProvisioningHazard, RemoteOperationError
from hostsync.provisioner.models.enums import ReconcileAction
from hostsync.provisioner.models.resources import Database, Webspace
from hostsync.provisioner.models.results import (
    DatabaseCredentials,
    DatabaseOutcome,
    DeploymentResult,
    WebspaceOutcome,
)


def _result() -> DeploymentResult:
    return DeploymentResult(
        app_key="app",
        webspace=WebspaceOutcome(action=ReconcileAction.UNCHANGED, webspace=Webspace(id="ws-1", name="proj-app")),
        databases=[
            DatabaseOutcome(
                alias="main",
                action=ReconcileAction.CREATED,
                database=Database(id="db-1", name="proj-shop"),
                credentials=DatabaseCredentials(user_name="dbu1", password=SecretStr("hunter2")),
            ),
            DatabaseOutcome(
                alias="stats",
                action=ReconcileAction.UNCHANGED,
                database=Database(id="db-2", name="proj-analytics"),
            ),
        ],
    )


def test_outputs_mask_passwords_by_default() -> None:
    outputs = _result().outputs()

    assert outputs["app"] == "app"
    assert outputs["webspace"] == {"action": "unchanged", "id": "ws-1", "name": "proj-app"}
    assert outputs["vhosts"] == []
    assert outputs["databases"]["main"]["user"] == "dbu1"
    assert outputs["databases"]["main"]["password"] != "hunter2"
    assert outputs["databases"]["stats"] == {"action": "unchanged", "name": "proj-analytics", "id": "db-2"}


def test_outputs_reveal_secrets() -> None:
    assert _result().outputs(reveal_secrets=True)["databases"]["main"]["password"] == "hunter2"


def test_remote_operation_error_message() -> None:
    assert str(RemoteOperationError("database.databaseCreate")) == "database.databaseCreate failed: no result returned"
    exc = RemoteOperationError("webhosting.userCreate", [{"code": 1}], status_code=500)
    assert str(exc) == "webhosting.userCreate failed: [{'code': 1}]"
    assert exc.hazard is None


def test_ambiguous_match_error_is_lookup_error() -> None:
    exc = AmbiguousMatchError("database", "proj-shop", 2)

    assert isinstance(exc, LookupError)
    assert 'named "proj-shop"' in str(exc)


def test_hazard_description() -> None:
    hazard = PartialProvisioningHazard(
        completed_step="database user creation",
        failed_step="database creation",
        orphaned_id="u-1",
        orphaned_name="proj-app-main",
    )

    assert hazard.describe().startswith("database user creation succeeded but database creation failed")
    assert '"proj-app-main" (id=u-1)' in hazard.describe()
