import asyncio
import json
import sys

import click

from hostsync.provisioner.errors import AmbiguousMatchError, ConfigurationError, HostSyncError, RemoteOperationError

EXIT_CODES: dict[type[HostSyncError], int] = {
    ConfigurationError: 2,
    AmbiguousMatchError: 3,
    RemoteOperationError: 4,
}


def _exit_code(exc: HostSyncError) -> int:
    for kind, code in EXIT_CODES.items():
        if isinstance(exc, kind):
            return code
    return 1


def _run(coro) -> object:
    """Run a coroutine, turning domain errors into a message and exit code."""
    try:
        return asyncio.run(coro)
    except HostSyncError as exc:
        click.echo(f"Error: {exc}", err=True)
        hazard = getattr(exc, "hazard", None)
        if hazard is not None:
            click.echo(f"Warning: {hazard.describe()}", err=True)
        sys.exit(_exit_code(exc))


def _settings():
    from hostsync.provisioner.log import setup_logging
    from hostsync.provisioner.settings import get_settings

    settings = get_settings()
    secrets = [secret.get_secret_value() for secret in (settings.auth_token, settings.ssh_public_key) if secret]
    setup_logging(settings.log_level, secrets=secrets)
    return settings


manifest_option = click.option(
    "--manifest", "manifest_path", default=None, help="Manifest path (default: HOSTSYNC_MANIFEST_PATH)."
)
project_option = click.option(
    "--project", default=None, help="Resource name prefix (default: manifest project.prefix)."
)


@click.group()
def main() -> None:
    """hostsync - reconcile hosting.de webspaces from a deployment manifest."""


@main.command()
@click.argument("app_key")
@click.option("--name", default=None, help="Deployment name appended to the project prefix (default: APP_KEY).")
@manifest_option
@project_option
@click.option("--hide-secrets", is_flag=True, default=False, help="Mask generated database passwords in the output.")
def deploy(app_key: str, name: str | None, manifest_path: str | None, project: str | None, hide_secrets: bool) -> None:
    """Create or update the resources of application APP_KEY."""
    from hostsync.provisioner.gateway import ApiGateway
    from hostsync.provisioner.manifest import load_manifest
    from hostsync.provisioner.reconciler import Reconciler

    settings = _settings()

    async def _deploy():
        manifest = load_manifest(manifest_path or settings.manifest_path)
        async with ApiGateway.from_settings(settings) as gateway:
            reconciler = Reconciler(gateway, settings)
            return await reconciler.deploy(manifest, app_key, deployment=name, project=project)

    result = _run(_deploy())
    click.echo(json.dumps(result.outputs(reveal_secrets=not hide_secrets), indent=2))


@main.command()
@click.option("--keep", multiple=True, help="Deployment name to keep (repeatable).")
@click.option("--databases", "include_databases", is_flag=True, help="Also prune unreferenced databases.")
@click.option("--dry-run", is_flag=True, default=False, help="Only report what would be deleted.")
@manifest_option
@project_option
def prune(
    keep: tuple[str, ...], include_databases: bool, dry_run: bool, manifest_path: str | None, project: str | None
) -> None:
    """Delete project deployments that are not listed with --keep."""
    from hostsync.provisioner.context import resolve_project
    from hostsync.provisioner.gateway import ApiGateway
    from hostsync.provisioner.manifest import load_manifest
    from hostsync.provisioner.pruner import Pruner

    settings = _settings()

    async def _prune():
        manifest = load_manifest(manifest_path or settings.manifest_path)
        prefix = resolve_project(manifest, settings, project)
        async with ApiGateway.from_settings(settings) as gateway:
            return await Pruner(gateway).prune(
                manifest, prefix, keep=keep, include_databases=include_databases, dry_run=dry_run
            )

    report = _run(_prune())
    click.echo(report.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
