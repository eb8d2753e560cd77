"""Unit tests for manifest loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from hostsync.provisioner.errors import ConfigurationError
from hostsync.provisioner.manifest import load_manifest, parse_manifest
from hostsync.provisioner.models.manifest import CronjobConfig, Manifest


def test_sample_manifest(manifest: Manifest) -> None:
    app = manifest.application("app")

    assert manifest.project.prefix == "proj"
    assert manifest.project.prune is True
    assert app.php.version == "8.2"
    assert app.php.ini == {"memory_limit": "256M", "display_errors": False}
    assert app.databases == {"main": "shop"}
    assert app.redis is None
    assert list(app.web) == ["proj.example.com"]
    assert app.web["proj.example.com"].www is False
    assert app.web["proj.example.com"].locations["/assets"].passthru is False
    assert app.web["proj.example.com"].locations["^/api"].passthru == "/index.php"
    assert app.web["proj.example.com"].locations["/private"].passthru is None


def test_yaml_on_key_is_read_as_schedule_field(manifest: Manifest) -> None:
    weekly, daily = manifest.application("app").cron

    assert weekly.every == "week"
    assert weekly.on == "Fri"
    assert daily.on is None


def test_cronjob_config_accepts_plain_on() -> None:
    assert CronjobConfig.model_validate({"cmd": "./a.sh", "every": "month", "on": 3}).on == 3


def test_missing_application() -> None:
    with pytest.raises(ConfigurationError, match='Cannot find "applications.api" in the manifest.'):
        parse_manifest("applications: {web: {}}").application("api")


def test_empty_manifest() -> None:
    manifest = parse_manifest("")

    assert manifest.applications == {}
    assert manifest.project.prune is False


@pytest.mark.parametrize(
    "text",
    [
        "applications: [",
        "- just\n- a list\n",
        "applications: {app: {cron: [{php: run.php, every: [1, 2]}]}}",
    ],
    ids=["yaml", "not-a-mapping", "schema"],
)
def test_invalid_manifest(text: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_manifest(text)


def test_load_manifest(tmp_path: Path) -> None:
    path = tmp_path / ".hosting" / "config.yaml"
    path.parent.mkdir()
    path.write_text("project:\n  prefix: shop\napplications:\n  app:\n    redis: true\n", encoding="utf-8")

    manifest = load_manifest(path)

    assert manifest.project.prefix == "shop"
    assert manifest.application("app").redis is True


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Manifest not found"):
        load_manifest(tmp_path / "absent.yaml")
