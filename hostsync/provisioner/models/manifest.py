"""Deployment manifest models.

Pure pydantic models for the ``.hosting/config.yaml`` manifest.  Loading and
YAML parsing live in ``hostsync.provisioner.manifest``; everything here is
already-structured data.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from hostsync.provisioner.errors import ConfigurationError

# -- Project -----------------------------------------------------------------


class ProjectSettings(BaseModel):
    prefix: str | None = Field(default=None, description="Name prefix shared by all remote resources of the project")
    parent: str | None = None
    domain: str | None = None
    prune: bool = False


# -- Application components --------------------------------------------------


class PhpSettings(BaseModel):
    version: str | None = None
    ini: dict[str, str | bool | int | float] = Field(default_factory=dict)


class CronjobConfig(BaseModel):
    """One ``cron`` entry: exactly one of ``php`` / ``cmd`` plus a recurrence."""

    php: str | None = None
    cmd: str | None = None
    every: str = "day"
    on: str | int | None = None

    @model_validator(mode="before")
    @classmethod
    def _yaml_on_key(cls, data: Any) -> Any:
        # YAML 1.1 loads a bare `on:` key as boolean True.
        if isinstance(data, dict) and True in data:
            data = dict(data)
            data.setdefault("on", data.pop(True))
        return data


class LocationSpec(BaseModel):
    """Handling policy for a single ``locations`` match string.

    ``passthru`` is tri-state: a script path, ``False``, or unset.
    """

    passthru: str | bool | None = None
    allow: bool | None = None
    expires: bool | None = None


class WebSettings(BaseModel):
    root: str | None = None
    www: bool = True
    locations: dict[str, LocationSpec] = Field(default_factory=dict)


class ManifestApp(BaseModel):
    """A single ``applications.{key}`` section."""

    pool: str | None = None
    account: str | None = None
    php: PhpSettings = Field(default_factory=PhpSettings)
    env: dict[str, str | bool | int | float] = Field(default_factory=dict)
    redis: bool | None = Field(default=None, description="Owned feature flag; unset leaves the remote value alone")
    databases: dict[str, str] = Field(default_factory=dict, description="alias -> logical database name")
    cron: list[CronjobConfig] = Field(default_factory=list)
    web: dict[str, WebSettings] = Field(default_factory=dict, description="domain name -> web settings")


# -- Top-level manifest ------------------------------------------------------


class Manifest(BaseModel):
    project: ProjectSettings = Field(default_factory=ProjectSettings)
    applications: dict[str, ManifestApp] = Field(default_factory=dict)

    def application(self, app_key: str) -> ManifestApp:
        """Return the ``applications.{app_key}`` section or raise ``ConfigurationError``."""
        app = self.applications.get(app_key)
        if app is None:
            msg = f'Cannot find "applications.{app_key}" in the manifest.'
            raise ConfigurationError(msg)
        return app
