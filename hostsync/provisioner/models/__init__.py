"""Data models for the provisioner."""

from hostsync.provisioner.models.enums import (
    AccessLevel,
    CronJobType,
    LocationType,
    MatchType,
    ReconcileAction,
    ResourceKind,
    ResourceStatus,
    Schedule,
)
from hostsync.provisioner.models.manifest import (
    CronjobConfig,
    LocationSpec,
    Manifest,
    ManifestApp,
    PhpSettings,
    ProjectSettings,
    WebSettings,
)
from hostsync.provisioner.models.resources import (
    CronJob,
    Database,
    DatabaseAccess,
    DatabaseUser,
    Location,
    PhpIniValue,
    SslSettings,
    Vhost,
    Webspace,
    WebspaceAccess,
    WebspaceUser,
)
from hostsync.provisioner.models.results import (
    DatabaseCredentials,
    DatabaseOutcome,
    DeploymentResult,
    PruneReport,
    VhostOutcome,
    WebspaceOutcome,
)

__all__ = [
    # Enums
    "AccessLevel",
    # Resources
    "CronJob",
    # Manifest
    "CronjobConfig",
    "CronJobType",
    "Database",
    "DatabaseAccess",
    # Results
    "DatabaseCredentials",
    "DatabaseOutcome",
    "DatabaseUser",
    "DeploymentResult",
    "Location",
    "LocationSpec",
    "LocationType",
    "Manifest",
    "ManifestApp",
    "MatchType",
    "PhpIniValue",
    "PhpSettings",
    "ProjectSettings",
    "PruneReport",
    "ReconcileAction",
    "ResourceKind",
    "ResourceStatus",
    "Schedule",
    "SslSettings",
    "Vhost",
    "VhostOutcome",
    "WebSettings",
    "Webspace",
    "WebspaceAccess",
    "WebspaceOutcome",
    "WebspaceUser",
]
