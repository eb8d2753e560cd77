"""Shared enumerations used across the provisioner."""

from __future__ import annotations

from enum import StrEnum

# -- Resources ---------------------------------------------------------------


class ResourceKind(StrEnum):
    """Remote resource kinds the locator knows how to query."""

    WEBSPACE = "webspace"
    VHOST = "vhost"
    DATABASE = "database"
    DATABASE_USER = "database_user"
    WEBSPACE_USER = "webspace_user"


class ResourceStatus(StrEnum):
    ACTIVE = "active"


# -- Cron jobs ---------------------------------------------------------------


class CronJobType(StrEnum):
    PHP = "php"
    BASH = "bash"


class Schedule(StrEnum):
    """Provider schedule granularity."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# -- Vhost locations ---------------------------------------------------------


class MatchType(StrEnum):
    REGEX = "regex"
    DIRECTORY = "directory"
    DEFAULT = "default"


class LocationType(StrEnum):
    GENERIC = "generic"
    BLOCK_ACCESS = "blockAccess"


# -- Database ----------------------------------------------------------------


class AccessLevel(StrEnum):
    READ = "read"
    WRITE = "write"
    SCHEMA = "schema"


# -- Reconciliation ----------------------------------------------------------


class ReconcileAction(StrEnum):
    """Terminal outcome of a single resource reconciliation."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
