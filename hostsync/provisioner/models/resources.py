"""Provider resource models.

These mirror the hosting.de JSON objects.  Field names are snake_case in
Python and camelCase on the wire (``by_alias=True`` when dumping).

The provider's update calls are full-object replace, so every model keeps
fields it does not declare (``extra="allow"``) and echoes them back when the
object is resubmitted.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hostsync.provisioner.models.enums import LocationType, MatchType


class ProviderModel(BaseModel):
    """Base for all wire models: camelCase aliases, unknown fields retained."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_payload(self, exclude: set[str] | None = None, *, exclude_unset: bool = False) -> dict:
        """Serialize for a request body (camelCase, extras included).

        With ``exclude_unset`` only keys that came from the provider read, or
        were assigned afterwards, are emitted; declared defaults are not sent.
        """
        return self.model_dump(mode="json", by_alias=True, exclude=exclude, exclude_unset=exclude_unset)


# -- Cron jobs ---------------------------------------------------------------


class CronJob(ProviderModel):
    """Cron job embedded in a webspace.

    Every field carries an explicit default so two semantically equal jobs
    serialize identically, which is what the update diff compares.
    """

    type: str = ""
    comments: str = ""
    script: str = ""
    parameters: list[str] = Field(default_factory=list)
    url: str = ""
    interpreter_version: str | None = None
    schedule: str = ""
    weekday: str = ""
    day_of_month: int = 0
    daypart: str | None = None
    hour: int = 0
    minute: int = 0

    def normalized(self) -> dict:
        """Declared fields only; provider-added extras are ignored for comparison."""
        return self.model_dump(include=set(CronJob.model_fields))


# -- Webspace ----------------------------------------------------------------


class WebspaceAccess(ProviderModel):
    user_id: str
    ssh_access: bool = False
    ftp_access: bool = False
    stats_access: bool = False
    user_name: str | None = None
    webspace_id: str | None = None


class Webspace(ProviderModel):
    id: str | None = None
    name: str
    comments: str = ""
    webspace_name: str | None = None
    product_code: str | None = None
    host_name: str | None = None
    pool_id: str | None = None
    account_id: str | None = None
    cron_jobs: list[CronJob] = Field(default_factory=list)
    redis_enabled: bool = False
    status: str | None = None
    accesses: list[WebspaceAccess] = Field(default_factory=list)


# -- Users -------------------------------------------------------------------


class WebspaceUser(ProviderModel):
    id: str
    name: str
    account_id: str | None = None
    user_name: str | None = None
    ssh_key: str | None = None
    status: str | None = None


class DatabaseUser(ProviderModel):
    id: str
    name: str
    account_id: str | None = None
    db_user_name: str | None = None
    status: str | None = None


# -- Vhost -------------------------------------------------------------------


class Location(ProviderModel):
    """A single vhost routing rule."""

    match_string: str
    match_type: MatchType
    location_type: LocationType = LocationType.GENERIC
    map_script: str = ""
    php_enabled: bool = True


class SslSettings(ProviderModel):
    profile: str = "modern"
    managed_ssl_product_code: str | None = None


class Vhost(ProviderModel):
    id: str | None = None
    domain_name: str
    webspace_id: str
    server_type: str = "nginx"
    enable_alias: bool = True
    redirect_to_primary_name: bool = True
    redirect_http_to_https: bool = True
    php_version: str | None = None
    web_root: str = ""
    locations: list[Location] = Field(default_factory=list)
    ssl_settings: SslSettings | None = None
    status: str | None = None


class PhpIniValue(ProviderModel):
    key: str
    value: str


# -- Database ----------------------------------------------------------------


class DatabaseAccess(ProviderModel):
    user_id: str
    access_level: list[str] = Field(default_factory=list)
    database_id: str | None = None
    db_login: str | None = None
    user_name: str | None = None


class Database(ProviderModel):
    id: str | None = None
    name: str
    comments: str = ""
    product_code: str | None = None
    storage_quota: int | None = None
    force_ssl: bool | None = None
    pool_id: str | None = None
    account_id: str | None = None
    db_name: str | None = None
    host_name: str | None = None
    status: str | None = None
    accesses: list[DatabaseAccess] = Field(default_factory=list)

    def access_for(self, user_id: str) -> DatabaseAccess | None:
        return next((a for a in self.accesses if a.user_id == user_id), None)
