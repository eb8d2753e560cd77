"""Provisioner configuration loaded from HOSTSYNC_* environment variables."""

from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from hostsync.provisioner.errors import ConfigurationError


class HostSyncSettings(BaseSettings):
    """hostsync settings.

    All fields are read from environment variables with the ``HOSTSYNC_``
    prefix.  For example, ``HOSTSYNC_LOG_LEVEL=DEBUG`` maps to ``log_level``.

    The manifest describes *what* to deploy; these settings describe *where*
    and *with which credentials*.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOSTSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Provider API ----------------------------------------------------------
    api_base_url: str = "https://secure.hosting.de/api"
    auth_token: SecretStr | None = None
    """hosting.de API token.  Sent in every request body, never logged."""

    request_timeout: float = 30.0
    transport_retries: int = 2
    """Connection-level retries performed by the httpx transport."""

    # -- Deployment ------------------------------------------------------------
    project: str | None = None
    """Resource name prefix, used when the manifest has no ``project.prefix``."""

    manifest_path: str = ".hosting/config.yaml"

    ssh_public_key: SecretStr | None = None
    """Public key installed for the managed webspace user."""

    php_version: str | None = None
    """Environment default PHP version; the manifest's ``php.version`` wins."""

    web_root_prefix: str = "current"
    """Directory inside the webspace that holds the deployed release."""

    # -- Provider products and naming ------------------------------------------
    managed_user_prefix: str = "hostsync--"
    managed_comment: str = "Created by hostsync. Please do not change name."
    webspace_product_code: str = "webhosting-webspace-v1-1m"
    database_product_code: str = "database-mariadb-single-v1-1m"
    database_storage_quota: int = 512
    ssl_product_code: str = "ssl-letsencrypt-dv-3m"
    ssl_profile: str = "modern"

    # -- Helpers ---------------------------------------------------------------

    def require_auth_token(self) -> str:
        if self.auth_token is None or not self.auth_token.get_secret_value():
            msg = "No API token configured (set HOSTSYNC_AUTH_TOKEN)."
            raise ConfigurationError(msg)
        return self.auth_token.get_secret_value()

    def require_ssh_public_key(self) -> str:
        if self.ssh_public_key is None or not self.ssh_public_key.get_secret_value():
            msg = "No SSH public key configured (set HOSTSYNC_SSH_PUBLIC_KEY)."
            raise ConfigurationError(msg)
        return self.ssh_public_key.get_secret_value()


def get_settings() -> HostSyncSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``_get_settings_cached.cache_clear()`` in tests to
    force a re-read after overriding env vars.
    """
    return _get_settings_cached()


def _get_settings_cached() -> HostSyncSettings:
    """Inner function wrapped by lru_cache (allows type-safe cache_clear)."""
    return HostSyncSettings()


# Apply lru_cache at runtime so the function is only called once.
from functools import lru_cache  # noqa: E402

_get_settings_cached = lru_cache(maxsize=1)(_get_settings_cached)
