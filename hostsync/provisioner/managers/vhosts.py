"""Vhost construction, creation and deletion.

There is no update path: a domain is fixed once its vhost exists, and a
changed domain in the manifest produces a new vhost.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from hostsync.provisioner.encoding.routing import compile_locations
from hostsync.provisioner.gateway import ensure_success, unwrap_result
from hostsync.provisioner.models.resources import PhpIniValue, SslSettings, Vhost

if TYPE_CHECKING:
    from hostsync.provisioner.gateway import Gateway
    from hostsync.provisioner.models.manifest import WebSettings


def resolve_web_root(prefix: str, root: str | None) -> str:
    """``{prefix}/{root}`` with a single trailing separator removed."""
    return f"{prefix}/{root or ''}".removesuffix("/")


def php_ini_values(ini: Mapping[str, str | bool | int | float]) -> list[PhpIniValue]:
    return [PhpIniValue(key=key, value=_ini_string(value)) for key, value in ini.items()]


def _ini_string(value: str | bool | int | float) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_vhost(
    *,
    webspace_id: str,
    domain_name: str,
    web: WebSettings,
    php_version: str | None,
    web_root_prefix: str,
    ssl_profile: str,
    ssl_product_code: str,
) -> Vhost:
    """Assemble the vhost create payload from one ``web.{domain}`` section."""
    return Vhost(
        domain_name=domain_name,
        webspace_id=webspace_id,
        enable_alias=web.www,
        php_version=php_version,
        web_root=resolve_web_root(web_root_prefix, web.root),
        locations=compile_locations(web.locations),
        ssl_settings=SslSettings(profile=ssl_profile, managed_ssl_product_code=ssl_product_code),
    )


async def create_vhost(gateway: Gateway, vhost: Vhost, php_ini: list[PhpIniValue] | None = None) -> Vhost:
    """Create a vhost.  Raises ``RemoteOperationError``."""
    envelope = await gateway.call(
        "webhosting",
        "vhostCreate",
        {
            "vhost": vhost.to_payload(exclude={"id", "status"}),
            "phpIni": {"values": [value.to_payload() for value in php_ini or []]},
        },
    )
    return Vhost.model_validate(unwrap_result(envelope, "webhosting.vhostCreate"))


async def delete_vhost(gateway: Gateway, vhost_id: str) -> None:
    envelope = await gateway.call("webhosting", "vhostDelete", {"vhostId": vhost_id})
    ensure_success(envelope, "webhosting.vhostDelete")
