"""Unit tests for the resource locator."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from hostsync.provisioner.errors import AmbiguousMatchError, RemoteOperationError
from hostsync.provisioner.locator import ResourceLocator, build_filter
from hostsync.provisioner.models.enums import ResourceKind
from hostsync.provisioner.models.resources import Database, Webspace

if TYPE_CHECKING:
    from conftest import FakeGateway

WEBSPACE = {"id": "ws-1", "name": "proj-app", "webspaceName": "w0001", "status": "active"}


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def test_build_filter_single_condition() -> None:
    assert build_filter(("userName", "bob")) == {"field": "userName", "value": "bob"}


def test_build_filter_conjunction() -> None:
    assert build_filter(("webspaceName", "proj-app"), ("webspaceStatus", "active")) == {
        "subFilterConnective": "AND",
        "subFilter": [
            {"field": "webspaceName", "value": "proj-app"},
            {"field": "webspaceStatus", "value": "active"},
        ],
    }


# ---------------------------------------------------------------------------
# find_one_by_name
# ---------------------------------------------------------------------------


async def test_find_one_by_name_returns_single_match(gateway: FakeGateway) -> None:
    gateway.reply("webhosting", "webspacesFind", gateway.found(WEBSPACE))

    webspace = await ResourceLocator(gateway).find_one_by_name(ResourceKind.WEBSPACE, "proj-app")

    assert isinstance(webspace, Webspace)
    assert webspace.id == "ws-1"
    assert gateway.payloads("webhosting", "webspacesFind") == [
        {
            "filter": {
                "subFilterConnective": "AND",
                "subFilter": [
                    {"field": "webspaceName", "value": "proj-app"},
                    {"field": "webspaceStatus", "value": "active"},
                ],
            },
            "limit": 2,
        }
    ]


async def test_find_one_by_name_returns_none_when_absent(gateway: FakeGateway) -> None:
    gateway.reply("database", "databasesFind", gateway.found())

    assert await ResourceLocator(gateway).find_one_by_name(ResourceKind.DATABASE, "proj-shop") is None


async def test_find_one_by_name_treats_not_found_envelope_as_absent(gateway: FakeGateway) -> None:
    gateway.reply("database", "databasesFind", None)

    assert await ResourceLocator(gateway).find_one_by_name(ResourceKind.DATABASE, "proj-shop") is None


async def test_find_one_by_name_raises_on_duplicates(gateway: FakeGateway) -> None:
    gateway.reply("webhosting", "webspacesFind", gateway.found(WEBSPACE, {**WEBSPACE, "id": "ws-2"}))

    with pytest.raises(AmbiguousMatchError) as exc_info:
        await ResourceLocator(gateway).find_one_by_name(ResourceKind.WEBSPACE, "proj-app")

    assert exc_info.value.kind == "webspace"
    assert exc_info.value.name == "proj-app"
    assert exc_info.value.count == 2


async def test_find_one_by_name_uses_total_entries(gateway: FakeGateway) -> None:
    # The provider honours the limit but still reports the full count.
    gateway.reply("webhosting", "webspacesFind", gateway.found(WEBSPACE, total=3))

    with pytest.raises(AmbiguousMatchError, match="Found 3 active webspace"):
        await ResourceLocator(gateway).find_one_by_name(ResourceKind.WEBSPACE, "proj-app")


async def test_user_kinds_have_no_status_filter(gateway: FakeGateway) -> None:
    gateway.reply("database", "usersFind", gateway.found({"id": "u-1", "name": "proj-app-main"}))

    user = await ResourceLocator(gateway).find_one_by_name(ResourceKind.DATABASE_USER, "proj-app-main")

    assert user.id == "u-1"
    assert gateway.payloads("database", "usersFind")[0]["filter"] == {"field": "userName", "value": "proj-app-main"}


async def test_find_error_status_raises(gateway: FakeGateway) -> None:
    gateway.reply("webhosting", "webspacesFind", gateway.error({"code": 10205, "text": "Invalid filter"}))

    with pytest.raises(RemoteOperationError) as exc_info:
        await ResourceLocator(gateway).find_one_by_name(ResourceKind.WEBSPACE, "proj-app")

    assert exc_info.value.operation == "webhosting.webspacesFind"
    assert exc_info.value.errors == [{"code": 10205, "text": "Invalid filter"}]


# ---------------------------------------------------------------------------
# Other lookups
# ---------------------------------------------------------------------------


async def test_find_by_id_ignores_status(gateway: FakeGateway) -> None:
    gateway.reply("database", "databasesFind", gateway.found({"id": "db-1", "name": "proj-shop", "status": "blocked"}))

    database = await ResourceLocator(gateway).find_by_id(ResourceKind.DATABASE, "db-1")

    assert isinstance(database, Database)
    assert database.status == "blocked"
    assert gateway.payloads("database", "databasesFind") == [
        {"filter": {"field": "databaseId", "value": "db-1"}, "limit": 1}
    ]


async def test_find_by_id_missing(gateway: FakeGateway) -> None:
    gateway.reply("webhosting", "vhostsFind", gateway.found())

    assert await ResourceLocator(gateway).find_by_id(ResourceKind.VHOST, "vh-404") is None


async def test_find_by_prefix(gateway: FakeGateway) -> None:
    gateway.reply(
        "webhosting",
        "webspacesFind",
        gateway.found({"id": "ws-1", "name": "proj-a"}, {"id": "ws-2", "name": "proj-b"}),
    )

    webspaces = await ResourceLocator(gateway).find_by_prefix(ResourceKind.WEBSPACE, "proj-")

    assert [w.name for w in webspaces] == ["proj-a", "proj-b"]
    conditions = gateway.payloads("webhosting", "webspacesFind")[0]["filter"]["subFilter"]
    assert conditions[0] == {"field": "webspaceName", "value": "proj-*"}


async def test_find_vhosts_by_webspace(gateway: FakeGateway) -> None:
    gateway.reply(
        "webhosting",
        "vhostsFind",
        gateway.found({"id": "vh-1", "domainName": "proj.example.com", "webspaceId": "ws-1"}),
    )

    vhosts = await ResourceLocator(gateway).find_vhosts_by_webspace("ws-1")

    assert [v.domain_name for v in vhosts] == ["proj.example.com"]
    assert gateway.payloads("webhosting", "vhostsFind")[0]["filter"]["subFilter"] == [
        {"field": "webspaceId", "value": "ws-1"},
        {"field": "vHostStatus", "value": "active"},
    ]


async def test_find_database_accesses(gateway: FakeGateway) -> None:
    gateway.reply("database", "usersFind", gateway.found())

    assert await ResourceLocator(gateway).find_database_accesses("proj-app-main", "db-1") == []
    assert gateway.payloads("database", "usersFind")[0]["filter"]["subFilter"] == [
        {"field": "userName", "value": "proj-app-main"},
        {"field": "userAccessesDatabaseId", "value": "db-1"},
    ]
