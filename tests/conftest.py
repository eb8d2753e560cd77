"""Shared test fixtures.

No test talks to the real provider.  Provider calls go through the
in-memory ``FakeGateway`` (see ``tests/provisioner/conftest.py``) or an
``httpx.MockTransport``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from hostsync.provisioner.settings import HostSyncSettings, _get_settings_cached


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop HOSTSYNC_* variables from the host environment and reset the settings cache."""
    for key in list(os.environ):
        if key.startswith("HOSTSYNC_"):
            monkeypatch.delenv(key)
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def settings() -> HostSyncSettings:
    return HostSyncSettings(
        _env_file=None,
        auth_token="test-token",
        ssh_public_key="ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAITEST deploy@ci",
    )
