"""Fixtures for provisioner tests: a recording in-memory gateway and a sample manifest."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

from hostsync.provisioner.manifest import parse_manifest
from hostsync.provisioner.models.manifest import Manifest

Reply = dict[str, Any] | None | Callable[[dict[str, Any]], dict[str, Any] | None]


class FakeGateway:
    """In-memory ``Gateway`` that records every call and replies from a script.

    Replies queued for a method are consumed in order; the last one is
    repeated for any further calls.  A reply may be a callable receiving the
    request payload.  Calls without a scripted reply fail the test.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self._replies: dict[tuple[str, str], list[Reply]] = {}

    # -- Scripting -------------------------------------------------------------

    def reply(self, service: str, method: str, *replies: Reply) -> None:
        self._replies.setdefault((service, method), []).extend(replies)

    @staticmethod
    def ok(response: dict[str, Any]) -> dict[str, Any]:
        return {"status": "success", "errors": [], "response": response}

    @staticmethod
    def found(*items: dict[str, Any], total: int | None = None) -> dict[str, Any]:
        data = list(items)
        return {
            "status": "success",
            "errors": [],
            "response": {"data": data, "totalEntries": len(data) if total is None else total},
        }

    @staticmethod
    def error(*errors: dict[str, Any]) -> dict[str, Any]:
        return {"status": "error", "errors": list(errors)}

    # -- Gateway protocol ------------------------------------------------------

    async def call(self, service: str, method: str, payload: dict[str, Any]) -> dict[str, Any] | None:
        self.calls.append((service, method, copy.deepcopy(payload)))
        queue = self._replies.get((service, method))
        if not queue:
            msg = f"unexpected call {service}.{method}"
            raise AssertionError(msg)
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        return reply(payload) if callable(reply) else reply

    async def __aenter__(self) -> FakeGateway:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    # -- Inspection ------------------------------------------------------------

    @property
    def methods(self) -> list[str]:
        return [f"{service}.{method}" for service, method, _ in self.calls]

    def payloads(self, service: str, method: str) -> list[dict[str, Any]]:
        return [payload for s, m, payload in self.calls if (s, m) == (service, method)]


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


SAMPLE_MANIFEST = """
project:
  prefix: proj
  prune: true

applications:
  app:
    php:
      version: "8.2"
      ini:
        memory_limit: 256M
        display_errors: false
    databases:
      main: shop
    cron:
      - php: bin/console cache:clear --env=prod
        every: week
        on: Fri
      - cmd: ./backup.sh --full
    web:
      proj.example.com:
        root: public
        www: false
        locations:
          "^/api":
            passthru: /index.php
          /assets:
            passthru: false
          /private:
            allow: false

  worker:
    databases:
      main: shop
      stats: analytics
"""


@pytest.fixture
def manifest_text() -> str:
    return SAMPLE_MANIFEST


@pytest.fixture
def manifest(manifest_text: str) -> Manifest:
    return parse_manifest(manifest_text)
