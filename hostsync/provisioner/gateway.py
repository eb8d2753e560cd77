"""Provider API gateway.

Thin async transport for the hosting.de JSON API::

    POST {base_url}/{service}/v1/json/{method}
    {"authToken": "...", ...payload}

The gateway owns token attachment and JSON encoding only.  It knows nothing
about resources; callers unwrap the returned envelope with
``unwrap_result`` / ``unwrap_find``.

HTTP 404 and empty bodies come back as ``None`` ("not found"); any other
HTTP error status is raised as ``RemoteOperationError`` with the decoded
body attached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx
from loguru import logger

from hostsync.provisioner.errors import RemoteOperationError

if TYPE_CHECKING:
    from hostsync.provisioner.settings import HostSyncSettings


@runtime_checkable
class Gateway(Protocol):
    """Anything that can submit one provider call and return its envelope."""

    async def call(self, service: str, method: str, payload: dict[str, Any]) -> dict[str, Any] | None:
        """Submit ``payload`` to ``service``/``method``.  ``None`` means not found."""
        ...


class ApiGateway:
    """httpx implementation of the ``Gateway`` protocol.

    Use as an async context manager so the connection pool is closed::

        async with ApiGateway.from_settings(settings) as gateway:
            envelope = await gateway.call("webhosting", "webspacesFind", {...})
    """

    def __init__(
        self,
        base_url: str,
        auth_token: str,
        *,
        timeout: float = 30.0,
        retries: int = 2,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth_token = auth_token
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport or httpx.AsyncHTTPTransport(retries=retries),
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: HostSyncSettings) -> ApiGateway:
        return cls(
            settings.api_base_url,
            settings.require_auth_token(),
            timeout=settings.request_timeout,
            retries=settings.transport_retries,
        )

    def _url(self, service: str, method: str) -> str:
        return f"{self._base_url}/{service}/v1/json/{method}"

    async def call(self, service: str, method: str, payload: dict[str, Any]) -> dict[str, Any] | None:
        operation = f"{service}.{method}"
        logger.debug("API call {}", operation)
        try:
            response = await self._client.post(
                self._url(service, method),
                json={"authToken": self._auth_token, **payload},
            )
        except httpx.TransportError as exc:
            raise RemoteOperationError(operation, str(exc)) from exc

        if response.status_code == httpx.codes.NOT_FOUND or not response.content:
            return None

        try:
            body = response.json()
        except ValueError:
            body = response.text

        if response.is_error or not isinstance(body, dict):
            raise RemoteOperationError(operation, body, status_code=response.status_code)
        return body

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ApiGateway:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


# -- Envelope helpers ----------------------------------------------------------


def unwrap_result(envelope: dict[str, Any] | None, operation: str) -> dict[str, Any]:
    """Return the ``response`` object of a mutating call.

    Raises ``RemoteOperationError`` for an absent envelope, an ``error``
    status, or an envelope without a response body.
    """
    if envelope is None:
        raise RemoteOperationError(operation)
    if envelope.get("status") == "error":
        raise RemoteOperationError(operation, envelope.get("errors") or [])
    response = envelope.get("response")
    if not isinstance(response, dict):
        raise RemoteOperationError(operation, envelope.get("errors"))
    return response


def unwrap_find(envelope: dict[str, Any] | None, operation: str) -> tuple[list[dict[str, Any]], int]:
    """Return ``(data, total_entries)`` of a find call.  ``None`` means no matches."""
    if envelope is None:
        return [], 0
    if envelope.get("status") == "error":
        raise RemoteOperationError(operation, envelope.get("errors") or [])
    response = envelope.get("response") or {}
    data = list(response.get("data") or [])
    total = response.get("totalEntries")
    return data, max(len(data), total if isinstance(total, int) else 0)


def ensure_success(envelope: dict[str, Any] | None, operation: str) -> None:
    """Like ``unwrap_result`` for calls whose response body is irrelevant (deletes)."""
    if envelope is None:
        raise RemoteOperationError(operation)
    if envelope.get("status") == "error":
        raise RemoteOperationError(operation, envelope.get("errors") or [])
