"""JSON-RPC client for the gateway that fronts the remote job registry."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from cronlens.config.settings import Settings

logger = logging.getLogger("cronlens.gateway.client")


class GatewayError(Exception):
    """A gateway tool call failed (transport, HTTP status, or remote error)."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class GatewayClient:
    """Invokes gateway tools over HTTP using JSON-RPC 2.0.

    Each call opens its own ``httpx.AsyncClient``; nothing is shared
    between calls.
    """

    def __init__(
        self,
        url: str,
        token: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> GatewayClient:
        return cls(
            url=settings.gateway.url,
            token=settings.gateway.token,
            timeout=settings.gateway.timeout_seconds,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.url}/rpc"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def call(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Invoke *method* on the gateway and return its ``result``."""
        request_id = uuid.uuid4().hex
        body = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
            "params": params or {},
        }
        logger.debug("Gateway call %s (id=%s) -> %s", method, request_id, self.endpoint)

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            ) as client:
                resp = await client.post(self.endpoint, json=body, headers=self._headers())
        except httpx.TimeoutException as exc:
            raise GatewayError(f"{method} timed out after {self.timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise GatewayError(f"{method} request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise GatewayError(
                f"{method} returned HTTP {resp.status_code}", code=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise GatewayError(f"{method} returned a non-JSON response") from exc

        if not isinstance(data, dict):
            raise GatewayError(f"{method} returned an unexpected response")

        error = data.get("error")
        if error:
            if isinstance(error, dict):
                raise GatewayError(
                    str(error.get("message") or "unknown gateway error"),
                    code=error.get("code"),
                )
            raise GatewayError(str(error))

        return data.get("result")
