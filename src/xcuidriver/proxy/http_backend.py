"""HTTP command proxy backend.

Sends driver commands as HTTP requests to WebDriverAgent and unwraps the
agent's ``{"value": ..., "sessionId": ..., "status": ...}`` envelope.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from xcuidriver.domain.models import HttpMethod
from xcuidriver.proxy.base import CommandProxy, ProxyError

logger = logging.getLogger(__name__)

DEFAULT_WDA_URL = "http://127.0.0.1:8100"

# Paths that are never scoped to the agent session
_SESSIONLESS_PATHS = ("/status", "/session")


class WdaHttpProxy(CommandProxy):
    """Forwards commands to WebDriverAgent over HTTP."""

    def __init__(
        self,
        base_url: str = DEFAULT_WDA_URL,
        timeout: float = 240.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.session_id: str | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def connect(self) -> None:
        """Create the HTTP client and verify the agent is reachable.

        Does nothing if the client is already open.
        """
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        try:
            resp = await self._client.get("/status")
            resp.raise_for_status()
            logger.info("Connected to WebDriverAgent at %s", self._base_url)
        except Exception as e:
            await self._client.aclose()
            self._client = None
            raise ProxyError(
                f"Failed to connect to WebDriverAgent: {e}", path="/status"
            ) from e

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Disconnected from WebDriverAgent")
        self.session_id = None

    async def proxy_command(
        self, path: str, method: HttpMethod, body: Any = None
    ) -> Any:
        """Send one request to the agent and return the unwrapped value."""
        if self._client is None:
            raise ProxyError("Not connected to WebDriverAgent", path=path)

        url = self._url_for(path)
        try:
            resp = await self._client.request(method, url, json=body)
        except httpx.HTTPError as e:
            raise ProxyError(f"{method} {url} failed: {e}", path=path) from e
        logger.debug("%s %s -> %d", method, url, resp.status_code)

        payload = self._decode(resp, path)
        if method == "POST" and path == "/session":
            self._bind_session(payload)
        return self._unwrap(resp, payload, path)

    def _url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        if self.session_id is None or path.startswith(_SESSIONLESS_PATHS):
            return path
        return f"/session/{self.session_id}{path}"

    def _bind_session(self, payload: Any) -> None:
        if not isinstance(payload, dict):
            return
        session_id = payload.get("sessionId")
        value = payload.get("value")
        if not session_id and isinstance(value, dict):
            session_id = value.get("sessionId")
        if session_id:
            self.session_id = session_id
            logger.info("Bound to WebDriverAgent session %s", session_id)

    @staticmethod
    def _decode(resp: httpx.Response, path: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise ProxyError(
                f"Agent returned a non-JSON response ({resp.status_code}): {resp.text[:200]}",
                status_code=resp.status_code,
                path=path,
            ) from e

    @staticmethod
    def _unwrap(resp: httpx.Response, payload: Any, path: str) -> Any:
        if not isinstance(payload, dict):
            if resp.is_error:
                raise ProxyError(
                    f"Agent error {resp.status_code}: {payload}",
                    status_code=resp.status_code,
                    path=path,
                )
            return payload

        value = payload.get("value")
        # W3C style: {"value": {"error": ..., "message": ...}}
        if isinstance(value, dict) and "error" in value:
            raise ProxyError(
                f"{value['error']}: {value.get('message', '')}".rstrip(": "),
                status_code=resp.status_code,
                path=path,
            )
        # JSONWP style: {"status": 13, "value": "..."}
        status = payload.get("status")
        if isinstance(status, int) and status != 0:
            message = value.get("message", value) if isinstance(value, dict) else value
            raise ProxyError(
                f"Agent returned status {status}: {message}",
                status_code=resp.status_code,
                path=path,
            )
        if resp.is_error:
            raise ProxyError(
                f"Agent error {resp.status_code}: {payload}",
                status_code=resp.status_code,
                path=path,
            )
        return value if "value" in payload else payload
