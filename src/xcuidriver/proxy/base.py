"""Abstract base class for forwarding commands to WebDriverAgent.

The driver never talks HTTP itself. Every agent call goes through
``CommandProxy.proxy_command``, which lets the system swap the httpx
backend for another transport (or a recording test double) without
changing any driver code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from xcuidriver.domain.models import HttpMethod

logger = logging.getLogger(__name__)


class CommandProxy(ABC):
    """Abstract interface for issuing calls to the automation agent.

    Implementations own the transport and the agent's response envelope;
    ``proxy_command`` returns only the unwrapped JSON value.

    Example usage::

        async with WdaHttpProxy(base_url="http://127.0.0.1:8100") as proxy:
            screen = await proxy.proxy_command("/wda/screen", "GET")
            await proxy.proxy_command("/wda/touch_id", "POST", {"match": True})
    """

    session_id: str | None = None

    async def connect(self) -> None:
        """Prepare the transport. The default implementation does nothing."""

    async def disconnect(self) -> None:
        """Release the transport. Safe to call multiple times."""

    @abstractmethod
    async def proxy_command(
        self, path: str, method: HttpMethod, body: Any = None
    ) -> Any:
        """Forward one call to the agent and return its JSON value.

        Args:
            path: Agent endpoint path, e.g. '/wda/screen'. Implementations
                  scope it to the bound agent session where applicable.
            method: HTTP method.
            body: JSON-serializable request body, or None.

        Raises:
            ProxyError: If the transport fails or the agent reports an error.
        """
        ...

    async def __aenter__(self) -> CommandProxy:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


class ProxyError(Exception):
    """Raised when a proxied call fails in transport or at the agent."""

    def __init__(self, message: str, status_code: int | None = None, path: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.path = path
