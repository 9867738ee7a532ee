"""Shared test fixtures for the xcuidriver test suite.

Provides collaborator test doubles that record what the driver asks of
them, so tests can assert on proxied calls without patching the driver.
"""

from __future__ import annotations

from typing import Any

import pytest

from xcuidriver.device.base import Device
from xcuidriver.domain.models import HttpMethod, ProxyRequest
from xcuidriver.driver.xcuitest import XCUITestDriver
from xcuidriver.proxy.base import CommandProxy


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------


class RecordingProxy(CommandProxy):
    """A CommandProxy that records requests and returns staged responses."""

    def __init__(self) -> None:
        self.calls: list[ProxyRequest] = []
        self.responses: dict[tuple[str, str], Any] = {}
        self.errors: dict[tuple[str, str], Exception] = {}
        self.connected = False
        self.session_id: str | None = None

    def stage(self, path: str, method: HttpMethod, value: Any) -> None:
        self.responses[(path, method)] = value

    def fail(self, path: str, method: HttpMethod, error: Exception) -> None:
        self.errors[(path, method)] = error

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False
        self.session_id = None

    async def proxy_command(self, path: str, method: HttpMethod, body: Any = None) -> Any:
        self.calls.append(ProxyRequest(path=path, method=method, body=body))
        if (path, method) in self.errors:
            raise self.errors[(path, method)]
        return self.responses.get((path, method))


class RecordingDevice(Device):
    """A Device that records Touch ID enrollment changes."""

    def __init__(self, udid: str = "SIM-0000") -> None:
        self._udid = udid
        self.enroll_calls: list[bool] = []
        self.enrolled = False

    @property
    def udid(self) -> str:
        return self._udid

    async def enroll_touch_id(self, is_enabled: bool = True) -> None:
        self.enroll_calls.append(is_enabled)
        self.enrolled = is_enabled

    async def is_touch_id_enrolled(self) -> bool:
        return self.enrolled


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def base_caps() -> dict[str, Any]:
    """Minimal valid capabilities for a simulator session."""
    return {"platformName": "iOS", "deviceName": "bar", "app": "/fake"}


@pytest.fixture
def proxy() -> RecordingProxy:
    return RecordingProxy()


@pytest.fixture
def device() -> RecordingDevice:
    return RecordingDevice()


@pytest.fixture
def driver(proxy: RecordingProxy, device: RecordingDevice) -> XCUITestDriver:
    """A driver wired to recording collaborators, with no session started."""
    return XCUITestDriver(proxy=proxy, device=device)


@pytest.fixture
def screen_response() -> dict[str, Any]:
    return {"statusBarSize": {"width": 100, "height": 20}, "scale": 3}
