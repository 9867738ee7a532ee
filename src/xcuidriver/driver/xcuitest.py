"""XCUITest driver: translates WebDriver-style commands into WDA calls.

Each public command follows the same shape: check that the command is
allowed in the current device context, issue one call through the
command proxy (or the device collaborator), and reshape the agent's JSON
into the value the command promises. The driver keeps no state besides
the session options and the live settings derived from them.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from xcuidriver.device.base import Device
from xcuidriver.domain.models import (
    DriverSettings,
    HttpMethod,
    ScreenInfo,
    SessionOptions,
    SettingsUpdate,
    ViewportRect,
    WindowSize,
)
from xcuidriver.driver.errors import (
    DriverError,
    InvalidArgumentError,
    NoSessionProxyError,
    SessionNotCreatedError,
    UnsupportedOperationError,
)
from xcuidriver.proxy.base import CommandProxy

logger = logging.getLogger(__name__)

# Case-insensitive button name -> name the agent expects
HARDWARE_BUTTONS = {"home": "home", "volumeup": "volumeUp", "volumedown": "volumeDown"}


class XCUITestDriver:
    """Driver for iOS devices and simulators running WebDriverAgent.

    The proxy and device collaborators may be injected; otherwise the
    proxy is created from the ``wdaUrl`` capability when the session
    starts, and a ``SimctlDevice`` is created for simulator sessions
    that carry a ``udid``.

    Example usage::

        driver = XCUITestDriver()
        await driver.create_session({
            "platformName": "iOS",
            "deviceName": "iPhone 15",
            "udid": "8A1E...",
            "bundleId": "com.example.app",
        })
        ratio = await driver.get_device_pixel_ratio()
        await driver.touch_id(match=True)
        await driver.delete_session()
    """

    def __init__(
        self,
        proxy: CommandProxy | None = None,
        device: Device | None = None,
        wda_timeout: float = 240.0,
    ) -> None:
        self._proxy = proxy
        self._owns_proxy = False
        self._default_device = device
        self._wda_timeout = wda_timeout
        self.session_id: str | None = None
        self.opts = SessionOptions(device=device)
        self._settings = DriverSettings()

    @property
    def proxy(self) -> CommandProxy | None:
        return self._proxy

    @property
    def is_real_device(self) -> bool:
        return self.opts.real_device

    @property
    def is_simulator(self) -> bool:
        return self.opts.is_simulator

    # -------------------------------------------------------------------
    # Session lifecycle
    # -------------------------------------------------------------------

    async def create_session(self, caps: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
        """Validate capabilities, build session options and start the session.

        Returns:
            The new session id and the effective capabilities.

        Raises:
            SessionNotCreatedError: If a session is already running or the
                capabilities are invalid.
        """
        if self.session_id is not None:
            raise SessionNotCreatedError(
                f"Session {self.session_id} is already running; delete it first"
            )
        platform = caps.get("platformName")
        if not platform or str(platform).lower() != "ios":
            raise SessionNotCreatedError(
                f"platformName must be 'iOS', got {platform!r}"
            )
        if not caps.get("deviceName"):
            raise SessionNotCreatedError("The 'deviceName' capability is required")

        try:
            opts = SessionOptions.model_validate(dict(caps))
        except ValidationError as e:
            raise SessionNotCreatedError(f"Invalid capabilities: {e}") from e

        if opts.device is None:
            if self._default_device is not None:
                opts.device = self._default_device
            elif opts.is_simulator and opts.udid:
                from xcuidriver.device.simulator import SimctlDevice
                opts.device = SimctlDevice(udid=opts.udid)

        self.opts = opts
        self._settings = DriverSettings(native_web_tap=opts.native_web_tap)
        self.session_id = str(uuid.uuid4())

        try:
            await self.start()
        except Exception:
            logger.error("Failed to start session %s", self.session_id)
            try:
                if self._proxy is not None:
                    await self._proxy.disconnect()
            finally:
                self._reset()
            raise

        logger.info(
            "Session %s created for %s (%s)",
            self.session_id,
            opts.device_name,
            "real device" if opts.real_device else "simulator",
        )
        return self.session_id, opts.to_caps()

    async def start(self) -> None:
        """Connect to WebDriverAgent and open an agent session."""
        if self._proxy is None:
            from xcuidriver.proxy.http_backend import DEFAULT_WDA_URL, WdaHttpProxy

            self._proxy = WdaHttpProxy(
                base_url=self.opts.wda_url or DEFAULT_WDA_URL,
                timeout=self._wda_timeout,
            )
            self._owns_proxy = True

        await self._proxy.connect()

        always_match: dict[str, Any] = {}
        if self.opts.bundle_id:
            always_match["bundleId"] = self.opts.bundle_id
        value = await self.proxy_command(
            "/session", "POST", {"capabilities": {"alwaysMatch": always_match}}
        )
        if self._proxy.session_id is None and isinstance(value, dict) and value.get("sessionId"):
            self._proxy.session_id = value["sessionId"]

        if self.is_simulator and self.opts.allow_touch_id_enroll and self.opts.device is not None:
            await self.opts.device.enroll_touch_id(True)

    async def delete_session(self) -> None:
        """Close the agent session and release the proxy."""
        if self.session_id is None:
            return
        try:
            if self._proxy is not None and self._proxy.session_id:
                await self.proxy_command(f"/session/{self._proxy.session_id}", "DELETE")
        finally:
            if self._proxy is not None:
                await self._proxy.disconnect()
            logger.info("Session %s deleted", self.session_id)
            self._reset()

    def _reset(self) -> None:
        if self._owns_proxy:
            self._proxy = None
            self._owns_proxy = False
        self.session_id = None
        self.opts = SessionOptions(device=self._default_device)
        self._settings = DriverSettings()

    async def proxy_command(self, path: str, method: HttpMethod, body: Any = None) -> Any:
        """Forward a call to WebDriverAgent through the command proxy."""
        if self._proxy is None:
            raise NoSessionProxyError(
                "No WebDriverAgent proxy is available; start a session first"
            )
        logger.debug("Proxying %s %s", method, path)
        return await self._proxy.proxy_command(path, method, body)

    def _ensure_simulator(self, feature: str) -> None:
        if self.opts.real_device:
            raise UnsupportedOperationError(f"{feature} is not supported on real devices")

    # -------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------

    async def get_settings(self) -> DriverSettings:
        """Return a snapshot of the current settings."""
        return self._settings.model_copy()

    async def update_settings(
        self, update: SettingsUpdate | Mapping[str, Any]
    ) -> DriverSettings:
        """Merge a partial update into the settings and the session options.

        Keys missing from ``update`` keep their current values.

        Raises:
            InvalidArgumentError: If ``update`` has unknown keys or values
                of the wrong type. Settings are left untouched.
        """
        if not isinstance(update, SettingsUpdate):
            try:
                update = SettingsUpdate.model_validate(dict(update))
            except ValidationError as e:
                raise InvalidArgumentError(f"Invalid settings update: {e}") from e

        for name, value in update.changes().items():
            setattr(self._settings, name, value)
            setattr(self.opts, name, value)
            logger.info("Setting %s updated to %r", name, value)
        return await self.get_settings()

    # -------------------------------------------------------------------
    # App and device state
    # -------------------------------------------------------------------

    async def status(self) -> Any:
        """Return the agent's status document."""
        return await self.proxy_command("/status", "GET")

    async def background(self, seconds: float | None = None) -> None:
        """Send the app under test to the background.

        Args:
            seconds: How long the app stays in the background before the
                     agent reactivates it. None leaves the choice to the agent.
        """
        body: dict[str, Any] = {}
        if seconds is not None:
            body["duration"] = seconds
        await self.proxy_command("/wda/deactivateApp", "POST", body)

    async def touch_id(self, match: bool = True) -> None:
        """Simulate a matching (or non-matching) Touch ID scan."""
        self._ensure_simulator("Touch ID simulation")
        await self.proxy_command("/wda/touch_id", "POST", {"match": match})

    async def toggle_enroll_touch_id(self, is_enabled: bool = True) -> None:
        """Enroll or un-enroll Touch ID on the simulator behind the session."""
        self._ensure_simulator("Touch ID enrollment")
        if not self.opts.allow_touch_id_enroll:
            raise UnsupportedOperationError(
                "Touch ID enrollment is not supported unless the "
                "'allowTouchIdEnroll' capability is set"
            )
        device = self.opts.device
        if device is None:
            raise DriverError("No device is attached to the session")
        await device.enroll_touch_id(is_enabled)

    async def hide_keyboard(self) -> None:
        await self.proxy_command("/wda/keyboard/dismiss", "POST", {})

    async def press_button(self, name: str) -> None:
        """Press a hardware button: home, volumeUp or volumeDown."""
        button = HARDWARE_BUTTONS.get((name or "").lower())
        if button is None:
            raise InvalidArgumentError(
                f"Button name {name!r} is unknown. "
                f"Supported: {', '.join(HARDWARE_BUTTONS.values())}"
            )
        await self.proxy_command("/wda/pressButton", "POST", {"name": button})

    async def siri_command(self, text: str) -> None:
        if not text:
            raise InvalidArgumentError("Siri command text must not be empty")
        await self.proxy_command("/wda/siri/activate", "POST", {"text": text})

    async def lock(self, seconds: float | None = None) -> None:
        """Lock the screen, unlocking it again after ``seconds`` if positive."""
        await self.proxy_command("/wda/lock", "POST", {})
        if seconds is not None and seconds > 0:
            await asyncio.sleep(seconds)
            await self.unlock()

    async def unlock(self) -> None:
        await self.proxy_command("/wda/unlock", "POST", {})

    async def is_locked(self) -> bool:
        return bool(await self.proxy_command("/wda/locked", "GET"))

    # -------------------------------------------------------------------
    # Window and screen geometry
    # -------------------------------------------------------------------

    async def get_window_size(self, window_handle: str = "current") -> WindowSize:
        if window_handle != "current":
            raise UnsupportedOperationError(
                "Getting the size of a window other than the current one is not supported"
            )
        value = await self.proxy_command("/window/size", "GET")
        return _parse(WindowSize, value, "/window/size")

    async def get_window_rect(self) -> Any:
        """Return the window rectangle exactly as the agent reports it."""
        return await self.proxy_command("/window/size", "GET")

    async def get_screen_info(self) -> ScreenInfo:
        value = await self.proxy_command("/wda/screen", "GET")
        return _parse(ScreenInfo, value, "/wda/screen")

    async def get_device_pixel_ratio(self) -> float:
        return (await self.get_screen_info()).scale

    async def get_status_bar_height(self) -> float:
        return (await self.get_screen_info()).status_bar_size.height

    async def get_viewport_rect(self) -> ViewportRect:
        """The area below the status bar, in device pixels."""
        screen = await self.get_screen_info()
        size = await self.get_window_size()
        scale = screen.scale
        bar_height = screen.status_bar_size.height
        return ViewportRect(
            left=0,
            top=round(bar_height * scale),
            width=round(size.width * scale),
            height=round(size.height * scale) - round(bar_height * scale),
        )


def _parse(model: type, value: Any, path: str) -> Any:
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise DriverError(f"Unexpected response from {path}: {value!r}") from e
