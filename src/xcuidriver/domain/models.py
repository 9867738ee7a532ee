"""Core domain models for the xcuidriver system.

These models represent the data flowing between the driver and its
collaborators: the session options supplied as capabilities, the live
settings view, the requests sent to WebDriverAgent, and the screen
geometry it reports back.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel

from xcuidriver.device.base import Device

HttpMethod = Literal["GET", "POST", "DELETE", "PUT"]


# ---------------------------------------------------------------------------
# Session Models
# ---------------------------------------------------------------------------


class SessionOptions(BaseModel):
    """Capabilities plus runtime options for one active session.

    Field names are snake_case in Python and camelCase on the wire
    (``realDevice``, ``allowTouchIdEnroll``, ...). Capability keys the
    driver does not model are kept as extras so they survive a round trip.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )

    platform_name: str | None = Field(default=None, description="Target platform, must be 'iOS'")
    device_name: str | None = Field(default=None, description="Human-readable device name")
    udid: str | None = Field(default=None, description="Device or simulator UDID")
    bundle_id: str | None = Field(default=None, description="Bundle id of the app under test")
    wda_url: str | None = Field(default=None, description="Base URL of WebDriverAgent")
    real_device: bool = Field(default=False, description="Whether the target is physical hardware")
    allow_touch_id_enroll: bool = Field(
        default=False, description="Whether Touch ID enrollment may be toggled"
    )
    native_web_tap: bool = Field(default=False, description="Use native taps in web contexts")
    device: Device | None = Field(
        default=None, exclude=True, description="Controllable device behind the session"
    )

    @property
    def is_simulator(self) -> bool:
        """Whether the session targets a simulator rather than real hardware."""
        return not self.real_device

    def to_caps(self) -> dict[str, Any]:
        """Dump the options back into a camelCase capability mapping."""
        return self.model_dump(by_alias=True, exclude_none=True)


class DriverSettings(BaseModel):
    """Settings that may be changed while a session is running."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    native_web_tap: bool = Field(default=False)


class SettingsUpdate(BaseModel):
    """A partial settings update. Omitted fields leave settings unchanged."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    native_web_tap: StrictBool | None = None

    @field_validator("native_web_tap", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # None is only the "not given" default; an explicit null is not a value
        if value is None:
            raise ValueError("must be a boolean, not null")
        return value

    def changes(self) -> dict[str, Any]:
        """The fields explicitly set by this update, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Proxy Models
# ---------------------------------------------------------------------------


class ProxyRequest(BaseModel):
    """A single call to be forwarded to WebDriverAgent."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Agent endpoint path, e.g. '/wda/screen'")
    method: HttpMethod = Field(description="HTTP method")
    body: Any = Field(default=None, description="JSON body, if any")


# ---------------------------------------------------------------------------
# Screen Geometry Models
# ---------------------------------------------------------------------------


class StatusBarSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: float = Field(ge=0)
    height: float = Field(ge=0)


class ScreenInfo(BaseModel):
    """Parsed response of ``GET /wda/screen``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    status_bar_size: StatusBarSize
    scale: float = Field(gt=0, description="Device pixel ratio")


class WindowSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: float = Field(ge=0)
    height: float = Field(ge=0)


class ViewportRect(BaseModel):
    """The web viewport area in device pixels, below the status bar."""

    model_config = ConfigDict(frozen=True)

    left: float
    top: float
    width: float
    height: float
