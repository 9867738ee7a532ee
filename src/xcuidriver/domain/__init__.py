"""Domain models for xcuidriver.

This package contains the core data structures used throughout the
system. All models use Pydantic v2 for validation and serialization.
"""

from xcuidriver.domain.models import (
    DriverSettings,
    HttpMethod,
    ProxyRequest,
    ScreenInfo,
    SessionOptions,
    SettingsUpdate,
    StatusBarSize,
    ViewportRect,
    WindowSize,
)

__all__ = [
    "DriverSettings",
    "HttpMethod",
    "ProxyRequest",
    "ScreenInfo",
    "SessionOptions",
    "SettingsUpdate",
    "StatusBarSize",
    "ViewportRect",
    "WindowSize",
]
