"""Device capability module for xcuidriver.

Provides the interface for device-level operations that are not proxied
to WebDriverAgent, plus a simulator implementation.

Public API:
    Device -- Abstract base class
    DeviceError -- Raised by device operations
    SimctlDevice -- iOS simulator via xcrun simctl
"""

from xcuidriver.device.base import Device, DeviceError

__all__ = ["Device", "DeviceError", "SimctlDevice"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations."""
    if name == "SimctlDevice":
        from xcuidriver.device.simulator import SimctlDevice
        return SimctlDevice
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
