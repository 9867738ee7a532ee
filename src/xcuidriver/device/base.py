"""Abstract base class for the device behind a session.

Some commands are not proxied to WebDriverAgent at all but act on the
device directly (e.g. toggling simulator Touch ID enrollment). The
driver reaches those capabilities only through this interface, so a
simulator, a real-device bridge or a test double can stand behind it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Device(ABC):
    """Abstract interface for device-level capabilities.

    Example usage::

        device = SimctlDevice(udid="8A1E...")
        await device.enroll_touch_id(True)
        assert await device.is_touch_id_enrolled()
    """

    @property
    @abstractmethod
    def udid(self) -> str:
        """Unique identifier of the device."""
        ...

    @abstractmethod
    async def enroll_touch_id(self, is_enabled: bool = True) -> None:
        """Enroll (or un-enroll) Touch ID on the device.

        Args:
            is_enabled: True to enroll a fingerprint, False to remove
                        the enrollment.

        Raises:
            DeviceError: If the device rejects the change.
        """
        ...

    @abstractmethod
    async def is_touch_id_enrolled(self) -> bool:
        """Whether Touch ID is currently enrolled on the device.

        Raises:
            DeviceError: If the enrollment state cannot be read.
        """
        ...


class DeviceError(Exception):
    """Raised when a device-level operation fails."""

    def __init__(self, message: str, udid: str = "") -> None:
        super().__init__(message)
        self.udid = udid
