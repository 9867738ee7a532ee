"""iOS simulator device backed by ``xcrun simctl``.

Touch ID enrollment on a simulator is driven through the BiometricKit
darwin notification, set and posted with ``notifyutil`` inside the
simulator's runtime.
"""

from __future__ import annotations

import asyncio
import logging

from xcuidriver.device.base import Device, DeviceError

logger = logging.getLogger(__name__)

ENROLLMENT_NOTIFICATION = "com.apple.BiometricKit.enrollmentChanged"


class SimctlDevice(Device):
    """A booted iOS simulator controlled via ``xcrun simctl``."""

    def __init__(self, udid: str, xcrun_path: str = "xcrun", timeout: float = 30.0) -> None:
        self._udid = udid
        self._xcrun = xcrun_path
        self._timeout = timeout

    @property
    def udid(self) -> str:
        return self._udid

    async def enroll_touch_id(self, is_enabled: bool = True) -> None:
        """Set the enrollment flag and post the change notification."""
        await self._spawn("notifyutil", "-s", ENROLLMENT_NOTIFICATION, "1" if is_enabled else "0")
        await self._spawn("notifyutil", "-p", ENROLLMENT_NOTIFICATION)
        logger.info(
            "Touch ID %s on simulator %s",
            "enrolled" if is_enabled else "unenrolled",
            self._udid,
        )

    async def is_touch_id_enrolled(self) -> bool:
        """Read the enrollment flag back from the simulator."""
        output = await self._spawn("notifyutil", "-g", ENROLLMENT_NOTIFICATION)
        # Output looks like "com.apple.BiometricKit.enrollmentChanged 1"
        parts = output.split()
        if not parts:
            raise DeviceError(
                f"Unexpected notifyutil output: {output!r}", udid=self._udid
            )
        return parts[-1] == "1"

    async def _spawn(self, *args: str) -> str:
        """Run a command inside the simulator and return its stdout."""
        cmd = [self._xcrun, "simctl", "spawn", self._udid, *args]
        logger.debug("Running: %s", " ".join(cmd))
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise DeviceError(f"Cannot run {self._xcrun}: {e}", udid=self._udid) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            proc.kill()
            raise DeviceError(
                f"'{' '.join(args)}' timed out after {self._timeout}s", udid=self._udid
            ) from e

        if proc.returncode != 0:
            raise DeviceError(
                f"'{' '.join(args)}' failed with exit code {proc.returncode}: "
                f"{stderr.decode(errors='replace').strip()}",
                udid=self._udid,
            )
        return stdout.decode(errors="replace").strip()
