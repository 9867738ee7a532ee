"""Errors raised by the driver itself.

Failures from collaborators (``ProxyError``, ``DeviceError``) are not
wrapped; they reach the caller unchanged.
"""

from __future__ import annotations


class DriverError(Exception):
    """Base class for errors raised by the driver."""


class UnsupportedOperationError(DriverError):
    """Raised when a command cannot run in the current device context."""


class InvalidArgumentError(DriverError):
    """Raised when a command receives an argument it cannot accept."""


class SessionNotCreatedError(DriverError):
    """Raised when a session cannot be started from the given capabilities."""


class NoSessionProxyError(DriverError):
    """Raised when a command needs the agent but no proxy is available."""
