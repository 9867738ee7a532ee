"""Command translator module for xcuidriver.

Contains the driver that maps each WebDriver-style command onto one
WebDriverAgent call, and the errors it raises.

Public API:
    XCUITestDriver -- The command translator
    DriverError -- Base class of driver errors
    UnsupportedOperationError -- Command not available in this context
"""

from xcuidriver.driver.errors import (
    DriverError,
    InvalidArgumentError,
    NoSessionProxyError,
    SessionNotCreatedError,
    UnsupportedOperationError,
)
from xcuidriver.driver.xcuitest import XCUITestDriver

__all__ = [
    "DriverError",
    "InvalidArgumentError",
    "NoSessionProxyError",
    "SessionNotCreatedError",
    "UnsupportedOperationError",
    "XCUITestDriver",
]
