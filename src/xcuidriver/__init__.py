"""xcuidriver -- WebDriverAgent command translator for iOS automation.

This package implements a driver that accepts WebDriver-style commands
and translates each one into an HTTP call against WebDriverAgent running
on an iOS device or simulator, then reshapes the agent's JSON response
into the value the command promises. The agent itself is reached only
through a single proxy interface, so alternative transports (or test
doubles) can be swapped in without touching the driver.
"""

__version__ = "0.1.0"
