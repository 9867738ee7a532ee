"""Command proxy module for xcuidriver.

Forwards translated commands to WebDriverAgent via pluggable backends.

Public API:
    CommandProxy -- Abstract base class
    ProxyError -- Raised on transport or agent failures
    WdaHttpProxy -- httpx backend
"""

from xcuidriver.proxy.base import CommandProxy, ProxyError

__all__ = ["CommandProxy", "ProxyError", "WdaHttpProxy"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "WdaHttpProxy":
        from xcuidriver.proxy.http_backend import WdaHttpProxy
        return WdaHttpProxy
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
