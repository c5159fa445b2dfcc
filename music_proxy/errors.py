from typing import Any, Optional


class ProxyError(Exception):
    """Base error for the proxy backend."""


class ConfigError(ProxyError):
    """Raised at startup when required configuration is missing or malformed."""


class UpstreamError(ProxyError):
    """An upstream API call failed. Details are for server logs only."""

    def __init__(self, message: str, status: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.status = status
        self.details = details
