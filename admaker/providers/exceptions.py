"""
Provider exceptions.
"""
from typing import Optional


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"[{provider}] {message}")


class ProviderRequestError(ProviderError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, provider: str, status_code: int, body: Optional[str] = None):
        super().__init__(provider, f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class ProviderUnavailable(ProviderError):
    """Provider could not be reached (DNS, connection, timeout)."""

    def __init__(self, provider: str, reason: str = "unavailable"):
        super().__init__(provider, f"Provider unavailable: {reason}")
        self.reason = reason
