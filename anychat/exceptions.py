"""
Custom exceptions for AnyChat clients.
"""


class AnyChatError(Exception):
    """Base exception for all AnyChat errors."""

    pass


class UnsupportedProviderError(AnyChatError, ValueError):
    """Raised when a configuration names a provider outside the known set."""

    def __init__(self, provider: object):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")


class UnsupportedCapabilityError(AnyChatError, NotImplementedError):
    """
    Raised when an optional operation is called on a provider that lacks it.

    This is raised before any network call is made, so callers can tell
    "not supported by provider X" apart from a vendor or transport failure.
    """

    def __init__(self, capability: str, provider: str, *, pending: bool = False):
        self.capability = capability
        self.provider = provider
        self.pending = pending
        phrase = "is not yet supported by" if pending else "is not supported by"
        super().__init__(f"{capability} {phrase} {provider}")


class ProviderAPIError(AnyChatError):
    """Raised when a raw HTTP call to a provider returns a non-2xx status."""

    def __init__(self, provider: str, reason: str, status_code: int | None = None):
        self.provider = provider
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{provider} API error: {reason}")
