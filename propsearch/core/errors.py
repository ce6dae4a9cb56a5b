"""Error taxonomy for property search.

Provider-level errors are raised by the listing adapters and handled inside
the aggregator. Only ``ProvidersUnavailableError`` reaches callers.
"""

from typing import List, Optional, Tuple


class PropertySearchError(Exception):
    """Base exception for property search failures.

    Attributes:
        message: Human-readable error message
        provider: Name of the provider that failed, if any
    """

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider


class ProviderConfigurationError(PropertySearchError):
    """A provider's credential is missing; no request was attempted."""


class UpstreamError(PropertySearchError):
    """A provider answered with a non-success status or an unusable body."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, provider=provider)
        self.status_code = status_code


class ProvidersUnavailableError(PropertySearchError):
    """Every configured provider failed.

    Distinct from an empty result: zero listings is a successful search.
    """

    DEFAULT_MESSAGE = (
        "Property data APIs are not configured. "
        "Please provide valid API keys for RealtyMole or RentSpree."
    )

    def __init__(self, failures: Optional[List[Tuple[str, Exception]]] = None):
        super().__init__(self.DEFAULT_MESSAGE)
        self.failures = failures or []
