"""Maps provider exceptions to fallback failure reasons."""
import asyncio
from dataclasses import dataclass
from enum import Enum

import httpx

from crypto_advisor.providers.core.exceptions import (
    EmptyResultError, InvalidContentError, ProviderError,
    ProviderNotConfiguredError)

# Exceptions a tier may raise; anything else is a bug and propagates.
PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ProviderError,
    httpx.HTTPError,
    httpx.InvalidURL,
    ValueError,
    KeyError,
    TypeError,
    IndexError,
    AttributeError,
    TimeoutError,
    OSError,
    asyncio.TimeoutError,
)


class FailureReason(str, Enum):
    """Why a fallback tier did not produce a value."""

    EMPTY = "empty"
    RATE_LIMITED = "rate_limited"
    NOT_CONFIGURED = "not_configured"
    INVALID = "invalid"
    ERROR = "error"


@dataclass(frozen=True)
class FailureClassifier:
    """Classifies exceptions raised by one upstream API.

    Inject one per adapter so log lines name the API (e.g. "CoinGecko").
    """

    api_name: str = "API"

    def classify(self, exc: Exception) -> FailureReason:
        if isinstance(exc, EmptyResultError):
            return FailureReason.EMPTY
        if isinstance(exc, ProviderNotConfiguredError):
            return FailureReason.NOT_CONFIGURED
        if isinstance(exc, InvalidContentError):
            return FailureReason.INVALID
        if is_rate_limited(exc):
            return FailureReason.RATE_LIMITED
        return FailureReason.ERROR

    def describe(self, exc: Exception) -> str:
        """Short human-readable description for log lines."""
        if isinstance(exc, httpx.HTTPStatusError):
            return f"{self.api_name} returned HTTP {exc.response.status_code}"
        if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
            return f"Request to {self.api_name} timed out"
        if isinstance(exc, httpx.TransportError):
            return f"{self.api_name} unreachable: {exc!r}"
        return f"{self.api_name} error: {exc}" if str(exc) else f"{self.api_name} error: {exc!r}"


def is_rate_limited(exc: Exception) -> bool:
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == 429


def is_transient(exc: Exception) -> bool:
    """Transport failures and 5xx answers; 429 is deliberately not transient."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)
