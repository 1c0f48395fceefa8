"""Core provider abstractions."""
from crypto_advisor.providers.core.error_mapper import (FailureClassifier,
                                                       FailureReason)
from crypto_advisor.providers.core.exceptions import (
    EmptyResultError, InvalidContentError, ProviderError,
    ProviderNotConfiguredError)
from crypto_advisor.providers.core.fallback import (FallbackChain,
                                                   FallbackTier, TierFailure,
                                                   TierSuccess)
from crypto_advisor.providers.core.provider_abc import DashboardProviderABC

__all__ = [
    "DashboardProviderABC",
    "EmptyResultError",
    "FailureClassifier",
    "FailureReason",
    "FallbackChain",
    "FallbackTier",
    "InvalidContentError",
    "ProviderError",
    "ProviderNotConfiguredError",
    "TierFailure",
    "TierSuccess",
]
