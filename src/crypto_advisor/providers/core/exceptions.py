"""Provider errors raised inside fallback tiers.

These never leave an adapter: the fallback chain turns them into explicit
tier failures and moves on to the next tier.
"""


class ProviderError(Exception):
    """Base class for upstream provider failures."""


class EmptyResultError(ProviderError):
    """Upstream answered successfully but returned nothing usable."""


class ProviderNotConfiguredError(ProviderError):
    """Tier needs credentials that are not configured."""


class InvalidContentError(ProviderError):
    """Upstream returned content that fails validation (e.g. too short)."""
