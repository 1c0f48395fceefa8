"""Ordered fallback tiers per capability.

Each adapter describes its policy as a list of FallbackTier objects. The
FallbackChain runs them in order until one succeeds and reports which tier
answered, so callers and tests never have to infer it from nested
try/except blocks.
"""
import logging
from collections.abc import Awaitable, Callable, Collection, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from crypto_advisor.providers.core.error_mapper import (PROVIDER_EXCEPTIONS,
                                                       FailureClassifier,
                                                       FailureReason)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TierSuccess(Generic[T]):
    tier: str
    value: T


@dataclass(frozen=True)
class TierFailure:
    tier: str
    reason: FailureReason
    error: Exception | None = None


@dataclass(frozen=True)
class FallbackTier(Generic[T]):
    """One ranked strategy.

    Args:
        name: Label reported in results and logs.
        fetch: Coroutine factory returning the value or raising a provider error.
        accepts: Previous failure reasons after which this tier may run. None
            means "always". A tier listed first sees no previous failure and
            always runs.
    """

    name: str
    fetch: Callable[[], Awaitable[T]]
    accepts: Collection[FailureReason] | None = None

    def applies_after(self, previous: TierFailure | None) -> bool:
        if previous is None or self.accepts is None:
            return True
        return previous.reason in self.accepts


class FallbackChain(Generic[T]):
    """Runs tiers in order; the last tier must be one that cannot fail."""

    def __init__(
        self,
        capability: str,
        tiers: Sequence[FallbackTier[T]],
        classifier: FailureClassifier | None = None,
    ) -> None:
        if not tiers:
            raise ValueError("FallbackChain needs at least one tier")
        self._capability = capability
        self._tiers = tuple(tiers)
        self._classifier = classifier or FailureClassifier()

    async def attempt(self, tier: FallbackTier[T]) -> TierSuccess[T] | TierFailure:
        """Run a single tier and convert provider errors into a TierFailure."""
        try:
            value = await tier.fetch()
        except PROVIDER_EXCEPTIONS as exc:
            reason = self._classifier.classify(exc)
            logger.warning(
                "%s: tier '%s' failed (%s): %s",
                self._capability,
                tier.name,
                reason.value,
                self._classifier.describe(exc),
            )
            return TierFailure(tier=tier.name, reason=reason, error=exc)
        return TierSuccess(tier=tier.name, value=value)

    async def resolve(self) -> TierSuccess[T]:
        """Return the first successful tier's result."""
        previous: TierFailure | None = None
        for tier in self._tiers:
            if not tier.applies_after(previous):
                logger.debug(
                    "%s: skipping tier '%s' after %s",
                    self._capability,
                    tier.name,
                    previous.reason.value if previous else None,
                )
                continue
            result = await self.attempt(tier)
            if isinstance(result, TierSuccess):
                if previous is not None:
                    logger.info("%s: served by fallback tier '%s'", self._capability, tier.name)
                return result
            previous = result
        raise RuntimeError(f"{self._capability}: every fallback tier failed")
