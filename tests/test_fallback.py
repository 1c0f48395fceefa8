"""
Fallback chain and failure classification tests.
"""
import httpx
import pytest

from crypto_advisor.providers.core import (EmptyResultError, FailureClassifier,
                                           FailureReason, FallbackChain,
                                           FallbackTier, InvalidContentError,
                                           ProviderNotConfiguredError,
                                           TierFailure, TierSuccess)
from crypto_advisor.providers.core.error_mapper import (is_rate_limited,
                                                       is_transient)


def _status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.example.com/x")
    response = httpx.Response(code, request=request)
    return httpx.HTTPStatusError(f"HTTP {code}", request=request, response=response)


def _returning(value):
    async def fetch():
        return value

    return fetch


def _raising(exc: Exception):
    async def fetch():
        raise exc

    return fetch


class TestFailureClassifier:
    """Test mapping of exceptions to failure reasons."""

    @pytest.mark.parametrize(
        "exc, reason",
        [
            (EmptyResultError("nothing"), FailureReason.EMPTY),
            (ProviderNotConfiguredError("no key"), FailureReason.NOT_CONFIGURED),
            (InvalidContentError("short"), FailureReason.INVALID),
            (_status_error(429), FailureReason.RATE_LIMITED),
            (_status_error(500), FailureReason.ERROR),
            (httpx.ConnectError("refused"), FailureReason.ERROR),
            (KeyError("id"), FailureReason.ERROR),
        ],
    )
    def test_classify(self, exc, reason):
        assert FailureClassifier("CoinGecko").classify(exc) is reason

    def test_describe_names_api_and_status(self):
        assert FailureClassifier("CoinGecko").describe(_status_error(503)) == "CoinGecko returned HTTP 503"

    def test_rate_limit_is_not_transient(self):
        """Should never treat 429 as retryable."""
        assert is_rate_limited(_status_error(429))
        assert not is_transient(_status_error(429))

    def test_server_and_transport_errors_are_transient(self):
        assert is_transient(_status_error(502))
        assert is_transient(httpx.ReadTimeout("slow"))
        assert not is_transient(_status_error(404))
        assert not is_transient(ValueError("bad json"))


class TestFallbackChain:
    """Test ordered tier resolution."""

    @pytest.mark.asyncio
    async def test_first_tier_wins(self):
        chain = FallbackChain(
            "prices",
            [FallbackTier("live", _returning([1])), FallbackTier("static", _returning([2]))],
        )
        result = await chain.resolve()
        assert result == TierSuccess(tier="live", value=[1])

    @pytest.mark.asyncio
    async def test_falls_through_to_next_tier(self):
        chain = FallbackChain(
            "prices",
            [
                FallbackTier("live", _raising(_status_error(500))),
                FallbackTier("static", _returning("snapshot")),
            ],
        )
        result = await chain.resolve()
        assert result.tier == "static"
        assert result.value == "snapshot"

    @pytest.mark.asyncio
    async def test_skips_tier_that_does_not_accept_previous_reason(self):
        """A tier restricted to EMPTY/RATE_LIMITED should not run after a generic error."""
        calls: list[str] = []

        async def top_n():
            calls.append("top")
            return "top"

        chain = FallbackChain(
            "prices",
            [
                FallbackTier("ids", _raising(ValueError("bad payload"))),
                FallbackTier("top", top_n, accepts=(FailureReason.EMPTY, FailureReason.RATE_LIMITED)),
                FallbackTier("static", _returning("static")),
            ],
        )
        result = await chain.resolve()
        assert result.tier == "static"
        assert calls == []

    @pytest.mark.asyncio
    async def test_runs_restricted_tier_after_accepted_reason(self):
        chain = FallbackChain(
            "prices",
            [
                FallbackTier("ids", _raising(EmptyResultError("none"))),
                FallbackTier("top", _returning("top"), accepts=(FailureReason.EMPTY,)),
                FallbackTier("static", _returning("static")),
            ],
        )
        assert (await chain.resolve()).tier == "top"

    @pytest.mark.asyncio
    async def test_attempt_reports_failure(self):
        chain = FallbackChain("news", [FallbackTier("live", _raising(_status_error(429)))])
        failure = await chain.attempt(chain._tiers[0])
        assert isinstance(failure, TierFailure)
        assert failure.reason is FailureReason.RATE_LIMITED

    @pytest.mark.asyncio
    async def test_every_tier_failing_raises(self):
        chain = FallbackChain("news", [FallbackTier("live", _raising(EmptyResultError("none")))])
        with pytest.raises(RuntimeError):
            await chain.resolve()

    @pytest.mark.asyncio
    async def test_programming_errors_propagate(self):
        """Should not swallow exceptions outside the provider error set."""
        chain = FallbackChain(
            "news",
            [FallbackTier("live", _raising(LookupError("bug"))), FallbackTier("static", _returning(1))],
        )
        with pytest.raises(LookupError):
            await chain.resolve()

    def test_requires_at_least_one_tier(self):
        with pytest.raises(ValueError):
            FallbackChain("news", [])
