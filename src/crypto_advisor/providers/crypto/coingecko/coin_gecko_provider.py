"""CoinGecko price provider for the dashboard coin list."""
import logging
from collections.abc import Sequence

import httpx

from crypto_advisor.providers.core import (DashboardProviderABC,
                                           EmptyResultError, FailureClassifier,
                                           FailureReason, FallbackChain,
                                           FallbackTier)
from crypto_advisor.providers.core.lookups import coin_id_for
from crypto_advisor.providers.crypto.coingecko.models import (
    CoinGeckoMarketsByIdsParams, CoinGeckoMarketsParams)
from crypto_advisor.schemas import CoinPrice

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10

# Served when CoinGecko is unreachable; illustrative values only.
STATIC_COIN_PRICES: tuple[CoinPrice, ...] = (
    CoinPrice(
        id="bitcoin",
        symbol="BTC",
        name="Bitcoin",
        current_price=45000,
        price_change_percentage_24h=2.5,
        market_cap=850_000_000_000,
        image="https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
    ),
    CoinPrice(
        id="ethereum",
        symbol="ETH",
        name="Ethereum",
        current_price=2800,
        price_change_percentage_24h=-1.2,
        market_cap=340_000_000_000,
        image="https://assets.coingecko.com/coins/images/279/large/ethereum.png",
    ),
)


class CoinGeckoProvider(DashboardProviderABC):
    """Coin prices via CoinGecko /coins/markets.

    Two modes: top-N by market cap, or a specific list of onboarding display
    names ("Bitcoin", "Binance Coin", ...) mapped to CoinGecko ids. Both modes
    fall back to a static two-coin snapshot, so callers always get a list.
    """

    BASE_URL = "https://api.coingecko.com/api/v3"
    PRO_BASE_URL = "https://pro-api.coingecko.com/api/v3"

    def __init__(
        self,
        api_key: str | None = None,
        use_pro_api: bool = False,
        timeout: float = 15.0,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the CoinGecko provider.

        Args:
            api_key: Optional CoinGecko API key (demo or pro plan).
            use_pro_api: Send the key as a pro key against the pro endpoint.
            timeout: Per-request timeout in seconds.
            base_url: Override the endpoint (defaults depend on use_pro_api).
            transport: Optional httpx transport (tests).
        """
        headers: dict[str, str] = {"Accept": "application/json"}
        if api_key:
            header = "x-cg-pro-api-key" if use_pro_api else "x-cg-demo-api-key"
            headers[header] = api_key

        base = base_url or (self.PRO_BASE_URL if use_pro_api else self.BASE_URL)
        super().__init__(
            self._make_client(base_url=base, headers=headers, timeout=timeout, transport=transport)
        )
        self._classifier = FailureClassifier(api_name="CoinGecko")

    async def get_top_prices(self, limit: int = DEFAULT_TOP_N, currency: str = "usd") -> list[CoinPrice]:
        """Top `limit` coins by market cap; static snapshot on failure."""
        chain = FallbackChain(
            "coin-prices",
            [
                FallbackTier("coingecko-top", lambda: self._fetch_top(limit, currency)),
                FallbackTier("static", self._static_prices),
            ],
            self._classifier,
        )
        return (await chain.resolve()).value

    async def get_specific_prices(
        self, coin_names: Sequence[str], currency: str = "usd"
    ) -> list[CoinPrice]:
        """Prices for the given display names.

        An empty upstream answer or a rate limit falls back to top-N with
        N = len(coin_names); any other failure serves the static snapshot.
        """
        coin_ids = [coin_id_for(name) for name in coin_names]
        top_n = len(coin_names) or DEFAULT_TOP_N
        logger.debug("CoinGecko ids for %s: %s", list(coin_names), coin_ids)
        chain = FallbackChain(
            "coin-prices",
            [
                FallbackTier("coingecko-ids", lambda: self._fetch_by_ids(coin_ids, currency)),
                FallbackTier(
                    "coingecko-top",
                    lambda: self._fetch_top(top_n, currency),
                    accepts=(FailureReason.EMPTY, FailureReason.RATE_LIMITED),
                ),
                FallbackTier("static", self._static_prices),
            ],
            self._classifier,
        )
        return (await chain.resolve()).value

    async def _fetch_top(self, limit: int, currency: str) -> list[CoinPrice]:
        params = CoinGeckoMarketsParams(vs_currency=currency, per_page=limit).model_dump()
        response = await self._client.get("/coins/markets", params=params)
        response.raise_for_status()
        data = response.json()
        if not data:
            raise EmptyResultError("CoinGecko returned no top coins")
        return [self._price_from_market_item(item) for item in data]

    async def _fetch_by_ids(self, coin_ids: list[str], currency: str) -> list[CoinPrice]:
        if not coin_ids:
            raise EmptyResultError("No coin ids requested")
        params = CoinGeckoMarketsByIdsParams(vs_currency=currency).model_dump() | {
            "ids": ",".join(coin_ids),
        }
        response = await self._client.get("/coins/markets", params=params)
        response.raise_for_status()
        data = response.json()
        if not data:
            raise EmptyResultError(f"No CoinGecko match for ids {coin_ids}")
        return [self._price_from_market_item(item) for item in data]

    async def _static_prices(self) -> list[CoinPrice]:
        return [price.model_copy() for price in STATIC_COIN_PRICES]

    @staticmethod
    def _price_from_market_item(item: dict) -> CoinPrice:
        """Build a CoinPrice from a /coins/markets response item."""
        return CoinPrice(
            id=item["id"],
            symbol=str(item["symbol"]).upper(),
            name=item["name"],
            current_price=item.get("current_price"),
            price_change_percentage_24h=item.get("price_change_percentage_24h") or 0.0,
            market_cap=item.get("market_cap"),
            image=item.get("image"),
        )
