"""CryptoPanic news provider for the dashboard headlines."""
import logging
from collections.abc import Sequence
from datetime import timedelta

import httpx
from pydantic import ValidationError

from crypto_advisor.providers.core import (DashboardProviderABC,
                                           EmptyResultError, FailureClassifier,
                                           FallbackChain, FallbackTier)
from crypto_advisor.providers.core.lookups import currency_code_for
from crypto_advisor.providers.news.cryptopanic.models import (
    CryptoPanicPostDTO, CryptoPanicPostsParams)
from crypto_advisor.schemas import NewsCurrency, NewsItem, NewsSource
from crypto_advisor.utils import utcnow

logger = logging.getLogger(__name__)

DEFAULT_NEWS_LIMIT = 10
MAX_CURRENCY_CODES = 5  # CryptoPanic filter limit
DEFAULT_CURRENCY_CODES: tuple[str, ...] = ("BTC", "ETH")
BRAND_SOURCE = "CryptoPanic"

# (title, currency code, currency title); timestamps are filled in per call.
_FALLBACK_HEADLINES: tuple[tuple[str, str, str], ...] = (
    ("Bitcoin holds key support as traders weigh macro data", "BTC", "Bitcoin"),
    ("Ethereum staking deposits climb to a new high", "ETH", "Ethereum"),
    ("Spot Bitcoin ETF flows turn positive for the week", "BTC", "Bitcoin"),
    ("Layer-2 activity on Ethereum sets fresh records", "ETH", "Ethereum"),
    ("Solana network upgrade targets faster block times", "SOL", "Solana"),
    ("Stablecoin supply expands as liquidity returns", "BTC", "Bitcoin"),
    ("Analysts watch Bitcoin volatility ahead of options expiry", "BTC", "Bitcoin"),
    ("DeFi lending rates rise on renewed demand", "ETH", "Ethereum"),
    ("Cardano developers ship governance update", "ADA", "Cardano"),
    ("Crypto market sentiment improves as volumes recover", "BTC", "Bitcoin"),
)


def currency_codes_for(interested_assets: Sequence[str] | None) -> list[str]:
    """CryptoPanic currency filter for the user's interests.

    Unmapped names are dropped, duplicates removed, the list is capped at
    MAX_CURRENCY_CODES and defaults to BTC/ETH when nothing maps.
    """
    codes: list[str] = []
    for name in interested_assets or ():
        code = currency_code_for(name)
        if code and code not in codes:
            codes.append(code)
    return codes[:MAX_CURRENCY_CODES] or list(DEFAULT_CURRENCY_CODES)


def fallback_news() -> list[NewsItem]:
    """Static headlines stamped 1..10 hours before now."""
    now = utcnow()
    return [
        NewsItem(
            id=f"fallback-{index}",
            title=title,
            url=None,
            published_at=now - timedelta(hours=index),
            source=NewsSource(title="Crypto News", region="global"),
            currencies=[NewsCurrency(code=code, title=currency_title)],
        )
        for index, (title, code, currency_title) in enumerate(_FALLBACK_HEADLINES, start=1)
    ]


class CryptoPanicProvider(DashboardProviderABC):
    """Market news via the CryptoPanic posts feed.

    Headlines keep CryptoPanic's ordering. On any upstream failure a fixed
    set of recent-looking fallback headlines is served instead.
    """

    BASE_URL = "https://cryptopanic.com/api/v1"

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 15.0,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            self._make_client(
                base_url=base_url or self.BASE_URL,
                headers={"Accept": "application/json", "User-Agent": "AI-Crypto-Advisor/1.0"},
                timeout=timeout,
                transport=transport,
            )
        )
        self._api_key = api_key
        self._classifier = FailureClassifier(api_name="CryptoPanic")

    async def get_market_news(
        self,
        limit: int = DEFAULT_NEWS_LIMIT,
        interested_assets: Sequence[str] | None = None,
    ) -> list[NewsItem]:
        """Up to `limit` headlines filtered by the user's assets."""
        codes = currency_codes_for(interested_assets)
        chain = FallbackChain(
            "market-news",
            [
                FallbackTier("cryptopanic", lambda: self._fetch_posts(codes)),
                FallbackTier("static", self._fallback_news),
            ],
            self._classifier,
        )
        return (await chain.resolve()).value[:limit]

    async def _fetch_posts(self, codes: list[str]) -> list[NewsItem]:
        params = CryptoPanicPostsParams().model_dump() | {"currencies": ",".join(codes)}
        if self._api_key:
            params["auth_token"] = self._api_key
        response = await self._client.get("/posts/", params=params)
        response.raise_for_status()
        results = response.json().get("results") or []

        items: list[NewsItem] = []
        for raw in results:
            try:
                post = CryptoPanicPostDTO.model_validate(raw)
            except ValidationError as exc:
                logger.debug("Skipping malformed CryptoPanic post: %s", exc)
                continue
            items.append(post.to_news_item(default_source=BRAND_SOURCE))
        if not items:
            raise EmptyResultError(f"CryptoPanic returned no posts for {codes}")
        return items

    async def _fallback_news(self) -> list[NewsItem]:
        return fallback_news()
