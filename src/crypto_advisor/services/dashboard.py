"""Dashboard service: one personalised view built from four providers.

Holds the providers and the preference store; every request recomputes the
dashboard from scratch (no caching, no writes).
"""
import asyncio
import logging

from fastapi.concurrency import run_in_threadpool

from crypto_advisor.db import InvestorType, PreferenceStore, UserPreferences
from crypto_advisor.providers import (CoinGeckoProvider, CryptoPanicProvider,
                                      InsightProvider, RedditMemeProvider)
from crypto_advisor.schemas import (AIInsight, CoinPrice, DashboardResponse,
                                    PreferencesEcho)

logger = logging.getLogger(__name__)

MAX_SPECIFIC_COINS = 10
TOP_COINS = 10
NEWS_COUNT = 10


class DashboardService:
    def __init__(
        self,
        preference_store: PreferenceStore,
        price_provider: CoinGeckoProvider,
        news_provider: CryptoPanicProvider,
        insight_provider: InsightProvider,
        meme_provider: RedditMemeProvider,
    ) -> None:
        self._preferences = preference_store
        self._prices = price_provider
        self._news = news_provider
        self._insights = insight_provider
        self._memes = meme_provider

    async def get_dashboard(self, user_id: int) -> DashboardResponse:
        """Build the dashboard for user_id; users without preferences get defaults."""
        prefs = await run_in_threadpool(self._preferences.get_preferences, user_id)
        assets = list(prefs.interested_assets) if prefs else []
        investor_type = InvestorType(prefs.investor_type).value if prefs else None

        coin_prices, market_news, ai_insight, meme = await asyncio.gather(
            self._coin_prices(assets),
            self._news.get_market_news(limit=NEWS_COUNT, interested_assets=assets),
            self._insight(assets, investor_type),
            self._memes.get_random_meme(),
        )
        logger.debug(
            "Dashboard for user %s: %d coins, %d headlines, insight by %s",
            user_id,
            len(coin_prices),
            len(market_news),
            ai_insight.model,
        )
        return DashboardResponse(
            coin_prices=coin_prices,
            market_news=market_news,
            ai_insight=ai_insight,
            meme=meme,
            preferences=self._echo(prefs),
        )

    async def _coin_prices(self, assets: list[str]) -> list[CoinPrice]:
        if assets:
            return await self._prices.get_specific_prices(assets[:MAX_SPECIFIC_COINS])
        return await self._prices.get_top_prices(limit=TOP_COINS)

    async def _insight(self, assets: list[str], investor_type: str | None) -> AIInsight:
        return await self._insights.get_insight(
            interested_assets=assets or None, investor_type=investor_type
        )

    @staticmethod
    def _echo(prefs: UserPreferences | None) -> PreferencesEcho | None:
        if prefs is None:
            return None
        return PreferencesEcho(
            investor_type=prefs.investor_type,
            content_preferences=prefs.content_preferences,
        )

    async def close(self) -> None:
        """Close all providers. Call from app lifespan shutdown."""
        for provider in (self._prices, self._news, self._insights, self._memes):
            try:
                await provider.close()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Error closing provider %s: %s", type(provider).__name__, exc)
