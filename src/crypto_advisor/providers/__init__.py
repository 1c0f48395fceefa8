"""Upstream content providers for the dashboard."""
from crypto_advisor.providers.crypto import CoinGeckoProvider
from crypto_advisor.providers.insights import (ChatCompletionClient,
                                               InsightProvider)
from crypto_advisor.providers.memes import RedditMemeProvider
from crypto_advisor.providers.news import CryptoPanicProvider

__all__ = [
    "ChatCompletionClient",
    "CoinGeckoProvider",
    "CryptoPanicProvider",
    "InsightProvider",
    "RedditMemeProvider",
]
