"""Cryptocurrency price providers."""
from crypto_advisor.providers.crypto.coingecko.coin_gecko_provider import (
    STATIC_COIN_PRICES, CoinGeckoProvider)

__all__ = ["CoinGeckoProvider", "STATIC_COIN_PRICES"]
