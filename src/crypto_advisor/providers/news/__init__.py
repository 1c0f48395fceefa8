"""Market news providers."""
from crypto_advisor.providers.news.cryptopanic.crypto_panic_provider import (
    CryptoPanicProvider, currency_codes_for, fallback_news)

__all__ = ["CryptoPanicProvider", "currency_codes_for", "fallback_news"]
