"""Meme providers."""
from crypto_advisor.providers.memes.catalog import MEME_CATALOG
from crypto_advisor.providers.memes.reddit.reddit_meme_provider import \
    RedditMemeProvider

__all__ = ["MEME_CATALOG", "RedditMemeProvider"]
