"""Reddit meme provider (public JSON listing, no auth)."""
import html
import logging
import random
from collections.abc import Sequence

import httpx

from crypto_advisor.providers.core import (DashboardProviderABC,
                                           EmptyResultError, FailureClassifier,
                                           FallbackChain, FallbackTier)
from crypto_advisor.providers.memes.catalog import MEME_CATALOG
from crypto_advisor.schemas import MemeItem

logger = logging.getLogger(__name__)

REDDIT_HOSTS: tuple[str, ...] = ("https://www.reddit.com", "https://reddit.com")
LISTING_LIMIT = 50
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")


def image_url_for(post: dict) -> str | None:
    """Direct image URL for a listing post, or None if it is not an image."""
    url = post.get("url") or ""
    if post.get("post_hint") == "image" or url.lower().split("?", 1)[0].endswith(IMAGE_EXTENSIONS):
        return url or None
    images = (post.get("preview") or {}).get("images") or []
    if images:
        source_url = (images[0].get("source") or {}).get("url")
        if source_url:
            # Reddit escapes '&' in preview URLs.
            return html.unescape(source_url)
    return None


def meme_from_post(post: dict, subreddit: str) -> MemeItem | None:
    if post.get("stickied") or post.get("over_18"):
        return None
    image_url = image_url_for(post)
    if not image_url:
        return None
    permalink = post.get("permalink")
    return MemeItem(
        id=f"reddit-{post.get('id') or post.get('name')}",
        title=post.get("title") or "Crypto meme",
        image_url=image_url,
        source=f"r/{subreddit}",
        link=f"https://www.reddit.com{permalink}" if permalink else None,
    )


class RedditMemeProvider(DashboardProviderABC):
    """Random image post from a crypto meme subreddit.

    Falls back to a uniform pick from the local catalog when Reddit is
    unreachable or the listing has no qualifying image posts.
    """

    def __init__(
        self,
        subreddit: str = "cryptocurrencymemes",
        hosts: Sequence[str] = REDDIT_HOSTS,
        timeout: float = 10.0,
        user_agent: str = "ai-crypto-advisor/1.0",
        rng: random.Random | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            self._make_client(
                headers={"Accept": "application/json", "User-Agent": user_agent},
                timeout=timeout,
                transport=transport,
            )
        )
        if not hosts:
            raise ValueError("At least one Reddit host is required")
        self._subreddit = subreddit
        self._hosts = tuple(hosts)
        self._rng = rng or random.Random()
        self._classifier = FailureClassifier(api_name="Reddit")

    async def get_random_meme(self) -> MemeItem:
        chain = FallbackChain(
            "meme",
            [
                FallbackTier("reddit", self._fetch_reddit_meme),
                FallbackTier("catalog", self._catalog_meme),
            ],
            self._classifier,
        )
        return (await chain.resolve()).value

    async def _fetch_reddit_meme(self) -> MemeItem:
        posts = await self._fetch_listing()
        memes = [meme for meme in (meme_from_post(p, self._subreddit) for p in posts) if meme]
        if not memes:
            raise EmptyResultError(f"No image posts in r/{self._subreddit}")
        return self._rng.choice(memes)

    async def _fetch_listing(self) -> list[dict]:
        path = f"/r/{self._subreddit}/hot.json"
        last_host = self._hosts[-1]
        for host in self._hosts:
            try:
                response = await self._client.get(f"{host}{path}", params={"limit": LISTING_LIMIT})
            except httpx.ConnectError as exc:
                if host == last_host:
                    raise
                logger.info("Reddit host %s unreachable (%r), trying next host", host, exc)
                continue
            response.raise_for_status()
            children = (response.json().get("data") or {}).get("children") or []
            return [child.get("data") or {} for child in children]
        raise EmptyResultError("No Reddit host configured")

    async def _catalog_meme(self) -> MemeItem:
        return self._rng.choice(MEME_CATALOG).model_copy()
