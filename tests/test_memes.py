"""
Reddit meme provider tests.
"""
import random

import httpx
import pytest

from crypto_advisor.providers.memes import MEME_CATALOG, RedditMemeProvider
from crypto_advisor.providers.memes.reddit.reddit_meme_provider import (
    image_url_for, meme_from_post)


def _listing(*posts: dict) -> dict:
    return {"data": {"children": [{"kind": "t3", "data": post} for post in posts]}}


IMAGE_POST = {
    "id": "abc123",
    "title": "When the dip keeps dipping",
    "url": "https://i.redd.it/abc123.png",
    "post_hint": "image",
    "permalink": "/r/cryptocurrencymemes/comments/abc123/when_the_dip/",
    "stickied": False,
    "over_18": False,
}
STICKIED_POST = dict(IMAGE_POST, id="sticky", stickied=True)
NSFW_POST = dict(IMAGE_POST, id="nsfw", over_18=True)
TEXT_POST = {"id": "txt", "title": "Daily discussion", "url": "https://reddit.com/r/x", "is_self": True}


class TestPostFiltering:
    def test_image_by_extension(self):
        assert image_url_for({"url": "https://i.imgur.com/x.JPG?s=1"}) == "https://i.imgur.com/x.JPG?s=1"

    def test_preview_url_is_unescaped(self):
        post = {
            "url": "https://v.redd.it/clip",
            "preview": {"images": [{"source": {"url": "https://preview.redd.it/a.jpg?width=640&amp;s=f00"}}]},
        }
        assert image_url_for(post) == "https://preview.redd.it/a.jpg?width=640&s=f00"

    def test_text_post_is_not_a_meme(self):
        assert meme_from_post(TEXT_POST, "cryptocurrencymemes") is None

    def test_stickied_and_nsfw_skipped(self):
        assert meme_from_post(STICKIED_POST, "cryptocurrencymemes") is None
        assert meme_from_post(NSFW_POST, "cryptocurrencymemes") is None

    def test_meme_fields(self):
        meme = meme_from_post(IMAGE_POST, "cryptocurrencymemes")
        assert meme.id == "reddit-abc123"
        assert meme.image_url == "https://i.redd.it/abc123.png"
        assert meme.source == "r/cryptocurrencymemes"
        assert meme.link == "https://www.reddit.com/r/cryptocurrencymemes/comments/abc123/when_the_dip/"


class TestRedditMemeProvider:
    """Test listing fetch, host retry and catalog fallback."""

    @pytest.mark.asyncio
    async def test_picks_only_qualifying_post(self, make_transport):
        listing = _listing(STICKIED_POST, TEXT_POST, NSFW_POST, IMAGE_POST)
        transport = make_transport(lambda request: httpx.Response(200, json=listing))
        async with RedditMemeProvider(transport=transport, rng=random.Random(7)) as provider:
            meme = await provider.get_random_meme()

        request = transport.requests[0]
        assert request.url.path == "/r/cryptocurrencymemes/hot.json"
        assert request.url.params["limit"] == "50"
        assert "ai-crypto-advisor" in request.headers["User-Agent"]
        assert meme.id == "reddit-abc123"

    @pytest.mark.asyncio
    async def test_retries_plain_host_when_www_unreachable(self, make_transport):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "www.reddit.com":
                raise httpx.ConnectError("Name or service not known", request=request)
            return httpx.Response(200, json=_listing(IMAGE_POST))

        transport = make_transport(handler)
        async with RedditMemeProvider(transport=transport) as provider:
            meme = await provider.get_random_meme()

        assert [r.url.host for r in transport.requests] == ["www.reddit.com", "reddit.com"]
        assert meme.id == "reddit-abc123"

    @pytest.mark.asyncio
    async def test_no_image_posts_uses_catalog(self, make_transport):
        transport = make_transport(lambda request: httpx.Response(200, json=_listing(TEXT_POST)))
        async with RedditMemeProvider(transport=transport) as provider:
            meme = await provider.get_random_meme()

        assert meme in MEME_CATALOG
        assert meme.source == "Crypto Memes"

    @pytest.mark.asyncio
    async def test_both_hosts_down_uses_catalog(self, make_transport):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        transport = make_transport(handler)
        async with RedditMemeProvider(transport=transport) as provider:
            meme = await provider.get_random_meme()

        assert len(transport.requests) == 2
        assert meme.id in {"1", "2", "3", "4", "5"}

    @pytest.mark.asyncio
    async def test_catalog_pick_is_seeded(self, make_failing_transport):
        async with RedditMemeProvider(transport=make_failing_transport(), rng=random.Random(1)) as first:
            a = await first.get_random_meme()
        async with RedditMemeProvider(transport=make_failing_transport(), rng=random.Random(1)) as second:
            b = await second.get_random_meme()

        assert a == b

    def test_catalog_contents(self):
        assert [m.title for m in MEME_CATALOG] == [
            "HODL Strong",
            "When Bitcoin Dips",
            "Diamond Hands",
            "To the Moon",
            "Buy the Dip",
        ]
