"""
Pytest configuration and shared fixtures.
"""
from collections.abc import Callable

import httpx
import pytest

from crypto_advisor.config import Settings
from crypto_advisor.db import FeedbackStore, PreferenceStore, UserStore
from crypto_advisor.db.sessions import create_db_engine, init_db


def mock_transport(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
    """MockTransport that also records every request it sees on `.requests`."""
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    transport = httpx.MockTransport(recording_handler)
    transport.requests = requests
    return transport


def failing_transport(status_code: int = 503) -> httpx.MockTransport:
    """Every upstream request answers with status_code."""
    return mock_transport(lambda request: httpx.Response(status_code, json={"error": "unavailable"}))


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's .env and with no upstream keys."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret="test-secret",
        coingecko_api_key=None,
        cryptopanic_api_key=None,
        openrouter_api_key=None,
        huggingface_api_key=None,
    )


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with all tables."""
    db_engine = create_db_engine("sqlite://")
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def user_store(engine) -> UserStore:
    return UserStore(engine)


@pytest.fixture
def preference_store(engine) -> PreferenceStore:
    return PreferenceStore(engine)


@pytest.fixture
def feedback_store(engine) -> FeedbackStore:
    return FeedbackStore(engine)


@pytest.fixture
def user(user_store):
    """A persisted user account."""
    return user_store.create_user("Ada", "ada@example.com", "secret123")


@pytest.fixture
def sample_market_item():
    """One CoinGecko /coins/markets entry."""
    return {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "image": "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
        "current_price": 64000.5,
        "market_cap": 1_260_000_000_000,
        "price_change_percentage_24h": 1.75,
    }


@pytest.fixture
def sample_post():
    """One CryptoPanic /posts/ result."""
    return {
        "id": 18734,
        "title": "Bitcoin breaks above resistance",
        "url": "https://cryptopanic.com/news/18734/bitcoin-breaks",
        "published_at": "2024-05-01T12:30:00Z",
        "domain": "coindesk.com",
        "source": {"title": "CoinDesk", "region": "en", "domain": "coindesk.com"},
        "currencies": [{"code": "BTC", "title": "Bitcoin"}],
    }


@pytest.fixture
def make_transport():
    """Factory fixture: make_transport(handler) -> recording MockTransport."""
    return mock_transport


@pytest.fixture
def make_failing_transport():
    return failing_transport
