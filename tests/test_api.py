"""
HTTP API tests: full request flow through FastAPI with faked upstreams.
"""
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from crypto_advisor.container import init_container
from crypto_advisor.main import create_app
from crypto_advisor.providers import (CoinGeckoProvider, CryptoPanicProvider,
                                      RedditMemeProvider)

SIGNUP = {"name": "Ada", "email": "ada@example.com", "password": "secret123"}
ONBOARDING = {"interestedAssets": ["Bitcoin"], "investorType": "HODLer", "contentPreferences": ["Charts"]}


@pytest.fixture
def container(settings, make_failing_transport):
    """Container with every upstream unreachable, so each adapter serves its fallback."""
    container = init_container(settings)
    container.price_provider.override(
        providers.Object(CoinGeckoProvider(transport=make_failing_transport()))
    )
    container.news_provider.override(
        providers.Object(CryptoPanicProvider(transport=make_failing_transport()))
    )
    container.meme_provider.override(
        providers.Object(RedditMemeProvider(transport=make_failing_transport()))
    )
    yield container
    container.unwire()


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    token = client.post("/auth/signup", json=SIGNUP).json()["token"]
    return {"Authorization": f"Bearer {token}"}


class TestHealth:
    def test_health(self, client):
        assert client.get("/").json() == {"status": "ok"}


class TestAuthRoutes:
    """Test signup, login and the current-user route."""

    def test_signup(self, client):
        response = client.post("/auth/signup", json=SIGNUP)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["token"]
        assert body["user"]["email"] == "ada@example.com"
        assert "password" not in str(body["user"])

    def test_duplicate_signup_conflicts(self, client):
        client.post("/auth/signup", json=SIGNUP)
        response = client.post("/auth/signup", json=SIGNUP)
        assert response.status_code == 409

    def test_signup_validation(self, client):
        response = client.post("/auth/signup", json={"name": "Ada", "email": "not-an-email", "password": "x"})
        assert response.status_code == 422

    def test_signup_rejects_password_over_72_bytes(self, client):
        """Should answer 422 before hashing, since bcrypt cannot take the whole password."""
        response = client.post("/auth/signup", json=dict(SIGNUP, password="p" * 100))
        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "password"]

        # 36 two-byte characters is 72 bytes: still accepted.
        response = client.post("/auth/signup", json=dict(SIGNUP, password="é" * 36))
        assert response.status_code == 201

    def test_signup_multibyte_password_over_limit(self, client):
        response = client.post("/auth/signup", json=dict(SIGNUP, password="é" * 37))
        assert response.status_code == 422

    def test_signup_rejects_blank_name(self, client):
        response = client.post("/auth/signup", json=dict(SIGNUP, name="   "))
        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "name"]

    def test_signup_strips_name(self, client):
        response = client.post("/auth/signup", json=dict(SIGNUP, name="  Ada  "))
        assert response.json()["user"]["name"] == "Ada"

    def test_login(self, client):
        client.post("/auth/signup", json=SIGNUP)
        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"

    def test_login_wrong_password(self, client):
        client.post("/auth/signup", json=SIGNUP)
        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "nope-nope"})
        assert response.status_code == 401

    def test_me(self, client, auth_headers):
        body = client.get("/user/me", headers=auth_headers).json()
        assert body["user"]["email"] == "ada@example.com"
        assert body["user"]["userId"] > 0

    @pytest.mark.parametrize(
        "headers",
        [{}, {"Authorization": "Bearer garbage"}, {"Authorization": "Basic abc"}],
    )
    def test_protected_routes_uniform_401(self, client, headers):
        for path in ("/dashboard", "/onboarding/status", "/user/me"):
            response = client.get(path, headers=headers)
            assert response.status_code == 401
            assert response.json() == {"detail": "Unauthorized"}
            assert response.headers["WWW-Authenticate"] == "Bearer"


class TestOnboardingRoutes:
    def test_status_before_onboarding(self, client, auth_headers):
        assert client.get("/onboarding/status", headers=auth_headers).json() == {"completed": False}
        assert client.get("/onboarding", headers=auth_headers).status_code == 404

    def test_save_and_read(self, client, auth_headers):
        response = client.post("/onboarding", json=ONBOARDING, headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Preferences saved successfully"
        assert body["preferences"]["interestedAssets"] == ["Bitcoin"]

        prefs = client.get("/onboarding", headers=auth_headers).json()["preferences"]
        assert prefs["investorType"] == "HODLer"
        assert prefs["contentPreferences"] == ["Charts"]

    @pytest.mark.parametrize(
        "body",
        [
            dict(ONBOARDING, interestedAssets=[]),
            dict(ONBOARDING, investorType="Whale"),
            dict(ONBOARDING, contentPreferences=["Gossip"]),
        ],
    )
    def test_invalid_onboarding(self, client, auth_headers, body):
        assert client.post("/onboarding", json=body, headers=auth_headers).status_code == 422


class TestDashboardRoute:
    def test_end_to_end_personalised_dashboard(self, client, auth_headers):
        """Signup, onboard, then see the chosen profile and a BTC price on the dashboard."""
        client.post("/onboarding", json=ONBOARDING, headers=auth_headers)
        assert client.get("/onboarding/status", headers=auth_headers).json() == {"completed": True}

        response = client.get("/dashboard", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["preferences"]["investorType"] == "HODLer"
        assert any(coin["symbol"] == "BTC" for coin in body["coinPrices"])
        assert len(body["marketNews"]) == 10
        assert body["aiInsight"]["model"] == "Fallback"
        assert "interested in Bitcoin" in body["aiInsight"]["content"]
        assert body["meme"]["source"] == "Crypto Memes"

    def test_dashboard_without_preferences(self, client, auth_headers):
        body = client.get("/dashboard", headers=auth_headers).json()
        assert body["preferences"] is None
        assert body["coinPrices"]


class TestFeedbackRoutes:
    def test_vote_and_revote(self, client, auth_headers):
        vote = {"feedbackType": "coin_prices", "itemId": "bitcoin", "vote": "thumbs_up"}
        first = client.post("/feedback", json=vote, headers=auth_headers)
        assert first.status_code == 200
        assert first.json()["message"] == "Feedback submitted successfully"

        client.post("/feedback", json=dict(vote, vote="thumbs_down"), headers=auth_headers)
        stored = client.get("/feedback/coin_prices/bitcoin", headers=auth_headers).json()["feedback"]
        assert stored["vote"] == "thumbs_down"
        assert stored["id"] == first.json()["feedback"]["id"]

    def test_unknown_feedback_type_in_path(self, client, auth_headers):
        response = client.get("/feedback/weather/today", headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid feedback type"}

    def test_missing_feedback(self, client, auth_headers):
        assert client.get("/feedback/meme/1", headers=auth_headers).status_code == 404

    def test_invalid_vote_body(self, client, auth_headers):
        vote = {"feedbackType": "meme", "itemId": "1", "vote": "meh"}
        assert client.post("/feedback", json=vote, headers=auth_headers).status_code == 422


class TestDatabaseErrors:
    def test_storage_failure_is_500(self, container, client, auth_headers):
        broken = container.preference_store()

        def explode(user_id):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        broken.has_completed_onboarding = explode
        response = client.get("/onboarding/status", headers=auth_headers)
        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
