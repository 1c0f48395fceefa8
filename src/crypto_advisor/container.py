"""DI container. Build via init_container(); endpoints use Depends(Provide[Container.*])."""
from typing import Annotated

from dependency_injector import containers, providers
from dependency_injector.wiring import Provide
from fastapi import Depends

from crypto_advisor.config import Settings, get_settings
from crypto_advisor.db import FeedbackStore, PreferenceStore, UserStore
from crypto_advisor.db.sessions import create_db_engine
from crypto_advisor.providers import (ChatCompletionClient, CoinGeckoProvider,
                                      CryptoPanicProvider, InsightProvider,
                                      RedditMemeProvider)
from crypto_advisor.security import AuthGate
from crypto_advisor.services import DashboardService


def create_price_provider(settings: Settings) -> CoinGeckoProvider:
    use_pro = settings.coingecko_plan == "pro"
    return CoinGeckoProvider(
        api_key=settings.coingecko_api_key,
        use_pro_api=use_pro,
        timeout=settings.coingecko_timeout,
        base_url=settings.coingecko_pro_base_url if use_pro else settings.coingecko_base_url,
    )


def create_insight_provider(settings: Settings) -> InsightProvider:
    """OpenRouter first, HuggingFace second; the template tier needs no config."""
    primary = ChatCompletionClient(
        name="OpenRouter",
        base_url=settings.openrouter_base_url,
        model=settings.openrouter_model,
        api_key=settings.openrouter_api_key,
        timeout=settings.openrouter_timeout,
    )
    secondary = ChatCompletionClient(
        name="HuggingFace",
        base_url=settings.huggingface_base_url,
        model=settings.huggingface_model,
        api_key=settings.huggingface_api_key,
        timeout=settings.huggingface_timeout,
        temperature=0.7,
    )
    return InsightProvider(
        primary,
        secondary,
        retry_attempts=settings.llm_retry_attempts,
        retry_backoff=settings.llm_retry_backoff,
    )


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
            "crypto_advisor.deps",
            "crypto_advisor.routers.auth",
            "crypto_advisor.routers.onboarding",
            "crypto_advisor.routers.dashboard",
            "crypto_advisor.routers.feedback",
        ]
    )

    settings = providers.Singleton(get_settings)

    engine = providers.Singleton(
        create_db_engine,
        settings.provided.database_url,
        echo=settings.provided.sql_echo,
    )

    user_store = providers.Singleton(UserStore, engine)
    preference_store = providers.Singleton(PreferenceStore, engine)
    feedback_store = providers.Singleton(FeedbackStore, engine)

    auth_gate = providers.Singleton(
        AuthGate,
        secret=settings.provided.jwt_secret,
        algorithm=settings.provided.jwt_algorithm,
        expire_minutes=settings.provided.jwt_expire_minutes,
    )

    price_provider = providers.Singleton(create_price_provider, settings)
    news_provider = providers.Singleton(
        CryptoPanicProvider,
        api_key=settings.provided.cryptopanic_api_key,
        timeout=settings.provided.cryptopanic_timeout,
        base_url=settings.provided.cryptopanic_base_url,
    )
    insight_provider = providers.Singleton(create_insight_provider, settings)
    meme_provider = providers.Singleton(
        RedditMemeProvider,
        subreddit=settings.provided.reddit_subreddit,
        hosts=settings.provided.reddit_hosts,
        timeout=settings.provided.reddit_timeout,
        user_agent=settings.provided.reddit_user_agent,
    )

    dashboard_service = providers.Singleton(
        DashboardService,
        preference_store=preference_store,
        price_provider=price_provider,
        news_provider=news_provider,
        insight_provider=insight_provider,
        meme_provider=meme_provider,
    )


# Type aliases for route injection (avoid repeating Annotated[...] in every route)
UserStoreDep = Annotated[UserStore, Depends(Provide[Container.user_store])]
PreferenceStoreDep = Annotated[PreferenceStore, Depends(Provide[Container.preference_store])]
FeedbackStoreDep = Annotated[FeedbackStore, Depends(Provide[Container.feedback_store])]
AuthGateDep = Annotated[AuthGate, Depends(Provide[Container.auth_gate])]
DashboardServiceDep = Annotated[DashboardService, Depends(Provide[Container.dashboard_service])]


def init_container(settings: Settings | None = None) -> Container:
    """Create container and wire to router modules."""
    container = Container()
    if settings is not None:
        container.settings.override(providers.Object(settings))
    container.wire()
    return container
