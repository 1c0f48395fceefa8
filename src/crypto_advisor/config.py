"""Application settings.

Built once (see get_settings) and handed to providers and stores by the DI
container. Values come from environment variables or a local .env file.
"""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_DATABASE_URL = "sqlite:///./crypto_advisor.db"


class Settings(BaseSettings):
    """Runtime configuration for the API, stores and upstream providers."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "AI Crypto Advisor"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)

    # Persistence
    database_url: str = _DEFAULT_DATABASE_URL
    sql_echo: bool = False

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = Field(default=60 * 24, ge=1)

    # CoinGecko
    coingecko_api_key: str | None = None
    coingecko_plan: str = "demo"  # demo | pro
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_pro_base_url: str = "https://pro-api.coingecko.com/api/v3"
    coingecko_timeout: float = 15.0

    # CryptoPanic
    cryptopanic_api_key: str | None = None
    cryptopanic_base_url: str = "https://cryptopanic.com/api/v1"
    cryptopanic_timeout: float = 15.0

    # Language models
    openrouter_api_key: str | None = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_model: str = "meta-llama/llama-3.2-3b-instruct:free"
    openrouter_timeout: float = 15.0
    huggingface_api_key: str | None = None
    huggingface_base_url: str = "https://router.huggingface.co/v1"
    huggingface_model: str = "meta-llama/Llama-3.2-3B-Instruct"
    huggingface_timeout: float = 20.0
    llm_retry_attempts: int = Field(default=0, ge=0, le=5)
    llm_retry_backoff: float = Field(default=0.5, ge=0.0)

    # Reddit
    reddit_subreddit: str = "cryptocurrencymemes"
    reddit_hosts: tuple[str, ...] = ("https://www.reddit.com", "https://reddit.com")
    reddit_timeout: float = 10.0
    reddit_user_agent: str = "ai-crypto-advisor/1.0"

    @field_validator(
        "coingecko_api_key",
        "cryptopanic_api_key",
        "openrouter_api_key",
        "huggingface_api_key",
        mode="before",
    )
    @classmethod
    def _drop_placeholder_keys(cls, value: str | None) -> str | None:
        """Treat empty and `your-...-here` template values as unset."""
        if value is None:
            return None
        value = str(value).strip()
        if not value or (value.startswith("your-") and value.endswith("-here")):
            return None
        return value

    @field_validator("coingecko_plan")
    @classmethod
    def _check_plan(cls, value: str) -> str:
        value = value.lower()
        if value not in ("demo", "pro"):
            raise ValueError("coingecko_plan must be 'demo' or 'pro'")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
