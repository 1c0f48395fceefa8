"""Pydantic schemas for API and runtime use. Not persisted to DB."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from crypto_advisor.db import (ContentPreference, Feedback, FeedbackType,
                               InvestorType, User, UserPreferences, VoteType)


class CamelModel(BaseModel):
    """Serializes with camelCase keys; accepts both camelCase and snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- Dashboard items ----


class CoinPrice(BaseModel):
    """Coin price snapshot (CoinGecko /coins/markets shape)."""

    id: str
    symbol: str
    name: str
    current_price: float | None = None
    price_change_percentage_24h: float = 0.0
    market_cap: float | None = None
    image: str | None = None


class NewsSource(BaseModel):
    title: str
    region: str = "global"


class NewsCurrency(BaseModel):
    code: str
    title: str | None = None


class NewsItem(BaseModel):
    """Market news headline (CryptoPanic post shape)."""

    id: str
    title: str
    url: str | None = None
    published_at: datetime
    source: NewsSource
    currencies: list[NewsCurrency] = Field(default_factory=list)


class AIInsight(CamelModel):
    """One generated market comment; model names the tier that produced it."""

    id: str
    content: str
    generated_at: datetime
    model: str


class MemeItem(CamelModel):
    id: str
    title: str
    image_url: str
    source: str
    link: str | None = None


class PreferencesEcho(CamelModel):
    investor_type: InvestorType
    content_preferences: list[ContentPreference]


class DashboardResponse(CamelModel):
    """Aggregated dashboard, recomputed on every request."""

    coin_prices: list[CoinPrice]
    market_news: list[NewsItem]
    ai_insight: AIInsight
    meme: MemeItem
    preferences: PreferencesEcho | None = None


# ---- Auth ----


MAX_PASSWORD_BYTES = 72


class SignupRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only hashes the first 72 bytes.
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_model(cls, user: User) -> "UserOut":
        return cls(id=user.id, name=user.name, email=user.email)


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class IdentityOut(CamelModel):
    user_id: int
    email: str


class MeResponse(BaseModel):
    message: str = "User authenticated"
    user: IdentityOut


# ---- Onboarding ----


class OnboardingRequest(CamelModel):
    interested_assets: list[str] = Field(min_length=1)
    investor_type: InvestorType
    content_preferences: list[ContentPreference] = Field(min_length=1)

    @field_validator("interested_assets")
    @classmethod
    def _assets_not_blank(cls, value: list[str]) -> list[str]:
        cleaned = [asset.strip() for asset in value]
        if any(not asset for asset in cleaned):
            raise ValueError("Each asset must be a non-empty string")
        return cleaned


class PreferencesOut(CamelModel):
    id: int
    user_id: int
    interested_assets: list[str]
    investor_type: InvestorType
    content_preferences: list[ContentPreference]
    completed_at: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, prefs: UserPreferences) -> "PreferencesOut":
        return cls.model_validate(prefs, from_attributes=True)


class PreferencesResponse(BaseModel):
    preferences: PreferencesOut


class SavedPreferencesResponse(BaseModel):
    message: str = "Preferences saved successfully"
    preferences: PreferencesOut


class OnboardingStatus(BaseModel):
    completed: bool


# ---- Feedback ----


class FeedbackRequest(CamelModel):
    feedback_type: FeedbackType
    item_id: str = Field(min_length=1, max_length=512)
    vote: VoteType


class FeedbackOut(CamelModel):
    id: int
    user_id: int
    feedback_type: FeedbackType
    item_id: str
    vote: VoteType
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, feedback: Feedback) -> "FeedbackOut":
        return cls.model_validate(feedback, from_attributes=True)


class FeedbackResponse(BaseModel):
    feedback: FeedbackOut


class SubmittedFeedbackResponse(BaseModel):
    message: str = "Feedback submitted successfully"
    feedback: FeedbackOut


__all__ = [
    "AIInsight",
    "AuthResponse",
    "CamelModel",
    "CoinPrice",
    "DashboardResponse",
    "FeedbackOut",
    "FeedbackRequest",
    "FeedbackResponse",
    "IdentityOut",
    "LoginRequest",
    "MeResponse",
    "MemeItem",
    "NewsCurrency",
    "NewsItem",
    "NewsSource",
    "OnboardingRequest",
    "OnboardingStatus",
    "PreferencesEcho",
    "PreferencesOut",
    "PreferencesResponse",
    "SavedPreferencesResponse",
    "SignupRequest",
    "SubmittedFeedbackResponse",
    "UserOut",
]
