"""Database models for the crypto advisor service.

Only user/application state is persisted. Dashboard content is fetched from
upstream providers on every request and is never stored.
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from crypto_advisor.utils import utcnow


class InvestorType(str, Enum):
    """Investor profile chosen during onboarding."""

    HODLER = "HODLer"
    DAY_TRADER = "Day Trader"
    NFT_COLLECTOR = "NFT Collector"
    SWING_TRADER = "Swing Trader"
    DEFI_INVESTOR = "DeFi Investor"
    OTHER = "Other"


class ContentPreference(str, Enum):
    """Dashboard content categories a user can opt into."""

    MARKET_NEWS = "Market News"
    CHARTS = "Charts"
    AI_INSIGHT = "AI Insight"
    FUN = "Fun"
    SOCIAL = "Social"


class FeedbackType(str, Enum):
    """Dashboard section a vote refers to."""

    MARKET_NEWS = "market_news"
    COIN_PRICES = "coin_prices"
    AI_INSIGHT = "ai_insight"
    MEME = "meme"


class VoteType(str, Enum):
    THUMBS_UP = "thumbs_up"
    THUMBS_DOWN = "thumbs_down"


class User(SQLModel, table=True):
    """User account for authentication and personalization."""

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)  # stored lowercased
    hashed_password: str
    created_at: datetime = Field(default_factory=utcnow)


class UserPreferences(SQLModel, table=True):
    """Onboarding answers; at most one row per user."""

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
    interested_assets: list[str] = Field(sa_column=Column(JSON, nullable=False))
    investor_type: InvestorType
    content_preferences: list[str] = Field(sa_column=Column(JSON, nullable=False))
    completed_at: datetime = Field(default_factory=utcnow)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Feedback(SQLModel, table=True):
    """One vote per (user, feedback type, item)."""

    __table_args__ = (
        UniqueConstraint("user_id", "feedback_type", "item_id", name="uq_feedback_user_item"),
    )

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    feedback_type: FeedbackType
    item_id: str  # news id, coin id, insight id or meme id
    vote: VoteType
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
