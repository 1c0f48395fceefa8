"""Preference store: one onboarding record per user, replaced on every save."""
from collections.abc import Sequence

from sqlalchemy.engine import Engine
from sqlmodel import select

from crypto_advisor.db.models import (ContentPreference, InvestorType,
                                      UserPreferences)
from crypto_advisor.db.sessions import build_upsert, get_session
from crypto_advisor.utils import utcnow

_REPLACED_COLUMNS = (
    "interested_assets",
    "investor_type",
    "content_preferences",
    "completed_at",
    "updated_at",
)


class PreferenceStore:
    """Reads and upserts UserPreferences keyed by user id."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save_preferences(
        self,
        user_id: int,
        interested_assets: Sequence[str],
        investor_type: InvestorType | str,
        content_preferences: Sequence[ContentPreference | str],
    ) -> UserPreferences:
        """Create or fully replace the user's preferences; refreshes completed_at."""
        now = utcnow()
        values = {
            "user_id": user_id,
            "interested_assets": [asset.strip() for asset in interested_assets],
            "investor_type": InvestorType(investor_type),
            "content_preferences": [ContentPreference(p).value for p in content_preferences],
            "completed_at": now,
            "created_at": now,
            "updated_at": now,
        }
        statement = build_upsert(
            self._engine,
            UserPreferences.__table__,
            values,
            conflict_columns=("user_id",),
            update_columns=_REPLACED_COLUMNS,
        )
        with get_session(self._engine) as session:
            session.exec(statement)
            return session.exec(
                select(UserPreferences).where(UserPreferences.user_id == user_id)
            ).one()

    def get_preferences(self, user_id: int) -> UserPreferences | None:
        with get_session(self._engine) as session:
            return session.exec(
                select(UserPreferences).where(UserPreferences.user_id == user_id)
            ).first()

    def has_completed_onboarding(self, user_id: int) -> bool:
        return self.get_preferences(user_id) is not None
