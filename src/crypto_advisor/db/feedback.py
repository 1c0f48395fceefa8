"""Feedback store: one vote per (user, feedback type, item)."""
from sqlalchemy.engine import Engine
from sqlmodel import select

from crypto_advisor.db.models import Feedback, FeedbackType, VoteType
from crypto_advisor.db.sessions import build_upsert, get_session
from crypto_advisor.utils import utcnow


class FeedbackStore:
    """Upserts and reads votes.

    Callers validate feedback_type and vote against their enums first; this
    store only guarantees a single row per key.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def submit_feedback(
        self,
        user_id: int,
        feedback_type: FeedbackType,
        item_id: str,
        vote: VoteType,
    ) -> Feedback:
        """Record the vote, overwriting any previous vote for the same item."""
        now = utcnow()
        statement = build_upsert(
            self._engine,
            Feedback.__table__,
            {
                "user_id": user_id,
                "feedback_type": feedback_type,
                "item_id": item_id,
                "vote": vote,
                "created_at": now,
                "updated_at": now,
            },
            conflict_columns=("user_id", "feedback_type", "item_id"),
            update_columns=("vote", "updated_at"),
        )
        with get_session(self._engine) as session:
            session.exec(statement)
            return session.exec(self._lookup(user_id, feedback_type, item_id)).one()

    def get_feedback(
        self,
        user_id: int,
        feedback_type: FeedbackType,
        item_id: str,
    ) -> Feedback | None:
        """The stored vote, or None when the user has not voted on the item."""
        with get_session(self._engine) as session:
            return session.exec(self._lookup(user_id, feedback_type, item_id)).first()

    @staticmethod
    def _lookup(user_id: int, feedback_type: FeedbackType, item_id: str):
        return select(Feedback).where(
            Feedback.user_id == user_id,
            Feedback.feedback_type == feedback_type,
            Feedback.item_id == item_id,
        )
