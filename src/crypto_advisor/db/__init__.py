"""Database package: models, session management and stores."""
from crypto_advisor.db.exceptions import EmailAlreadyExistsError
from crypto_advisor.db.feedback import FeedbackStore
from crypto_advisor.db.models import (ContentPreference, Feedback, FeedbackType,
                                      InvestorType, User, UserPreferences,
                                      VoteType)
from crypto_advisor.db.preferences import PreferenceStore
from crypto_advisor.db.users import UserStore

__all__ = [
    "ContentPreference",
    "EmailAlreadyExistsError",
    "Feedback",
    "FeedbackStore",
    "FeedbackType",
    "InvestorType",
    "PreferenceStore",
    "User",
    "UserPreferences",
    "UserStore",
    "VoteType",
]
