"""User accounts: signup and credential checks."""
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from crypto_advisor.db.exceptions import EmailAlreadyExistsError
from crypto_advisor.db.models import User
from crypto_advisor.db.sessions import get_session
from crypto_advisor.security import hash_password, verify_password

logger = logging.getLogger(__name__)

# Checked against on unknown emails so both login failures cost one bcrypt round.
_DUMMY_HASH = hash_password("not-a-real-password")


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively; store and look them up lowercased."""
    return email.strip().lower()


class UserStore:
    """Creates users and verifies login credentials."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create_user(self, name: str, email: str, password: str) -> User:
        """Create a user with a hashed password.

        Raises:
            EmailAlreadyExistsError: an account with this email exists.
        """
        email_key = normalize_email(email)
        with get_session(self._engine) as session:
            existing = session.exec(select(User).where(User.email == email_key)).first()
            if existing is not None:
                raise EmailAlreadyExistsError(email_key)
            user = User(
                name=name.strip(),
                email=email_key,
                hashed_password=hash_password(password),
            )
            session.add(user)
            try:
                session.flush()
            except IntegrityError as exc:
                # Lost a race with a concurrent signup for the same email.
                raise EmailAlreadyExistsError(email_key) from exc
            session.refresh(user)
        logger.info("Created user id=%s", user.id)
        return user

    def verify_credentials(self, email: str, password: str) -> User | None:
        """Return the user when email/password match, else None."""
        with get_session(self._engine) as session:
            user = session.exec(
                select(User).where(User.email == normalize_email(email))
            ).first()
        if user is None:
            verify_password(password, _DUMMY_HASH)
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def get_user(self, user_id: int) -> User | None:
        with get_session(self._engine) as session:
            return session.get(User, user_id)
