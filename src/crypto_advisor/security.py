"""Auth gate: password hashing plus issuing and verifying bearer tokens."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

import bcrypt
import jwt

from crypto_advisor.utils import utcnow

logger = logging.getLogger(__name__)


class UnauthorizedError(Exception):
    """Credential missing, malformed, expired or wrongly signed.

    Callers only ever see one generic message; the specific reason is logged
    at DEBUG level.
    """

    def __init__(self, reason: str = "unauthorized") -> None:
        super().__init__("Unauthorized")
        self.reason = reason


@dataclass(frozen=True)
class Identity:
    """Authenticated caller resolved from a bearer token."""

    user_id: int
    email: str


def hash_password(password: str) -> str:
    """Salted one-way bcrypt hash."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash.
        return False


class AuthGate:
    """Issues signed, time-bounded tokens and validates them on protected routes."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expire_minutes)

    def issue(self, user_id: int, email: str, now: datetime | None = None) -> str:
        """Return a token identifying user_id/email, valid for the configured lifetime."""
        issued_at = now or utcnow()
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def authenticate(self, token: str | None) -> Identity:
        """Resolve token to an Identity or raise UnauthorizedError."""
        if not token:
            raise UnauthorizedError("missing credential")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.debug("Rejected expired token")
            raise UnauthorizedError("expired credential") from exc
        except jwt.InvalidSignatureError as exc:
            logger.debug("Rejected token with bad signature")
            raise UnauthorizedError("signature mismatch") from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected malformed token: %s", exc)
            raise UnauthorizedError("malformed credential") from exc

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise UnauthorizedError("malformed credential") from exc
        return Identity(user_id=user_id, email=str(payload.get("email", "")))
