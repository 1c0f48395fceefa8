"""Shared utilities for the crypto advisor service."""
import logging
from datetime import datetime, timezone

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def epoch_millis(moment: datetime | None = None) -> int:
    """Milliseconds since the epoch for moment (default: now)."""
    return int((moment or utcnow()).timestamp() * 1000)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)
    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(logging.WARNING)
