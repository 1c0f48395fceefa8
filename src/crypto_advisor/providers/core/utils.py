"""Shared utilities for content providers."""
from urllib.parse import urlsplit


def hostname_label(url: str | None) -> str | None:
    """Readable site label from a URL: https://www.coindesk.com/x -> "Coindesk"."""
    if not url:
        return None
    host = (urlsplit(url).hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    first = host.split(".", 1)[0]
    return first.capitalize() if first else None


def first_text(*values: object) -> str | None:
    """First value that is a non-blank string, stripped."""
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
