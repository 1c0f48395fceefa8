"""Models for CryptoPanic provider (API params and post DTOs)."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from crypto_advisor.providers.core.utils import first_text, hostname_label
from crypto_advisor.schemas import NewsCurrency, NewsItem, NewsSource

UNKNOWN_SOURCE = "Unknown"


class CryptoPanicPostsParams(BaseModel):
    """Params for /posts/. Merge 'currencies' (and 'auth_token') at call site."""

    public: str = "true"
    filter: str = "hot"


class CryptoPanicSourceDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    name: str | None = None
    domain: str | None = None
    region: str | None = None


class CryptoPanicCurrencyDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str
    title: str | None = None


class CryptoPanicPostDTO(BaseModel):
    """One entry of the /posts/ `results` array."""

    model_config = ConfigDict(extra="ignore")

    id: int | str
    title: str
    url: str | None = None
    published_at: datetime
    domain: str | None = None
    source: CryptoPanicSourceDTO | None = None
    currencies: list[CryptoPanicCurrencyDTO] | None = None

    def source_label(self, default: str) -> str:
        """Best available publisher name.

        Tries source title, source name, the domain fields, then the URL's
        hostname. Anything that ends up "Unknown" is replaced by default.
        """
        source = self.source or CryptoPanicSourceDTO()
        domain = first_text(source.domain, self.domain)
        label = (
            first_text(source.title, source.name)
            or (hostname_label(f"https://{domain}") if domain else None)
            or hostname_label(self.url)
            or UNKNOWN_SOURCE
        )
        return default if label == UNKNOWN_SOURCE else label

    def to_news_item(self, default_source: str) -> NewsItem:
        region = (self.source.region if self.source else None) or "global"
        return NewsItem(
            id=str(self.id),
            title=self.title,
            url=self.url,
            published_at=self.published_at,
            source=NewsSource(title=self.source_label(default_source), region=region),
            currencies=[
                NewsCurrency(code=c.code, title=c.title) for c in (self.currencies or [])
            ],
        )
