"""Models for CoinGecko provider (API params)."""
from pydantic import BaseModel


class CoinGeckoMarketsParams(BaseModel):
    """Params for /coins/markets (top-N by market cap)."""

    vs_currency: str = "usd"
    order: str = "market_cap_desc"
    per_page: int = 10
    page: int = 1
    sparkline: str = "false"


class CoinGeckoMarketsByIdsParams(BaseModel):
    """Params for /coins/markets restricted to specific ids. Merge 'ids' at call site."""

    vs_currency: str = "usd"
    order: str = "market_cap_desc"
    sparkline: str = "false"
