"""Static display-name lookup tables shared read-only by all requests."""
import re
from types import MappingProxyType

# Onboarding display name -> (CoinGecko id, CryptoPanic currency code)
_ASSETS: dict[str, tuple[str, str]] = {
    "Bitcoin": ("bitcoin", "BTC"),
    "Ethereum": ("ethereum", "ETH"),
    "Binance Coin": ("binancecoin", "BNB"),
    "Cardano": ("cardano", "ADA"),
    "Solana": ("solana", "SOL"),
    "Polkadot": ("polkadot", "DOT"),
    "Dogecoin": ("dogecoin", "DOGE"),
    "Polygon": ("matic-network", "MATIC"),
    "Avalanche": ("avalanche-2", "AVAX"),
    "Chainlink": ("chainlink", "LINK"),
    "XRP": ("ripple", "XRP"),
    "Litecoin": ("litecoin", "LTC"),
    "Tron": ("tron", "TRX"),
    "Shiba Inu": ("shiba-inu", "SHIB"),
}

COIN_NAME_TO_ID = MappingProxyType({name: ids[0] for name, ids in _ASSETS.items()})
COIN_NAME_TO_CURRENCY_CODE = MappingProxyType({name: ids[1] for name, ids in _ASSETS.items()})

_FOLDED_COIN_IDS = MappingProxyType({name.casefold(): cid for name, cid in COIN_NAME_TO_ID.items()})
_FOLDED_CURRENCY_CODES = MappingProxyType(
    {name.casefold(): code for name, code in COIN_NAME_TO_CURRENCY_CODE.items()}
)

_WHITESPACE = re.compile(r"\s+")


def coin_id_for(display_name: str) -> str:
    """CoinGecko id for a display name; unknown names become a best-effort slug."""
    name = display_name.strip()
    known = COIN_NAME_TO_ID.get(name) or _FOLDED_COIN_IDS.get(name.casefold())
    if known:
        return known
    return _WHITESPACE.sub("-", name.lower())


def currency_code_for(display_name: str) -> str | None:
    """CryptoPanic currency code for a display name, or None when unmapped."""
    name = display_name.strip()
    return COIN_NAME_TO_CURRENCY_CODE.get(name) or _FOLDED_CURRENCY_CODES.get(name.casefold())
