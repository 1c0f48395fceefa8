"""Local meme catalog served when Reddit has nothing usable."""
from crypto_advisor.schemas import MemeItem

CATALOG_SOURCE = "Crypto Memes"

MEME_CATALOG: tuple[MemeItem, ...] = (
    MemeItem(
        id="1",
        title="HODL Strong",
        image_url="https://via.placeholder.com/400x300?text=HODL+Strong+Meme",
        source=CATALOG_SOURCE,
    ),
    MemeItem(
        id="2",
        title="When Bitcoin Dips",
        image_url="https://via.placeholder.com/400x300?text=When+BTC+Dips",
        source=CATALOG_SOURCE,
    ),
    MemeItem(
        id="3",
        title="Diamond Hands",
        image_url="https://via.placeholder.com/400x300?text=Diamond+Hands",
        source=CATALOG_SOURCE,
    ),
    MemeItem(
        id="4",
        title="To the Moon",
        image_url="https://via.placeholder.com/400x300?text=To+the+Moon",
        source=CATALOG_SOURCE,
    ),
    MemeItem(
        id="5",
        title="Buy the Dip",
        image_url="https://via.placeholder.com/400x300?text=Buy+the+Dip",
        source=CATALOG_SOURCE,
    ),
)
