"""Abstract base class for dashboard content providers."""
from abc import ABC

import httpx


class DashboardProviderABC(ABC):
    """Base for every upstream adapter.

    Owns one long-lived httpx.AsyncClient. Subclasses build it via
    _make_client() in __init__ so tests can pass a transport (e.g.
    httpx.MockTransport) instead of touching the network.

    Public fetch methods on subclasses never raise: their fallback chains end
    in a local tier.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @staticmethod
    def _make_client(
        *,
        base_url: str = "",
        headers: dict[str, str] | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "DashboardProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
