"""Abstract base class for spot price providers."""
from abc import ABC, abstractmethod

from crypto_watcher.providers.core.models import ProviderQuote


class SpotPriceProviderABC(ABC):
    """Base interface for external market-data sources of spot prices."""

    name: str = "provider"

    @abstractmethod
    async def get_quote(self, symbol: str, currency: str) -> ProviderQuote:
        """Fetch the latest price of symbol in currency.

        Args:
            symbol: Uppercase asset symbol (e.g. "BTC").
            currency: Quote currency (e.g. "USD").

        Returns:
            The quote as reported by the provider.

        Raises:
            ValueError: If the provider returned no usable quote.
            httpx.HTTPError: On transport or HTTP status errors.
        """

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "SpotPriceProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
