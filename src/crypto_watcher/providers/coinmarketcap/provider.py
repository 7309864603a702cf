"""CoinMarketCap spot price provider."""
import httpx

from crypto_watcher.providers.coinmarketcap.models import (
    CoinMarketCapQuote, CoinMarketCapQuotesParams)
from crypto_watcher.providers.core.models import ProviderQuote
from crypto_watcher.providers.core.price_provider_abc import SpotPriceProviderABC


class CoinMarketCapProvider(SpotPriceProviderABC):
    """Spot prices via the CoinMarketCap Pro API (latest quotes endpoint).

    Requires an API key; callers decide whether to construct this provider
    at all when no key is configured.
    """

    name = "coinmarketcap"
    BASE_URL = "https://pro-api.coinmarketcap.com"
    QUOTES_PATH = "/v1/cryptocurrency/quotes/latest"

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the CoinMarketCap provider.

        Args:
            api_key: CoinMarketCap Pro API key.
            timeout: Per-request httpx timeout in seconds.
            transport: Optional httpx transport (e.g. MockTransport in tests).
        """
        headers = {"Accept": "application/json", "X-CMC_PRO_API_KEY": api_key}
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def get_quote(self, symbol: str, currency: str) -> ProviderQuote:
        """Fetch the latest quote, falling back to the USD quote.

        Raises:
            ValueError: If neither the requested currency nor USD is quoted.
        """
        params = CoinMarketCapQuotesParams(symbol=symbol, convert=currency).model_dump()
        response = await self._client.get(self.QUOTES_PATH, params=params)
        response.raise_for_status()
        data = response.json().get("data") or {}

        row = data.get(symbol)
        # Some plans return a list of matches per symbol
        if isinstance(row, list):
            row = row[0] if row else None
        quotes = (row or {}).get("quote") or {}

        used_currency = currency
        raw = quotes.get(currency)
        if raw is None:
            used_currency = "USD"
            raw = quotes.get("USD")
        if raw is None or raw.get("price") is None:
            raise ValueError(f"No quote for '{symbol}' in {currency}")

        quote = CoinMarketCapQuote.model_validate(raw)
        return ProviderQuote(
            symbol=symbol,
            currency=used_currency,
            price=quote.price,
            last_updated=quote.last_updated,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
