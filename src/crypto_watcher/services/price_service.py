"""Spot price service with a static fallback table.

Availability wins over accuracy: fetch_spot_price never raises. Any provider
problem (missing key, timeout, HTTP error, missing quote) degrades to the
fallback table with source=mock.
"""
import asyncio
import logging

from crypto_watcher.config import Settings
from crypto_watcher.providers import (CoinMarketCapProvider,
                                      SpotPriceProviderABC)
from crypto_watcher.schemas import PriceSource, SpotPrice, utcnow

logger = logging.getLogger(__name__)

FALLBACK_PRICES: dict[str, float] = {
    "BTC": 68000.0,
    "ETH": 3500.0,
    "SOL": 150.0,
    "USDT": 1.0,
}

DEFAULT_TIMEOUT_SECONDS = 5.0


class PriceService:
    """Fetches spot prices from a provider, degrading to FALLBACK_PRICES."""

    def __init__(
        self,
        provider: SpotPriceProviderABC | None = None,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the service.

        Args:
            provider: Live price source; None means permanent fallback mode.
            timeout_seconds: Upper bound on a single provider call.
        """
        self._provider = provider
        self._timeout = timeout_seconds

    @property
    def has_provider(self) -> bool:
        return self._provider is not None

    async def fetch_spot_price(self, symbol: str, currency: str = "USD") -> SpotPrice:
        """Return the spot price of symbol; never raises."""
        upper_symbol = symbol.upper()
        if self._provider is None:
            return self._fallback(upper_symbol, currency)

        try:
            quote = await asyncio.wait_for(
                self._provider.get_quote(upper_symbol, currency),
                timeout=self._timeout,
            )
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning(
                "Spot price request for %s failed, using fallback: %r", upper_symbol, exc
            )
            return self._fallback(upper_symbol, currency)

        return SpotPrice(
            symbol=upper_symbol,
            price=quote.price,
            currency=currency,
            source=PriceSource.PROVIDER,
            as_of=quote.last_updated or utcnow(),
        )

    async def close(self) -> None:
        """Close the provider. Call from app lifespan shutdown."""
        if self._provider is not None:
            await self._provider.close()

    @staticmethod
    def _fallback(symbol: str, currency: str) -> SpotPrice:
        return SpotPrice(
            symbol=symbol,
            price=FALLBACK_PRICES.get(symbol, 0.0),
            currency=currency,
            source=PriceSource.MOCK,
        )


def create_price_service(settings: Settings) -> PriceService:
    """Build a PriceService from settings; no API key means fallback only."""
    provider = None
    if settings.coinmarketcap_api_key:
        provider = CoinMarketCapProvider(
            settings.coinmarketcap_api_key,
            timeout=settings.price_provider_timeout_seconds,
        )
    else:
        logger.info("COINMARKETCAP_API_KEY not set; spot prices use the fallback table")
    return PriceService(provider, timeout_seconds=settings.price_provider_timeout_seconds)
