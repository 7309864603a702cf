"""Spot price providers.

All providers implement SpotPriceProviderABC and return ProviderQuote objects:

- CoinMarketCapProvider: latest quotes via the CoinMarketCap Pro API

Example:
    async with CoinMarketCapProvider(api_key) as provider:
        quote = await provider.get_quote("BTC", "USD")
        print(f"{quote.symbol}: {quote.price} {quote.currency}")
"""
from crypto_watcher.providers.coinmarketcap import CoinMarketCapProvider
from crypto_watcher.providers.core import ProviderQuote, SpotPriceProviderABC

__all__ = [
    "CoinMarketCapProvider",
    "ProviderQuote",
    "SpotPriceProviderABC",
]
