"""CoinMarketCap spot price provider."""
from crypto_watcher.providers.coinmarketcap.provider import CoinMarketCapProvider

__all__ = ["CoinMarketCapProvider"]
