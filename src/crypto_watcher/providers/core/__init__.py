"""Core provider abstractions."""
from crypto_watcher.providers.core.models import ProviderQuote
from crypto_watcher.providers.core.price_provider_abc import SpotPriceProviderABC

__all__ = [
    "ProviderQuote",
    "SpotPriceProviderABC",
]
