"""Service layer: exchange monitoring, spot prices and the watcher registry."""
from crypto_watcher.services.exchange_monitoring import ExchangeMonitoringService
from crypto_watcher.services.price_service import (FALLBACK_PRICES,
                                                   PriceService,
                                                   create_price_service)
from crypto_watcher.services.watcher_registry import WatcherRegistry

__all__ = [
    "FALLBACK_PRICES",
    "ExchangeMonitoringService",
    "PriceService",
    "WatcherRegistry",
    "create_price_service",
]
