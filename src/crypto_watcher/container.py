"""DI container. Built once per app; routes resolve services through deps.py."""
from dependency_injector import containers, providers

from crypto_watcher.config import Settings
from crypto_watcher.exchanges import AccountDirectory, ExchangeClientCache
from crypto_watcher.services import (ExchangeMonitoringService,
                                     WatcherRegistry, create_price_service)


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings.from_env)

    account_directory = providers.Singleton(
        AccountDirectory.from_json,
        settings.provided.exchange_accounts,
    )

    exchange_clients = providers.Singleton(
        ExchangeClientCache,
        account_directory,
        http_timeout_ms=settings.provided.exchange_http_timeout_ms,
        http_proxy=settings.provided.exchange_http_proxy,
    )

    monitoring_service = providers.Singleton(ExchangeMonitoringService, exchange_clients)

    price_service = providers.Singleton(create_price_service, settings)

    watcher_registry = providers.Singleton(WatcherRegistry)
