"""FastAPI dependency injection: app.state.container holds singletons; Depends() resolves them.

create_app (main.py) attaches the Container; these getters are used by Depends().
"""
from typing import Annotated

from fastapi import Depends, Request

from crypto_watcher.container import Container
from crypto_watcher.exchanges import AccountDirectory
from crypto_watcher.services import (ExchangeMonitoringService, PriceService,
                                     WatcherRegistry)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_account_directory(request: Request) -> AccountDirectory:
    """Resolve the account directory parsed at startup."""
    return get_container(request).account_directory()


def get_monitoring_service(request: Request) -> ExchangeMonitoringService:
    """Resolve the exchange monitoring service."""
    return get_container(request).monitoring_service()


def get_price_service(request: Request) -> PriceService:
    """Resolve the spot price service."""
    return get_container(request).price_service()


def get_watcher_registry(request: Request) -> WatcherRegistry:
    """Resolve the shared watcher registry."""
    return get_container(request).watcher_registry()


# Type aliases for route injection
AccountDirectoryDep = Annotated[AccountDirectory, Depends(get_account_directory)]
MonitoringServiceDep = Annotated[ExchangeMonitoringService, Depends(get_monitoring_service)]
PriceServiceDep = Annotated[PriceService, Depends(get_price_service)]
WatcherRegistryDep = Annotated[WatcherRegistry, Depends(get_watcher_registry)]
