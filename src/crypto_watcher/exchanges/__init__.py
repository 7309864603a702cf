"""Exchange account access: directory, client cache, capabilities, errors."""
from crypto_watcher.exchanges.accounts import (AccountDirectory, AccountSummary,
                                               ExchangeAccount)
from crypto_watcher.exchanges.capabilities import Capability
from crypto_watcher.exchanges.client import CcxtExchangeClient
from crypto_watcher.exchanges.client_cache import ExchangeClientCache
from crypto_watcher.exchanges.error_mapper import ExchangeErrorMapper
from crypto_watcher.exchanges.exceptions import (AccountConfigError,
                                                 AccountNotFoundError,
                                                 ExchangeError,
                                                 OperationNotSupportedError,
                                                 UnsupportedExchangeError,
                                                 UpstreamExchangeError)
from crypto_watcher.exchanges.protocols import ExchangeClient

__all__ = [
    "AccountConfigError",
    "AccountDirectory",
    "AccountNotFoundError",
    "AccountSummary",
    "Capability",
    "CcxtExchangeClient",
    "ExchangeAccount",
    "ExchangeClient",
    "ExchangeClientCache",
    "ExchangeError",
    "ExchangeErrorMapper",
    "OperationNotSupportedError",
    "UnsupportedExchangeError",
    "UpstreamExchangeError",
]
