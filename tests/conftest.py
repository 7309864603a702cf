import json
import types

import pytest

from crypto_watcher.exchanges import AccountDirectory, ExchangeClientCache
from fakes import make_exchange_class

ACCOUNTS = [
    {"id": "main", "exchange": "binance", "apiKey": "key-1", "secret": "secret-1", "address": "0xabc"},
    {
        "id": "okx-sub",
        "exchange": "okx",
        "apiKey": "key-2",
        "secret": "secret-2",
        "password": "pass",
    },
    {"id": "mystery", "exchange": "notanexchange", "apiKey": "key-3", "secret": "secret-3"},
]


@pytest.fixture
def accounts_json() -> str:
    return json.dumps(ACCOUNTS)


@pytest.fixture
def directory(accounts_json: str) -> AccountDirectory:
    return AccountDirectory.from_json(accounts_json)


@pytest.fixture
def exchange_module() -> types.SimpleNamespace:
    return types.SimpleNamespace(
        binance=make_exchange_class("binance"),
        okx=make_exchange_class("okx"),
        exchanges=["binance", "okx"],
    )


@pytest.fixture
def client_cache(directory: AccountDirectory, exchange_module) -> ExchangeClientCache:
    return ExchangeClientCache(directory, exchange_module=exchange_module)
