import asyncio
import types

import pytest

from crypto_watcher.exchanges import (AccountDirectory, AccountNotFoundError,
                                      CcxtExchangeClient, ExchangeClientCache,
                                      UnsupportedExchangeError,
                                      UpstreamExchangeError)
from fakes import make_exchange_class


@pytest.mark.asyncio
async def test_first_call_builds_client_with_credentials(client_cache, exchange_module):
    client = await client_cache.get_or_create_client("okx-sub")

    assert isinstance(client, CcxtExchangeClient)
    assert client.exchange_id == "okx"
    [instance] = exchange_module.okx.created
    assert instance.params == {
        "apiKey": "key-2",
        "secret": "secret-2",
        "password": "pass",
        "uid": None,
        "timeout": 10_000,
        "enableRateLimit": True,
        "options": {"adjustForTimeDifference": True},
    }


@pytest.mark.asyncio
async def test_subsequent_calls_reuse_cached_client(client_cache, exchange_module):
    first = await client_cache.get_or_create_client("main")
    second = await client_cache.get_or_create_client("main")

    assert first is second
    assert len(exchange_module.binance.created) == 1
    assert "main" in client_cache
    assert len(client_cache) == 1


@pytest.mark.asyncio
async def test_concurrent_first_requests_construct_one_client(client_cache, exchange_module):
    clients = await asyncio.gather(
        *(client_cache.get_or_create_client("main") for _ in range(25))
    )

    assert len(exchange_module.binance.created) == 1
    assert all(c is clients[0] for c in clients)


@pytest.mark.asyncio
async def test_unknown_account_fails_before_construction(client_cache, exchange_module):
    with pytest.raises(AccountNotFoundError) as exc_info:
        await client_cache.get_or_create_client("ghost")

    assert exc_info.value.account_id == "ghost"
    assert exchange_module.binance.created == []
    assert exchange_module.okx.created == []
    assert len(client_cache) == 0


@pytest.mark.asyncio
async def test_unknown_exchange_raises_and_caches_nothing(client_cache):
    with pytest.raises(UnsupportedExchangeError) as exc_info:
        await client_cache.get_or_create_client("mystery")

    assert exc_info.value.exchange_id == "notanexchange"
    assert "mystery" not in client_cache


@pytest.mark.asyncio
async def test_proxy_and_timeout_are_forwarded(directory, exchange_module):
    cache = ExchangeClientCache(
        directory,
        http_timeout_ms=2500,
        http_proxy="http://proxy.local:8080",
        exchange_module=exchange_module,
    )

    await cache.get_or_create_client("main")

    [instance] = exchange_module.binance.created
    assert instance.params["timeout"] == 2500
    assert instance.params["httpProxy"] == "http://proxy.local:8080"


@pytest.mark.asyncio
async def test_module_without_exchange_list_requires_a_class(directory):
    module = types.SimpleNamespace(binance="not-a-class")
    cache = ExchangeClientCache(directory, exchange_module=module)

    with pytest.raises(UnsupportedExchangeError):
        await cache.get_or_create_client("main")


@pytest.mark.asyncio
async def test_close_closes_every_cached_client(client_cache, exchange_module):
    await client_cache.get_or_create_client("main")
    await client_cache.get_or_create_client("okx-sub")

    await client_cache.close()

    assert exchange_module.binance.created[0].closed
    assert exchange_module.okx.created[0].closed


@pytest.mark.asyncio
async def test_builds_real_ccxt_exchange(directory):
    cache = ExchangeClientCache(directory, http_timeout_ms=3000)

    client = await cache.get_or_create_client("main")
    try:
        assert client.exchange_id == "binance"
        assert client.exchange.apiKey == "key-1"
        assert client.exchange.secret == "secret-1"
        assert client.exchange.enableRateLimit is True
        assert client.exchange.timeout == 3000
    finally:
        await cache.close()


@pytest.mark.asyncio
async def test_ccxt_non_exchange_names_are_unsupported():
    raw = '[{"id": "err", "exchange": "NotSupported", "apiKey": "k", "secret": "s"}]'
    cache = ExchangeClientCache(AccountDirectory.from_json(raw))

    with pytest.raises(UnsupportedExchangeError):
        await cache.get_or_create_client("err")


@pytest.mark.asyncio
async def test_constructor_failure_becomes_upstream_error(directory, caplog):
    def broken_init(self, params):
        raise RuntimeError("bad markets payload")

    module = types.SimpleNamespace(
        binance=make_exchange_class("binance", __init__=broken_init), exchanges=["binance"]
    )
    cache = ExchangeClientCache(directory, exchange_module=module)

    with pytest.raises(UpstreamExchangeError) as exc_info:
        await cache.get_or_create_client("main")

    upstream = exc_info.value
    assert upstream.account_id == "main"
    assert upstream.exchange_id == "binance"
    assert upstream.operation == "createClient"
    assert isinstance(upstream.__cause__, RuntimeError)
    assert "main" not in cache
    assert "Failed to create exchange client for account main on binance" in caplog.text
