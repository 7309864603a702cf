import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest

from crypto_watcher.config import Settings
from crypto_watcher.providers import (CoinMarketCapProvider, ProviderQuote,
                                      SpotPriceProviderABC)
from crypto_watcher.schemas import PriceSource
from crypto_watcher.services import PriceService, create_price_service


def _cmc_payload(symbol: str, quotes: dict) -> dict:
    return {"status": {"error_code": 0}, "data": {symbol: {"symbol": symbol, "quote": quotes}}}


def _provider(handler) -> CoinMarketCapProvider:
    return CoinMarketCapProvider("test-key", transport=httpx.MockTransport(handler))


class SlowProvider(SpotPriceProviderABC):
    async def get_quote(self, symbol: str, currency: str) -> ProviderQuote:
        await asyncio.sleep(5)
        return ProviderQuote(symbol=symbol, currency=currency, price=1.0)


class BrokenProvider(SpotPriceProviderABC):
    async def get_quote(self, symbol: str, currency: str) -> ProviderQuote:
        raise httpx.ConnectError("connection refused")


@pytest.mark.asyncio
async def test_without_provider_btc_is_mock_68000():
    price = await PriceService().fetch_spot_price("btc")

    assert price.symbol == "BTC"
    assert price.price == 68000
    assert price.source == PriceSource.MOCK
    assert price.currency == "USD"


@pytest.mark.asyncio
async def test_without_provider_unknown_symbol_is_zero():
    price = await PriceService().fetch_spot_price("XYZ")

    assert price.price == 0
    assert price.source == PriceSource.MOCK


@pytest.mark.asyncio
async def test_provider_quote_is_returned():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=_cmc_payload(
                "ETH",
                {"EUR": {"price": 3210.5, "last_updated": "2024-05-01T12:00:00.000Z"}},
            ),
        )

    service = PriceService(_provider(handler))
    price = await service.fetch_spot_price("eth", currency="EUR")
    await service.close()

    assert price.source == PriceSource.PROVIDER
    assert price.price == 3210.5
    assert price.currency == "EUR"
    assert price.as_of == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    [request] = seen
    assert request.url.path == "/v1/cryptocurrency/quotes/latest"
    assert request.url.params["symbol"] == "ETH"
    assert request.url.params["convert"] == "EUR"
    assert request.headers["X-CMC_PRO_API_KEY"] == "test-key"


@pytest.mark.asyncio
async def test_usd_quote_is_reported_in_requested_currency():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_cmc_payload("SOL", {"USD": {"price": 151.25}}))

    before = datetime.now(timezone.utc)
    price = await PriceService(_provider(handler)).fetch_spot_price("SOL", currency="JPY")

    assert price.source == PriceSource.PROVIDER
    assert price.price == 151.25
    assert price.currency == "JPY"
    assert price.as_of >= before


@pytest.mark.asyncio
async def test_provider_quote_names_the_currency_it_used():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_cmc_payload("SOL", {"USD": {"price": 151.25}}))

    async with _provider(handler) as provider:
        quote = await provider.get_quote("SOL", "JPY")

    assert quote.currency == "USD"
    assert quote.price == 151.25


@pytest.mark.asyncio
async def test_missing_quote_degrades_to_fallback(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {}})

    price = await PriceService(_provider(handler)).fetch_spot_price("SOL")

    assert price.source == PriceSource.MOCK
    assert price.price == 150
    assert "Spot price request for SOL failed" in caplog.text


@pytest.mark.asyncio
async def test_http_error_degrades_to_fallback(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"status": {"error_message": "bad key"}})

    price = await PriceService(_provider(handler)).fetch_spot_price("usdt")

    assert price.source == PriceSource.MOCK
    assert price.price == 1
    assert "HTTPStatusError" in caplog.text


@pytest.mark.asyncio
async def test_malformed_body_degrades_to_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    price = await PriceService(_provider(handler)).fetch_spot_price("BTC")

    assert price.source == PriceSource.MOCK
    assert price.price == 68000


@pytest.mark.asyncio
async def test_network_error_degrades_to_fallback():
    price = await PriceService(BrokenProvider()).fetch_spot_price("ETH")

    assert price.source == PriceSource.MOCK
    assert price.price == 3500


@pytest.mark.asyncio
async def test_slow_provider_is_bounded_by_timeout(caplog):
    service = PriceService(SlowProvider(), timeout_seconds=0.05)

    price = await asyncio.wait_for(service.fetch_spot_price("BTC"), timeout=2)

    assert price.source == PriceSource.MOCK
    assert "TimeoutError" in caplog.text


@pytest.mark.asyncio
async def test_list_shaped_symbol_entries_are_supported():
    def handler(request: httpx.Request) -> httpx.Response:
        body = {"data": {"BTC": [{"quote": {"USD": {"price": 70100.0}}}]}}
        return httpx.Response(200, content=json.dumps(body).encode())

    price = await PriceService(_provider(handler)).fetch_spot_price("BTC")

    assert price.source == PriceSource.PROVIDER
    assert price.price == 70100.0


@pytest.mark.asyncio
async def test_create_price_service_without_key_is_fallback_only():
    service = create_price_service(Settings())

    assert not service.has_provider
    await service.close()


@pytest.mark.asyncio
async def test_create_price_service_with_key_uses_coinmarketcap():
    service = create_price_service(Settings(coinmarketcap_api_key="abc"))

    assert service.has_provider
    await service.close()
