"""ExchangeClient adapter over ccxt async exchange instances."""
from typing import Any

from ccxt.base.errors import NotSupported

from crypto_watcher.exchanges.capabilities import Capability


class CcxtExchangeClient:
    """Wraps a ``ccxt.async_support`` exchange behind the ExchangeClient protocol.

    Capability rule: the exchange must expose a callable method for the
    operation and its ``has`` map must not mark it ``False``. Entries that are
    missing, ``None`` or ``"emulated"`` count as supported; if the library then
    raises ``NotSupported`` the caller reclassifies it.
    """

    def __init__(self, exchange: Any) -> None:
        self._exchange = exchange

    @property
    def exchange_id(self) -> str:
        return str(getattr(self._exchange, "id", "unknown"))

    @property
    def exchange(self) -> Any:
        """The wrapped ccxt exchange instance."""
        return self._exchange

    def supports(self, capability: Capability) -> bool:
        method = getattr(self._exchange, capability.method_name, None)
        if not callable(method):
            return False
        has = getattr(self._exchange, "has", None) or {}
        return has.get(capability.value) is not False

    def is_unsupported_error(self, exc: BaseException) -> bool:
        return isinstance(exc, NotSupported)

    async def fetch_transactions(
        self, symbol: str | None, since: int | None, limit: int | None
    ) -> list[dict[str, Any]]:
        return await self._exchange.fetch_transactions(symbol, since, limit)

    async def fetch_positions(self, symbols: list[str] | None) -> list[dict[str, Any]]:
        return await self._exchange.fetch_positions(symbols)

    async def fetch_open_orders(
        self, symbol: str | None, since: int | None, limit: int | None
    ) -> list[dict[str, Any]]:
        return await self._exchange.fetch_open_orders(symbol, since, limit)

    async def close(self) -> None:
        await self._exchange.close()
