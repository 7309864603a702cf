"""Protocols for exchange clients used by the monitoring service."""
from typing import Any, Protocol

from crypto_watcher.exchanges.capabilities import Capability


class ExchangeClient(Protocol):
    """Authenticated handle to one exchange with a capability query.

    Keeps the monitoring service independent of the concrete client library.
    """

    @property
    def exchange_id(self) -> str: ...

    def supports(self, capability: Capability) -> bool:
        """Return True if the exchange implements and advertises the operation."""
        ...

    def is_unsupported_error(self, exc: BaseException) -> bool:
        """Return True if exc is the library's "operation not supported" error."""
        ...

    async def fetch_transactions(
        self, symbol: str | None, since: int | None, limit: int | None
    ) -> list[dict[str, Any]]: ...

    async def fetch_positions(self, symbols: list[str] | None) -> list[dict[str, Any]]: ...

    async def fetch_open_orders(
        self, symbol: str | None, since: int | None, limit: int | None
    ) -> list[dict[str, Any]]: ...

    async def close(self) -> None: ...
