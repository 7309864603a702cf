"""Exchange monitoring service: account transactions, positions and open orders.

Exchanges expose inconsistent capability surfaces. Every operation here ends
in one of three outcomes regardless of the exchange behind the account:
raw data, OperationNotSupportedError, or UpstreamExchangeError.
"""
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from crypto_watcher.exchanges import (Capability, ExchangeClient,
                                      ExchangeClientCache,
                                      OperationNotSupportedError,
                                      UpstreamExchangeError)

logger = logging.getLogger(__name__)

ExchangeCall = Callable[[ExchangeClient], Awaitable[list[dict[str, Any]]]]


class ExchangeMonitoringService:
    """Read-only account queries routed through the exchange client cache."""

    def __init__(self, clients: ExchangeClientCache) -> None:
        self._clients = clients

    async def fetch_account_transactions(
        self,
        account_id: str,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Deposits/withdrawals for the account, as returned by the exchange.

        Args:
            account_id: Directory id of the account.
            symbol: Optional currency/market filter.
            since: Optional start time in epoch milliseconds.
            limit: Optional maximum number of records.

        Raises:
            AccountNotFoundError, UnsupportedExchangeError,
            OperationNotSupportedError, UpstreamExchangeError.
        """
        return await self._dispatch(
            account_id,
            Capability.TRANSACTIONS,
            lambda client: client.fetch_transactions(symbol or None, since, limit),
        )

    async def fetch_account_positions(
        self, account_id: str, symbol: str | None = None
    ) -> list[dict[str, Any]]:
        """Open positions, optionally restricted to one symbol."""
        symbols = [symbol] if symbol else None
        return await self._dispatch(
            account_id,
            Capability.POSITIONS,
            lambda client: client.fetch_positions(symbols),
        )

    async def fetch_account_open_orders(
        self,
        account_id: str,
        symbol: str | None = None,
        since: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Currently open orders for the account."""
        return await self._dispatch(
            account_id,
            Capability.OPEN_ORDERS,
            lambda client: client.fetch_open_orders(symbol or None, since, limit),
        )

    async def _dispatch(
        self, account_id: str, capability: Capability, call: ExchangeCall
    ) -> list[dict[str, Any]]:
        client = await self._clients.get_or_create_client(account_id)
        operation = capability.value
        if not client.supports(capability):
            raise OperationNotSupportedError(operation, client.exchange_id)

        try:
            return await call(client)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error(
                "%s failed for account %s on %s: %s",
                operation,
                account_id,
                client.exchange_id,
                exc,
            )
            if client.is_unsupported_error(exc):
                raise OperationNotSupportedError(operation, client.exchange_id) from exc
            raise UpstreamExchangeError(account_id, client.exchange_id, operation) from exc
