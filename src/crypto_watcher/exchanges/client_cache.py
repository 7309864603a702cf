"""Lazily built, never-evicted cache of one exchange client per account."""
import asyncio
import logging
from typing import Any

import ccxt.async_support as ccxt_async

from crypto_watcher.exchanges.accounts import AccountDirectory, ExchangeAccount
from crypto_watcher.exchanges.client import CcxtExchangeClient
from crypto_watcher.exchanges.exceptions import (AccountNotFoundError,
                                                 UnsupportedExchangeError,
                                                 UpstreamExchangeError)
from crypto_watcher.exchanges.protocols import ExchangeClient

logger = logging.getLogger(__name__)


class ExchangeClientCache:
    """Maps account id to a single authenticated exchange client.

    Construction is serialised per account id with an asyncio.Lock, so
    concurrent first requests for the same account share one client. Entries
    are never refreshed; a credential change needs a process restart.
    """

    def __init__(
        self,
        directory: AccountDirectory,
        *,
        http_timeout_ms: int = 10_000,
        http_proxy: str | None = None,
        exchange_module: Any = None,
    ) -> None:
        """Initialize an empty cache.

        Args:
            directory: Source of account credentials.
            http_timeout_ms: Request timeout handed to each exchange client.
            http_proxy: Optional outbound proxy URL for exchange traffic.
            exchange_module: Namespace exposing exchange classes by id.
                Defaults to ``ccxt.async_support``.
        """
        self._directory = directory
        self._http_timeout_ms = http_timeout_ms
        self._http_proxy = http_proxy
        self._exchange_module = exchange_module if exchange_module is not None else ccxt_async
        self._clients: dict[str, ExchangeClient] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def get_or_create_client(self, account_id: str) -> ExchangeClient:
        """Return the cached client for account_id, building it on first use.

        Raises:
            AccountNotFoundError: No directory entry matches account_id.
            UnsupportedExchangeError: The account's exchange is unknown to ccxt.
            UpstreamExchangeError: The exchange client could not be constructed.
        """
        client = self._clients.get(account_id)
        if client is not None:
            return client

        account = self._directory.find(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        lock = self._locks.setdefault(account_id, asyncio.Lock())
        async with lock:
            client = self._clients.get(account_id)
            if client is None:
                client = self._build_client(account)
                self._clients[account_id] = client
                logger.debug(
                    "Created exchange client for account %s (%s)",
                    account_id,
                    client.exchange_id,
                )
        return client

    def _resolve_exchange_class(self, exchange_id: str) -> Any:
        # ccxt also exports error and base classes; only listed ids are exchanges
        known = getattr(self._exchange_module, "exchanges", None)
        if known is not None and exchange_id not in known:
            raise UnsupportedExchangeError(exchange_id)
        exchange_class = getattr(self._exchange_module, exchange_id, None)
        if not isinstance(exchange_class, type):
            raise UnsupportedExchangeError(exchange_id)
        return exchange_class

    def _build_client(self, account: ExchangeAccount) -> ExchangeClient:
        exchange_class = self._resolve_exchange_class(account.exchange)
        params: dict[str, Any] = {
            "apiKey": account.api_key,
            "secret": account.secret,
            "password": account.password,
            "uid": account.uid,
            "timeout": self._http_timeout_ms,
            "enableRateLimit": True,
            "options": {"adjustForTimeDifference": True},
        }
        if self._http_proxy:
            params["httpProxy"] = self._http_proxy
        try:
            exchange = exchange_class(params)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error(
                "Failed to create exchange client for account %s on %s: %s",
                account.id,
                account.exchange,
                exc,
            )
            raise UpstreamExchangeError(account.id, account.exchange, "createClient") from exc
        return CcxtExchangeClient(exchange)

    async def close(self) -> None:
        """Close every cached client. Call from app lifespan shutdown."""
        for account_id, client in list(self._clients.items()):
            try:
                await client.close()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning(
                    "Error closing exchange client for account %s: %s", account_id, exc
                )

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._clients

    def __len__(self) -> int:
        return len(self._clients)
