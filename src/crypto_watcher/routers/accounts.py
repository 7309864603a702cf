"""Exchange account routes: transactions, positions and open orders."""
from typing import Annotated, Any

from fastapi import APIRouter, Query

from crypto_watcher.deps import AccountDirectoryDep, MonitoringServiceDep
from crypto_watcher.exchanges import (AccountSummary, ExchangeError,
                                      ExchangeErrorMapper)
from crypto_watcher.schemas import DataResponse

router = APIRouter(prefix="/accounts", tags=["accounts"])

_transactions_errors = ExchangeErrorMapper(resource_name="Transactions")
_positions_errors = ExchangeErrorMapper(resource_name="Positions")
_orders_errors = ExchangeErrorMapper(resource_name="Open orders")

RawRecords = DataResponse[list[dict[str, Any]]]

SymbolQuery = Annotated[
    str | None, Query(description="Market or currency filter; empty means no filter")
]
SinceQuery = Annotated[int | None, Query(ge=0, description="Start time in epoch milliseconds")]
LimitQuery = Annotated[int | None, Query(gt=0, description="Maximum number of records")]


@router.get("", response_model=DataResponse[list[AccountSummary]])
async def list_accounts(directory: AccountDirectoryDep) -> DataResponse[list[AccountSummary]]:
    """List configured accounts without credentials."""
    return DataResponse(data=directory.summaries())


@router.get("/{account_id}/transactions", response_model=RawRecords)
async def get_transactions(
    account_id: str,
    service: MonitoringServiceDep,
    symbol: SymbolQuery = None,
    since: SinceQuery = None,
    limit: LimitQuery = None,
) -> RawRecords:
    """Get deposit/withdrawal history for an account."""
    try:
        records = await service.fetch_account_transactions(
            account_id, symbol=symbol, since=since, limit=limit
        )
    except ExchangeError as e:
        _transactions_errors.raise_http(e)
    return RawRecords(data=records)


@router.get("/{account_id}/positions", response_model=RawRecords)
async def get_positions(
    account_id: str,
    service: MonitoringServiceDep,
    symbol: SymbolQuery = None,
) -> RawRecords:
    """Get open positions for an account, optionally for one symbol."""
    try:
        records = await service.fetch_account_positions(account_id, symbol=symbol)
    except ExchangeError as e:
        _positions_errors.raise_http(e)
    return RawRecords(data=records)


@router.get("/{account_id}/open-orders", response_model=RawRecords)
async def get_open_orders(
    account_id: str,
    service: MonitoringServiceDep,
    symbol: SymbolQuery = None,
    since: SinceQuery = None,
    limit: LimitQuery = None,
) -> RawRecords:
    """Get currently open orders for an account."""
    try:
        records = await service.fetch_account_open_orders(
            account_id, symbol=symbol, since=since, limit=limit
        )
    except ExchangeError as e:
        _orders_errors.raise_http(e)
    return RawRecords(data=records)
