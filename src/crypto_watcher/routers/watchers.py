"""Watcher routes: CRUD over the in-memory registry plus current price."""
import logging

from fastapi import APIRouter, HTTPException, Response, status

from crypto_watcher.deps import PriceServiceDep, WatcherRegistryDep
from crypto_watcher.schemas import (CreateWatcherInput, DataResponse,
                                    SpotPrice, UpdateWatcherInput,
                                    WatcherConfig)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/watchers", tags=["watchers"])

WATCHER_NOT_FOUND = "Watcher not found"


@router.get("", response_model=DataResponse[list[WatcherConfig]])
async def list_watchers(registry: WatcherRegistryDep) -> DataResponse[list[WatcherConfig]]:
    return DataResponse(data=registry.list())


@router.get("/{watcher_id}", response_model=DataResponse[WatcherConfig])
async def get_watcher(watcher_id: str, registry: WatcherRegistryDep) -> DataResponse[WatcherConfig]:
    watcher = registry.get(watcher_id)
    if watcher is None:
        raise HTTPException(status_code=404, detail=WATCHER_NOT_FOUND)
    return DataResponse(data=watcher)


@router.post(
    "",
    response_model=DataResponse[WatcherConfig],
    status_code=status.HTTP_201_CREATED,
)
async def create_watcher(
    body: CreateWatcherInput, registry: WatcherRegistryDep
) -> DataResponse[WatcherConfig]:
    """Create a watcher. Symbol is uppercased and exchange lowercased."""
    return DataResponse(data=registry.create(body))


@router.patch("/{watcher_id}", response_model=DataResponse[WatcherConfig])
async def update_watcher(
    watcher_id: str, body: UpdateWatcherInput, registry: WatcherRegistryDep
) -> DataResponse[WatcherConfig]:
    """Partially update a watcher; an empty body is rejected with 400."""
    watcher = registry.update(watcher_id, body)
    if watcher is None:
        raise HTTPException(status_code=404, detail=WATCHER_NOT_FOUND)
    return DataResponse(data=watcher)


@router.delete("/{watcher_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_watcher(watcher_id: str, registry: WatcherRegistryDep) -> Response:
    if not registry.remove(watcher_id):
        raise HTTPException(status_code=404, detail=WATCHER_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{watcher_id}/price", response_model=DataResponse[SpotPrice])
async def get_watcher_price(
    watcher_id: str,
    registry: WatcherRegistryDep,
    prices: PriceServiceDep,
) -> DataResponse[SpotPrice]:
    """Current spot price for the watcher's symbol.

    The price service falls back to static prices on its own; a 502 here
    means the service itself failed unexpectedly.
    """
    watcher = registry.get(watcher_id)
    if watcher is None:
        raise HTTPException(status_code=404, detail=WATCHER_NOT_FOUND)
    try:
        quote = await prices.fetch_spot_price(watcher.symbol)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Failed to fetch spot price for watcher %s", watcher.id)
        raise HTTPException(status_code=502, detail="Price service unavailable") from exc
    return DataResponse(data=quote)
