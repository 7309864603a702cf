"""In-memory registry of price alert watchers."""
import logging
import threading
import uuid
from datetime import datetime

from crypto_watcher.schemas import (CreateWatcherInput, Direction, Frequency,
                                    UpdateWatcherInput, WatcherConfig, utcnow)

logger = logging.getLogger(__name__)


class WatcherRegistry:
    """Volatile CRUD store for WatcherConfig records.

    Every read returns a deep copy, so callers can never mutate stored state.
    Two demo watchers are seeded at construction. Absence is reported with
    None/False rather than an exception.
    """

    def __init__(self, *, seed_defaults: bool = True) -> None:
        self._watchers: dict[str, WatcherConfig] = {}
        self._lock = threading.Lock()
        if seed_defaults:
            self._seed_defaults()

    def list(self) -> list[WatcherConfig]:
        """Snapshot of all watchers in insertion order."""
        with self._lock:
            return [w.model_copy(deep=True) for w in self._watchers.values()]

    def get(self, watcher_id: str) -> WatcherConfig | None:
        with self._lock:
            watcher = self._watchers.get(watcher_id)
            return watcher.model_copy(deep=True) if watcher else None

    def create(self, data: CreateWatcherInput) -> WatcherConfig:
        """Store a new active watcher with normalized symbol and exchange."""
        now = utcnow()
        watcher = WatcherConfig(
            id=str(uuid.uuid4()),
            symbol=data.symbol.upper(),
            exchange=data.exchange.lower(),
            threshold=data.threshold,
            direction=data.direction,
            frequency=data.frequency or Frequency.REALTIME,
            active=True,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._watchers[watcher.id] = watcher
        logger.info("Created watcher %s for %s on %s", watcher.id, watcher.symbol, watcher.exchange)
        return watcher.model_copy(deep=True)

    def update(self, watcher_id: str, data: UpdateWatcherInput) -> WatcherConfig | None:
        """Merge the provided fields onto an existing watcher.

        Fields not set on data keep their value. updated_at never moves
        backwards, even if the wall clock does.
        """
        with self._lock:
            existing = self._watchers.get(watcher_id)
            if existing is None:
                return None
            updated = existing.model_copy(
                update={
                    **data.changes(),
                    "updated_at": max(utcnow(), existing.updated_at),
                }
            )
            self._watchers[watcher_id] = updated
        logger.info("Updated watcher %s", watcher_id)
        return updated.model_copy(deep=True)

    def remove(self, watcher_id: str) -> bool:
        """Delete a watcher; return whether anything was removed."""
        with self._lock:
            removed = self._watchers.pop(watcher_id, None) is not None
        if removed:
            logger.debug("Removed watcher %s", watcher_id)
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._watchers)

    def _seed_defaults(self) -> None:
        now = utcnow()
        for symbol, exchange, threshold, direction, frequency in (
            ("BTC", "binance", 65000.0, Direction.ABOVE, Frequency.REALTIME),
            ("ETH", "coinbase", 3200.0, Direction.BELOW, Frequency.ONE_MINUTE),
        ):
            self._insert_seed(symbol, exchange, threshold, direction, frequency, now)

    def _insert_seed(
        self,
        symbol: str,
        exchange: str,
        threshold: float,
        direction: Direction,
        frequency: Frequency,
        now: datetime,
    ) -> None:
        watcher = WatcherConfig(
            id=str(uuid.uuid4()),
            symbol=symbol,
            exchange=exchange,
            threshold=threshold,
            direction=direction,
            frequency=frequency,
            created_at=now,
            updated_at=now,
        )
        self._watchers[watcher.id] = watcher
