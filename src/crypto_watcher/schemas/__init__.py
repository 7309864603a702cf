"""Pydantic schemas for API and runtime use. Nothing here is persisted."""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class Direction(str, Enum):
    ABOVE = "above"
    BELOW = "below"


class Frequency(str, Enum):
    REALTIME = "realtime"
    ONE_MINUTE = "1m"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"


class PriceSource(str, Enum):
    MOCK = "mock"
    PROVIDER = "provider"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WatcherConfig(_CamelModel):
    """A price alert rule held by the watcher registry."""

    id: str
    symbol: str
    exchange: str
    threshold: float = Field(gt=0)
    direction: Direction
    frequency: Frequency = Frequency.REALTIME
    active: bool = True
    created_at: datetime
    updated_at: datetime


class CreateWatcherInput(_CamelModel):
    """Body of POST /watchers."""

    symbol: str = Field(min_length=1)
    exchange: str = Field(min_length=1)
    threshold: float = Field(gt=0)
    direction: Direction
    frequency: Frequency = Frequency.REALTIME


class UpdateWatcherInput(_CamelModel):
    """Body of PATCH /watchers/{id}. At least one field must be given."""

    threshold: float | None = Field(default=None, gt=0)
    direction: Direction | None = None
    frequency: Frequency | None = None
    active: bool | None = None

    @model_validator(mode="after")
    def require_a_field(self) -> "UpdateWatcherInput":
        if not self.changes():
            raise ValueError("At least one updatable field must be provided")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly set to a value, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class SpotPrice(_CamelModel):
    """A spot price quote produced fresh on every request."""

    symbol: str
    price: float
    currency: str
    source: PriceSource
    as_of: datetime = Field(default_factory=utcnow)


class HealthStatus(BaseModel):
    status: str = "ok"
    uptime: float
    timestamp: datetime = Field(default_factory=utcnow)


class DataResponse(BaseModel, Generic[T]):
    """Envelope for successful API responses."""

    data: T


__all__ = [
    "CreateWatcherInput",
    "DataResponse",
    "Direction",
    "Frequency",
    "HealthStatus",
    "PriceSource",
    "SpotPrice",
    "UpdateWatcherInput",
    "WatcherConfig",
    "utcnow",
]
