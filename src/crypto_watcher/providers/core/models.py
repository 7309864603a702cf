"""Provider-neutral quote model."""
from datetime import datetime

from pydantic import BaseModel


class ProviderQuote(BaseModel):
    """A price returned by a spot price provider."""

    symbol: str
    currency: str
    price: float
    last_updated: datetime | None = None
