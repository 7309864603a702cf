"""Models for the CoinMarketCap provider (API params and response rows)."""
from datetime import datetime

from pydantic import BaseModel


class CoinMarketCapQuotesParams(BaseModel):
    """Params for /v1/cryptocurrency/quotes/latest."""

    symbol: str
    convert: str = "USD"


class CoinMarketCapQuote(BaseModel):
    """One entry of ``data[SYMBOL].quote``; unknown fields are ignored."""

    price: float
    last_updated: datetime | None = None
