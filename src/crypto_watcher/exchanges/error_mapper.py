"""Maps exchange access errors to HTTP responses."""
from dataclasses import dataclass

from fastapi import HTTPException

from crypto_watcher.exchanges.exceptions import (AccountNotFoundError,
                                                 OperationNotSupportedError,
                                                 UnsupportedExchangeError)


@dataclass(frozen=True)
class ExchangeErrorMapper:
    """Maps the exchange error taxonomy to HTTP (status_code, detail).

    One instance per resource (e.g. "Transactions", "Positions") so upstream
    failures get a resource-specific message without leaking library details.
    """

    resource_name: str = "Resource"

    def to_http(self, exc: Exception) -> tuple[int, str]:
        """Map an exception from the monitoring service to (status_code, detail).

        Args:
            exc: The exception raised by ExchangeMonitoringService.

        Returns:
            (status_code, detail) suitable for HTTPException(status_code=..., detail=...).
        """
        if isinstance(exc, AccountNotFoundError):
            return (404, str(exc))
        if isinstance(exc, UnsupportedExchangeError):
            return (400, str(exc))
        if isinstance(exc, OperationNotSupportedError):
            return (501, str(exc))
        return (502, f"{self.resource_name} temporarily unavailable")

    def raise_http(self, exc: Exception) -> None:
        """Map exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc)
        raise HTTPException(status_code=status_code, detail=detail) from exc
