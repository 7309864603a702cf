"""Closed error taxonomy for exchange account access."""


class ExchangeError(Exception):
    """Base class for every failure raised by the exchange access layer."""


class AccountNotFoundError(ExchangeError):
    """No configured account matches the requested id."""

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Account '{account_id}' not found")
        self.account_id = account_id


class UnsupportedExchangeError(ExchangeError):
    """The account names an exchange the client library does not implement."""

    def __init__(self, exchange_id: str) -> None:
        super().__init__(f"Exchange '{exchange_id}' is not supported")
        self.exchange_id = exchange_id


class OperationNotSupportedError(ExchangeError):
    """The exchange does not implement or advertise the requested operation."""

    def __init__(self, operation: str, exchange_id: str) -> None:
        super().__init__(f"Exchange '{exchange_id}' does not support {operation}")
        self.operation = operation
        self.exchange_id = exchange_id


class UpstreamExchangeError(ExchangeError):
    """Any other failure reported by the exchange (network, auth, rate limit).

    The original library exception is kept as ``__cause__``.
    """

    def __init__(self, account_id: str, exchange_id: str, operation: str) -> None:
        super().__init__(
            f"{operation} failed for account '{account_id}' on '{exchange_id}'"
        )
        self.account_id = account_id
        self.exchange_id = exchange_id
        self.operation = operation


class AccountConfigError(ValueError):
    """The exchange account configuration could not be parsed or validated."""
