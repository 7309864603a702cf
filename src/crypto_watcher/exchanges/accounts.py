"""Account directory: exchange credentials parsed once from configuration."""
import json
import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from crypto_watcher.exchanges.exceptions import AccountConfigError

logger = logging.getLogger(__name__)


class ExchangeAccount(BaseModel):
    """Credentials bound to one exchange, identified by a directory id."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: str = Field(min_length=1)
    exchange: str = Field(min_length=1)
    api_key: str = Field(min_length=1, repr=False)
    secret: str = Field(min_length=1, repr=False)
    password: str | None = Field(default=None, repr=False)
    uid: str | None = None
    address: str | None = None


class AccountSummary(BaseModel):
    """Public view of an account; never carries credentials."""

    id: str
    exchange: str
    address: str | None = None


_ACCOUNT_LIST = TypeAdapter(list[ExchangeAccount])


class AccountDirectory:
    """Read-only lookup table from account id to ExchangeAccount."""

    def __init__(self, accounts: Iterable[ExchangeAccount] = ()) -> None:
        self._accounts: dict[str, ExchangeAccount] = {}
        for account in accounts:
            if account.id in self._accounts:
                raise AccountConfigError(f"Duplicate exchange account id '{account.id}'")
            self._accounts[account.id] = account

    @classmethod
    def from_json(cls, raw: str | None) -> "AccountDirectory":
        """Parse a JSON list of accounts (the EXCHANGE_ACCOUNTS format).

        Blank or missing input yields an empty directory.

        Raises:
            AccountConfigError: If the JSON is malformed, an entry is invalid,
                or two entries share an id.
        """
        if raw is None or not raw.strip():
            return cls()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse exchange account configuration: %s", exc)
            raise AccountConfigError("Exchange account configuration is not valid JSON") from exc
        try:
            accounts = _ACCOUNT_LIST.validate_python(payload)
        except ValidationError as exc:
            for issue in exc.errors():
                logger.error(
                    "Invalid exchange account configuration at %s: %s",
                    ".".join(str(p) for p in issue["loc"]),
                    issue["msg"],
                )
            raise AccountConfigError("Exchange account configuration is invalid") from exc
        return cls(accounts)

    def find(self, account_id: str) -> ExchangeAccount | None:
        return self._accounts.get(account_id)

    def list_accounts(self) -> list[ExchangeAccount]:
        return list(self._accounts.values())

    def summaries(self) -> list[AccountSummary]:
        """Public projections of every account, in configuration order."""
        return [
            AccountSummary(id=a.id, exchange=a.exchange, address=a.address)
            for a in self._accounts.values()
        ]

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)
