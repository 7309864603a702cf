"""Process configuration loaded from environment variables."""
import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


class Settings(BaseModel):
    """Validated runtime settings. Read once at startup via from_env()."""

    host: str = "127.0.0.1"
    port: int = Field(default=4000, ge=1, le=65535)
    log_level: LogLevel = "info"
    coinmarketcap_api_key: str | None = None
    exchange_accounts: str | None = None
    exchange_http_proxy: str | None = None
    exchange_http_timeout_ms: int = Field(default=10_000, gt=0)
    price_provider_timeout_seconds: float = Field(default=5.0, gt=0)

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from the environment; blank values count as unset.

        Raises:
            pydantic.ValidationError: If any value fails validation.
        """
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for name in cls.model_fields:
            raw = env.get(name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        if "log_level" in values:
            values["log_level"] = values["log_level"].lower()
        return cls.model_validate(values)
