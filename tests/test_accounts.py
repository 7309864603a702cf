import json

import pytest

from crypto_watcher.exchanges import (AccountConfigError, AccountDirectory,
                                      ExchangeAccount)


def test_from_json_parses_camel_case_credentials(directory: AccountDirectory):
    account = directory.find("okx-sub")

    assert isinstance(account, ExchangeAccount)
    assert account.exchange == "okx"
    assert account.api_key == "key-2"
    assert account.secret == "secret-2"
    assert account.password == "pass"
    assert account.uid is None
    assert len(directory) == 3
    assert "main" in directory


def test_find_is_exact_match(directory: AccountDirectory):
    assert directory.find("MAIN") is None
    assert directory.find("mai") is None
    assert directory.find("main") is not None


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank_configuration_gives_empty_directory(raw):
    directory = AccountDirectory.from_json(raw)

    assert len(directory) == 0
    assert directory.summaries() == []


def test_summaries_never_expose_credentials(directory: AccountDirectory):
    summaries = [s.model_dump() for s in directory.summaries()]

    assert summaries[0] == {"id": "main", "exchange": "binance", "address": "0xabc"}
    assert all(set(s) == {"id", "exchange", "address"} for s in summaries)


def test_repr_hides_secrets(directory: AccountDirectory):
    text = repr(directory.find("okx-sub"))

    assert "secret-2" not in text
    assert "key-2" not in text
    assert "pass" not in text


def test_accounts_are_immutable(directory: AccountDirectory):
    account = directory.find("main")

    with pytest.raises(Exception):
        account.secret = "changed"


def test_malformed_json_raises(caplog):
    with pytest.raises(AccountConfigError):
        AccountDirectory.from_json("[{not json")

    assert "Failed to parse exchange account configuration" in caplog.text


def test_missing_required_field_raises_and_logs(caplog):
    raw = json.dumps([{"id": "a", "exchange": "binance", "apiKey": "k"}])

    with pytest.raises(AccountConfigError):
        AccountDirectory.from_json(raw)

    assert "0.secret" in caplog.text


def test_empty_strings_are_rejected():
    raw = json.dumps([{"id": "", "exchange": "binance", "apiKey": "k", "secret": "s"}])

    with pytest.raises(AccountConfigError):
        AccountDirectory.from_json(raw)


def test_duplicate_ids_are_rejected():
    entry = {"id": "dup", "exchange": "binance", "apiKey": "k", "secret": "s"}

    with pytest.raises(AccountConfigError, match="dup"):
        AccountDirectory.from_json(json.dumps([entry, entry]))
