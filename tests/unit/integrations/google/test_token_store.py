"""Tests for the Google OAuth token store."""

import json
from pathlib import Path

import pytest

from receipt_relay.integrations.google.token_store import (
    EnvTokenSource,
    FileTokenSource,
    TokenStore,
)
from receipt_relay.models.token import TokenSet

TOKEN_BLOB = {"access_token": "env-token", "refresh_token": "env-refresh"}


def make_store(raw: str | None, path: Path) -> TokenStore:
    file_source = FileTokenSource(path)
    return TokenStore([EnvTokenSource(raw), file_source], file_source)


def test_load_prefers_env_over_file(tmp_path):
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps({"access_token": "file-token"}))

    tokens = make_store(json.dumps(TOKEN_BLOB), path).load()

    assert tokens is not None
    assert tokens.access_token == "env-token"


def test_load_falls_back_to_file_on_bad_env(tmp_path, caplog):
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps({"access_token": "file-token"}))

    tokens = make_store("{not json", path).load()

    assert tokens is not None
    assert tokens.access_token == "file-token"
    assert "Invalid GOOGLE_OAUTH_TOKENS" in caplog.text


def test_load_returns_none_when_nothing_stored(tmp_path):
    assert make_store(None, tmp_path / "missing.json").load() is None


def test_load_returns_none_when_all_sources_malformed(tmp_path, caplog):
    path = tmp_path / "tokens.json"
    path.write_text("garbage")

    assert make_store("[]", path).load() is None
    assert "Failed reading token file" in caplog.text


def test_load_skips_unreadable_file(tmp_path):
    # A directory in place of the token file cannot be read
    path = tmp_path / "tokens.json"
    path.mkdir()

    assert make_store(None, path).load() is None


def test_save_writes_file(tmp_path):
    path = tmp_path / "nested" / "tokens.json"
    store = make_store(None, path)

    assert store.save(TokenSet(access_token="abc", refresh_token="r")) is True

    data = json.loads(path.read_text())
    assert data["access_token"] == "abc"
    assert data["refresh_token"] == "r"
    assert store.load().access_token == "abc"


def test_save_overwrites_previous_tokens(tmp_path):
    path = tmp_path / "tokens.json"
    store = make_store(None, path)
    store.save(TokenSet(access_token="old", refresh_token="r"))
    store.save(TokenSet(access_token="new"))

    data = json.loads(path.read_text())
    assert data == {"access_token": "new", "token_type": "Bearer"}


def test_save_failure_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = make_store(None, blocker / "tokens.json")

    assert store.save(TokenSet(access_token="abc")) is False
    assert "Failed to write token file" in caplog.text


def test_from_settings(settings):
    store = TokenStore.from_settings(settings)

    assert store.file_source.path == settings.google_token_path
    assert store.describe() == (
        f"env GOOGLE_OAUTH_TOKENS, file {settings.google_token_path}"
    )


@pytest.mark.parametrize("expiry_date", [[1], 10**30, "soon"])
def test_load_skips_bad_expiry_in_env(tmp_path, caplog, expiry_date):
    raw = json.dumps({"access_token": "x", "expiry_date": expiry_date})

    assert make_store(raw, tmp_path / "missing.json").load() is None
    assert "Invalid GOOGLE_OAUTH_TOKENS" in caplog.text


def test_load_skips_bad_expiry_in_file(tmp_path, caplog):
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps({"access_token": "x", "expiry_date": [1]}))

    assert make_store(None, path).load() is None
    assert "Failed reading token file" in caplog.text


def test_load_skips_bad_scopes(tmp_path):
    raw = json.dumps({"access_token": "x", "scopes": [1, 2]})

    assert make_store(raw, tmp_path / "missing.json").load() is None
