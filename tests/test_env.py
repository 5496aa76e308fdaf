import logging
import os

import httpx
import pytest

from async_oauth2 import AuthType, ClientSecret
from async_oauth2.env import (
    DEFAULT_HTTP_TIMEOUT,
    client_from_env,
    http_timeout_from_env,
    is_truthy,
    load_env,
    parse_scopes,
    setup_logging,
)

_KEYS = (
    "CLIENT_ID",
    "CLIENT_SECRET",
    "AUTH_URL",
    "TOKEN_URL",
    "REDIRECT_URL",
    "SCOPES",
    "AUTH_TYPE",
    "HTTP_TIMEOUT",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for prefix in ("OAUTH2", "GOOGLE"):
        for key in _KEYS:
            monkeypatch.delenv(f"{prefix}_{key}", raising=False)


def _set_required(monkeypatch, prefix: str = "OAUTH2") -> None:
    monkeypatch.setenv(f"{prefix}_CLIENT_ID", "client-1")
    monkeypatch.setenv(f"{prefix}_AUTH_URL", "https://provider.example.com/authorize")
    monkeypatch.setenv(f"{prefix}_TOKEN_URL", "https://provider.example.com/token")


@pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
def test_is_truthy(value: str) -> None:
    assert is_truthy(value)


@pytest.mark.parametrize("value", [None, "", "0", "false", "off", "nope"])
def test_is_not_truthy(value) -> None:
    assert not is_truthy(value)


def test_parse_scopes_accepts_commas_and_spaces() -> None:
    assert parse_scopes("read, write  admin,") == ["read", "write", "admin"]
    assert parse_scopes("  ") == []
    assert parse_scopes(None) == []


def test_client_from_env_minimal(monkeypatch) -> None:
    _set_required(monkeypatch)
    monkeypatch.setenv("OAUTH2_CLIENT_SECRET", "s3cret")

    client = client_from_env()

    assert client.client_id == "client-1"
    assert client.auth_url == httpx.URL("https://provider.example.com/authorize")
    assert client.token_url == httpx.URL("https://provider.example.com/token")
    assert client.client_secret == ClientSecret("s3cret")
    assert client.auth_type is AuthType.BASIC_AUTH
    assert client.scopes == []
    assert client.redirect_url is None


def test_client_from_env_optional_settings(monkeypatch) -> None:
    _set_required(monkeypatch, prefix="GOOGLE")
    monkeypatch.setenv("GOOGLE_REDIRECT_URL", "http://localhost:8080/api/auth/redirect")
    monkeypatch.setenv("GOOGLE_SCOPES", "openid,email profile")
    monkeypatch.setenv("GOOGLE_AUTH_TYPE", "body")

    client = client_from_env("GOOGLE")

    assert client.redirect_url == httpx.URL("http://localhost:8080/api/auth/redirect")
    assert client.scopes == ["openid", "email", "profile"]
    assert client.auth_type is AuthType.REQUEST_BODY


def test_client_from_env_reports_all_missing(monkeypatch) -> None:
    monkeypatch.setenv("OAUTH2_CLIENT_ID", "client-1")

    with pytest.raises(RuntimeError) as excinfo:
        client_from_env()

    assert "OAUTH2_AUTH_URL" in str(excinfo.value)
    assert "OAUTH2_TOKEN_URL" in str(excinfo.value)
    assert "OAUTH2_CLIENT_ID" not in str(excinfo.value)


def test_client_from_env_rejects_relative_url(monkeypatch) -> None:
    _set_required(monkeypatch)
    monkeypatch.setenv("OAUTH2_TOKEN_URL", "/token")

    with pytest.raises(RuntimeError, match="absolute URLs"):
        client_from_env()


def test_client_from_env_rejects_unknown_auth_type(monkeypatch) -> None:
    _set_required(monkeypatch)
    monkeypatch.setenv("OAUTH2_AUTH_TYPE", "jwt")

    with pytest.raises(RuntimeError, match="OAUTH2_AUTH_TYPE"):
        client_from_env()


def test_client_from_env_warns_without_secret(monkeypatch, caplog) -> None:
    _set_required(monkeypatch)

    with caplog.at_level(logging.WARNING, logger="async_oauth2"):
        client_from_env()

    assert "OAUTH2_CLIENT_SECRET is not set" in caplog.text


def test_http_timeout_from_env(monkeypatch) -> None:
    assert http_timeout_from_env() == DEFAULT_HTTP_TIMEOUT

    monkeypatch.setenv("OAUTH2_HTTP_TIMEOUT", "2.5")
    assert http_timeout_from_env() == 2.5

    monkeypatch.setenv("OAUTH2_HTTP_TIMEOUT", "soon")
    with pytest.raises(RuntimeError, match="OAUTH2_HTTP_TIMEOUT"):
        http_timeout_from_env()


def test_load_env_missing_file(tmp_path) -> None:
    assert load_env(tmp_path / ".env") is False


def test_load_env_overrides_environment(monkeypatch, tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("OAUTH2_CLIENT_ID=from-file\n", encoding="utf-8")
    monkeypatch.setenv("OAUTH2_CLIENT_ID", "from-env")

    assert load_env(env_file) is True

    assert os.environ["OAUTH2_CLIENT_ID"] == "from-file"


def test_setup_logging_respects_debug_flag(monkeypatch) -> None:
    monkeypatch.setenv("OAUTH2_DEBUG", "0")
    assert setup_logging() is False

    monkeypatch.setenv("OAUTH2_DEBUG", "1")
    assert setup_logging() is True
    assert logging.getLogger("async_oauth2").level == logging.INFO
    logging.getLogger("async_oauth2").setLevel(logging.NOTSET)
