from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from .client import Client
from .constants import LOGGER
from .types import AuthType

DEFAULT_PREFIX = "OAUTH2"
DEFAULT_HTTP_TIMEOUT = 30.0

_AUTH_TYPES = {
    "basic": AuthType.BASIC_AUTH,
    "basic_auth": AuthType.BASIC_AUTH,
    "body": AuthType.REQUEST_BODY,
    "request_body": AuthType.REQUEST_BODY,
}


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_scopes(raw: str | None) -> list[str]:
    if raw is None or not raw.strip():
        return []
    return [item for item in raw.replace(",", " ").split() if item]


def load_env(path: str | Path | None = None) -> bool:
    env_path = Path(path) if path is not None else Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(env_path, override=True)


def client_from_env(prefix: str = DEFAULT_PREFIX) -> Client:
    """Build a ``Client`` from ``{prefix}_*`` environment variables.

    Required: ``_CLIENT_ID``, ``_AUTH_URL``, ``_TOKEN_URL``. Optional:
    ``_CLIENT_SECRET``, ``_REDIRECT_URL``, ``_SCOPES`` (space or comma
    separated) and ``_AUTH_TYPE`` (``basic`` or ``body``).
    """
    missing = [
        f"{prefix}_{name}"
        for name in ("CLIENT_ID", "AUTH_URL", "TOKEN_URL")
        if not os.getenv(f"{prefix}_{name}", "").strip()
    ]
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

    try:
        client = Client(
            os.environ[f"{prefix}_CLIENT_ID"].strip(),
            os.environ[f"{prefix}_AUTH_URL"].strip(),
            os.environ[f"{prefix}_TOKEN_URL"].strip(),
        )
    except ValueError as error:
        raise RuntimeError(
            f"{prefix}_AUTH_URL and {prefix}_TOKEN_URL must be absolute URLs."
        ) from error

    client_secret = os.getenv(f"{prefix}_CLIENT_SECRET", "").strip()
    if client_secret:
        client.set_client_secret(client_secret)

    redirect_url = os.getenv(f"{prefix}_REDIRECT_URL", "").strip()
    if redirect_url:
        client.set_redirect_url(redirect_url)

    for scope in parse_scopes(os.getenv(f"{prefix}_SCOPES")):
        client.add_scope(scope)

    raw_auth_type = os.getenv(f"{prefix}_AUTH_TYPE", "").strip().lower()
    if raw_auth_type:
        auth_type = _AUTH_TYPES.get(raw_auth_type)
        if auth_type is None:
            raise RuntimeError(f"{prefix}_AUTH_TYPE must be one of: basic, body.")
        client.set_auth_type(auth_type)

    if client.client_secret is None and client.auth_type is AuthType.BASIC_AUTH:
        LOGGER.warning(
            "%s_CLIENT_SECRET is not set; basic auth will send an empty password.", prefix
        )
    return client


def http_timeout_from_env(prefix: str = DEFAULT_PREFIX) -> float:
    key = f"{prefix}_HTTP_TIMEOUT"
    raw = os.getenv(key, "").strip()
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be a number of seconds.")


def setup_logging(prefix: str = DEFAULT_PREFIX) -> bool:
    debug_enabled = is_truthy(os.getenv(f"{prefix}_DEBUG", "1"))
    if debug_enabled:
        logging.basicConfig(level=logging.INFO)
        LOGGER.setLevel(logging.INFO)
    return debug_enabled
