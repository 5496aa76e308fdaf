import async_oauth2
from async_oauth2 import env


EXPECTED_PACKAGE_EXPORTS = (
    "AccessToken",
    "AuthType",
    "AuthorizationCode",
    "BadResponse",
    "Client",
    "ClientRequest",
    "ClientSecret",
    "EmptyResponse",
    "ErrorField",
    "ErrorResponse",
    "PkceCodeChallengeMethod",
    "PkceCodeChallengeS256",
    "PkceCodeVerifierS256",
    "RefreshToken",
    "Request",
    "RequestTokenError",
    "ResourceOwnerPassword",
    "Scope",
    "StandardToken",
    "State",
    "Token",
    "TokenErrorResponse",
    "TokenType",
    "TransportError",
    "append_query_params",
    "build_http_client",
)

EXPECTED_ENV_EXPORTS = (
    "DEFAULT_PREFIX",
    "DEFAULT_HTTP_TIMEOUT",
    "is_truthy",
    "parse_scopes",
    "load_env",
    "client_from_env",
    "http_timeout_from_env",
    "setup_logging",
)


def test_package_export_surface() -> None:
    missing = [name for name in EXPECTED_PACKAGE_EXPORTS if not hasattr(async_oauth2, name)]
    assert missing == []
    assert sorted(async_oauth2.__all__) == sorted(EXPECTED_PACKAGE_EXPORTS)


def test_env_export_surface() -> None:
    missing = [name for name in EXPECTED_ENV_EXPORTS if not hasattr(env, name)]
    assert missing == []
