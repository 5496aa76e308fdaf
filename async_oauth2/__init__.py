"""An asynchronous OAuth2 client flow implementation following RFC 6749."""

from .client import Client
from .constants import APP_VERSION
from .errors import (
    BadResponse,
    EmptyResponse,
    ErrorField,
    ErrorResponse,
    RequestTokenError,
    TokenErrorResponse,
    TransportError,
)
from .helpers import append_query_params
from .http import build_http_client
from .pkce import PkceCodeVerifierS256
from .request import ClientRequest, Request
from .state import State
from .token import StandardToken, Token, TokenType
from .types import (
    AccessToken,
    AuthorizationCode,
    AuthType,
    ClientSecret,
    PkceCodeChallengeMethod,
    PkceCodeChallengeS256,
    RefreshToken,
    ResourceOwnerPassword,
    Scope,
)

__version__ = APP_VERSION

__all__ = [
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
]
