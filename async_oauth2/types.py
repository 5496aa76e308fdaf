from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from pydantic import GetCoreSchemaHandler, SecretStr
from pydantic_core import core_schema

from .constants import REDACTED

SecretT = TypeVar("SecretT", bound=SecretStr)


class _StrNewType(str):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


class Scope(_StrNewType):
    """Access token scope, as defined by the authorization server."""

    __slots__ = ()


class PkceCodeChallengeS256(_StrNewType):
    """PKCE ``code_challenge`` value (RFC 7636)."""

    __slots__ = ()


class PkceCodeChallengeMethod(_StrNewType):
    """PKCE ``code_challenge_method`` value (RFC 7636)."""

    __slots__ = ()


class RedactedSecret(SecretStr):
    """A secret string that only ever prints as ``[redacted]``.

    The wrapped value is reachable through ``get_secret_value()`` alone; ``str()``,
    ``repr()``, f-strings and JSON dumps all show the redaction marker. Two
    secrets compare equal only when they are of the same type and hold the same
    value, so an ``AuthorizationCode`` never equals an ``AccessToken``.
    """

    def __str__(self) -> str:
        return REDACTED

    def __repr__(self) -> str:
        return f"{type(self).__name__}({REDACTED})"


class ClientSecret(RedactedSecret):
    """Client password issued during registration (RFC 6749 section 2.2)."""


class AuthorizationCode(RedactedSecret):
    """Authorization code returned from the authorization endpoint."""


class RefreshToken(RedactedSecret):
    """Refresh token used to obtain a new access token."""


class AccessToken(RedactedSecret):
    """Access token used to access protected resources."""


class ResourceOwnerPassword(RedactedSecret):
    """Resource owner password used directly as an authorization grant."""


def as_secret(cls: type[SecretT], value: str | SecretStr) -> SecretT:
    if isinstance(value, cls):
        return value
    if isinstance(value, SecretStr):
        return cls(value.get_secret_value())
    if not isinstance(value, str):
        raise TypeError(f"{cls.__name__} must be built from a string, got {type(value).__name__}.")
    return cls(value)


def secret_value(value: str | SecretStr) -> str:
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return value


class AuthType(Enum):
    """How client credentials are presented to the token endpoint.

    The default is ``BASIC_AUTH``, as recommended by
    https://tools.ietf.org/html/rfc6749#section-2.3.1.
    """

    # client_id and client_secret go into the form body.
    REQUEST_BODY = "request_body"
    # client_id and client_secret go into an HTTP Basic Authorization header.
    BASIC_AUTH = "basic_auth"
