from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .helpers import join_space_delimited, split_space_delimited
from .types import AccessToken, RefreshToken, Scope


class TokenType(str, Enum):
    """Basic OAuth2 token types, matched case-insensitively on the wire."""

    # RFC 6750
    BEARER = "bearer"
    # draft-ietf-oauth-v2-http-mac-05
    MAC = "mac"

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class Token(Protocol):
    """Common fields shared by all OAuth2 token responses.

    The fields are defined in https://tools.ietf.org/html/rfc6749#section-5.1.
    The protocol exists apart from ``StandardToken`` so that callers can decode
    responses of providers that deviate from the RFC. Any type pydantic can
    validate from JSON and that carries these attributes can be passed to
    ``ClientRequest.execute``.

    - ``access_token``: REQUIRED. The access token issued by the server.
    - ``token_type``: REQUIRED. See RFC 6749 section 7.1.
    - ``expires_in``: RECOMMENDED. Lifetime of the access token.
    - ``refresh_token``: OPTIONAL. See RFC 6749 section 6.
    - ``scopes``: OPTIONAL if identical to the requested scope. Parsed from the
      space-delimited ``scope`` field; ``None`` when the field is absent.
    """

    access_token: AccessToken
    token_type: TokenType
    expires_in: timedelta | None
    refresh_token: RefreshToken | None
    scopes: list[Scope] | None


class StandardToken(BaseModel):
    """Standard OAuth2 token response (RFC 6749 section 5.1)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    access_token: AccessToken
    token_type: TokenType
    expires_in: timedelta | None = None
    refresh_token: RefreshToken | None = None
    scopes: list[Scope] | None = Field(default=None, alias="scope")

    @field_validator("token_type", mode="before")
    @classmethod
    def _lower_token_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("expires_in", mode="before")
    @classmethod
    def _seconds_to_timedelta(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("expires_in must be a number of seconds.")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError("expires_in must be a whole number of seconds.")
            value = int(value)
        if isinstance(value, int):
            if value < 0:
                raise ValueError("expires_in must not be negative.")
            return timedelta(seconds=value)
        return value

    @field_validator("expires_in")
    @classmethod
    def _check_lifetime(cls, value: timedelta | None) -> timedelta | None:
        # wire form is non-negative integer seconds
        if value is not None and (value < timedelta(0) or value.microseconds):
            raise ValueError("expires_in must be a non-negative whole number of seconds.")
        return value

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_space_delimited(value)
        return value

    @field_serializer("access_token", "refresh_token", when_used="json")
    def _reveal_secret(self, value: AccessToken | RefreshToken | None) -> str | None:
        if value is None:
            return None
        return value.get_secret_value()

    @field_serializer("expires_in", when_used="json")
    def _timedelta_to_seconds(self, value: timedelta | None) -> int | None:
        if value is None:
            return None
        return int(value.total_seconds())

    @field_serializer("scopes", when_used="json")
    def _join_scopes(self, value: list[Scope] | None) -> str | None:
        return join_space_delimited(value)

    @classmethod
    def from_json(cls, body: str | bytes) -> "StandardToken":
        return cls.model_validate_json(body)

    def to_json(self) -> str:
        """Serialize in wire form, revealing the secrets and omitting unset fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
