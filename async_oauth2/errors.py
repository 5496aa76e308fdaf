from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

import httpx
from pydantic import BaseModel, PlainSerializer, PlainValidator


class ErrorField(str, Enum):
    """Error codes of https://tools.ietf.org/html/rfc6749#section-5.2.

    Codes outside the RFC are kept verbatim: ``ErrorField("slow_down")`` returns
    an ``OTHER`` value whose ``value`` is ``"slow_down"``.
    """

    # Missing or repeated parameter, unsupported value, several credentials
    # or authentication mechanisms, or otherwise malformed.
    INVALID_REQUEST = "invalid_request"
    # Unknown client, no client authentication or unsupported method.
    INVALID_CLIENT = "invalid_client"
    # Grant or refresh token invalid, expired, revoked, bound to another
    # redirect URI or issued to another client.
    INVALID_GRANT = "invalid_grant"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_SCOPE = "invalid_scope"

    @classmethod
    def _missing_(cls, value: object) -> "ErrorField | None":
        if not isinstance(value, str):
            return None
        other = str.__new__(cls, value)
        other._name_ = "OTHER"
        other._value_ = value
        return other

    @property
    def is_other(self) -> bool:
        return self._name_ == "OTHER"

    def __str__(self) -> str:
        return self.value


def _parse_error_field(value: Any) -> ErrorField:
    if isinstance(value, ErrorField):
        return value
    if not isinstance(value, str):
        raise ValueError("error must be a string.")
    return ErrorField(value)


class ErrorResponse(BaseModel):
    """Error body returned by the token endpoint (RFC 6749 section 5.2)."""

    error: Annotated[ErrorField, PlainValidator(_parse_error_field), PlainSerializer(str)]
    error_description: str | None = None
    error_uri: str | None = None

    def __str__(self) -> str:
        formatted = str(self.error)
        if self.error_description is not None:
            formatted += f": {self.error_description}"
        if self.error_uri is not None:
            formatted += f" / See {self.error_uri}"
        return formatted

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class RequestTokenError(RuntimeError):
    """Base class for everything that can go wrong while requesting a token."""

    status: int | None = None
    body: bytes | None = None


class TransportError(RequestTokenError):
    """The HTTP client failed to send the request or read the response."""

    def __init__(self, error: httpx.HTTPError) -> None:
        super().__init__(f"HTTP transport error: {error}")
        self.error = error
        if isinstance(error, httpx.HTTPStatusError):
            self.status = error.response.status_code


class BadResponse(RequestTokenError):
    """The response body could not be parsed as a token or an error response.

    ``body`` keeps the raw bytes since many providers drift from the RFC and
    the caller may still make sense of it.
    """

    def __init__(self, status: int, body: bytes, error: Exception) -> None:
        super().__init__(f"malformed server response: {status}")
        self.status = status
        self.body = body
        self.error = error


class TokenErrorResponse(RequestTokenError):
    """Non-successful status with a body that parsed as an ``ErrorResponse``."""

    def __init__(self, status: int, error: ErrorResponse) -> None:
        super().__init__(f"request resulted in error response: {status}: {error}")
        self.status = status
        self.error = error


class EmptyResponse(RequestTokenError):
    def __init__(self, status: int) -> None:
        super().__init__(f"request resulted in empty response: {status}")
        self.status = status
