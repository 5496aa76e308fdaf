from __future__ import annotations

import urllib.parse
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import SecretStr, TypeAdapter

from .constants import CONTENT_TYPE_FORM, CONTENT_TYPE_JSON, LOGGER
from .errors import (
    BadResponse,
    EmptyResponse,
    ErrorResponse,
    TokenErrorResponse,
    TransportError,
)
from .helpers import form_urlencode
from .token import StandardToken
from .types import AuthType, ClientSecret, secret_value

T = TypeVar("T")


@lru_cache(maxsize=None)
def _token_adapter(token_cls: Any) -> TypeAdapter:
    return TypeAdapter(token_cls)


@dataclass(frozen=True, repr=False)
class Request:
    """A token request that is being built. Single use.

    ``param`` returns a new request with the pair appended and hands ownership
    to it; ``with_client`` consumes the request. Using a consumed request again
    raises ``RuntimeError``, so a grant such as an authorization code is sent
    at most once.
    """

    token_url: httpx.URL
    auth_type: AuthType
    client_id: str
    client_secret: ClientSecret | None = None
    redirect_url: httpx.URL | None = None
    params: tuple[tuple[str, str | SecretStr], ...] = ()
    consumed: bool = field(default=False, init=False, compare=False)

    def __repr__(self) -> str:
        keys = [key for key, _ in self.params]
        return (
            f"Request(token_url={str(self.token_url)!r}, auth_type={self.auth_type.name}, "
            f"client_id={self.client_id!r}, params={keys!r})"
        )

    def param(self, key: str, value: str | SecretStr) -> "Request":
        """Return a copy of the request with an extra form parameter."""
        self._consume()
        return replace(self, params=self.params + ((key, value),))

    @property
    def grant_type(self) -> str | None:
        for key, value in self.params:
            if key == "grant_type":
                return secret_value(value)
        return None

    def form_pairs(self) -> list[tuple[str, str]]:
        pairs: list[tuple[str, str]] = []

        if self.auth_type is AuthType.REQUEST_BODY:
            pairs.append(("client_id", self.client_id))
            if self.client_secret is not None:
                pairs.append(("client_secret", self.client_secret.get_secret_value()))

        pairs.extend((key, secret_value(value)) for key, value in self.params)

        if self.redirect_url is not None:
            pairs.append(("redirect_uri", str(self.redirect_url)))
        return pairs

    def encode_body(self) -> bytes:
        return urllib.parse.urlencode(self.form_pairs()).encode("ascii")

    def basic_auth(self) -> tuple[str, str] | None:
        """Basic credentials, each form-encoded first as RFC 6749 2.3.1 requires.

        Plain Basic auth does not do this, so httpx will not do it for us.
        """
        if self.auth_type is not AuthType.BASIC_AUTH:
            return None
        username = form_urlencode(self.client_id)
        password = ""
        if self.client_secret is not None:
            password = form_urlencode(self.client_secret.get_secret_value())
        return username, password

    def with_client(self, http_client: httpx.AsyncClient) -> "ClientRequest":
        self._consume()
        return ClientRequest(self, http_client)

    def _consume(self) -> None:
        if self.consumed:
            raise RuntimeError("Token request has already been used.")
        # frozen dataclass; this flag is the only field that ever changes
        object.__setattr__(self, "consumed", True)


class ClientRequest:
    """A ``Request`` paired with the HTTP client that will send it. Single use."""

    def __init__(self, request: Request, http_client: httpx.AsyncClient) -> None:
        self._request = request
        self._http_client = http_client
        self._executed = False

    @property
    def request(self) -> Request:
        return self._request

    async def execute(self, token_cls: type[T] = StandardToken) -> T:
        """Send the token request and decode the response as ``token_cls``.

        Raises ``TransportError``, ``EmptyResponse``, ``TokenErrorResponse`` or
        ``BadResponse``; nothing is retried.
        """
        if self._executed:
            raise RuntimeError("Token request has already been executed.")
        self._executed = True

        request = self._request
        # RFC 6749 section 5.1 only permits JSON here, but some providers (GitHub)
        # default to other formats unless asked.
        headers = {"Accept": CONTENT_TYPE_JSON, "Content-Type": CONTENT_TYPE_FORM}
        credentials = request.basic_auth()
        auth = httpx.BasicAuth(*credentials) if credentials is not None else None

        LOGGER.debug(
            "Token request POST %s grant_type=%s auth_type=%s",
            request.token_url,
            request.grant_type,
            request.auth_type.name,
        )

        try:
            response = await self._http_client.post(
                request.token_url,
                content=request.encode_body(),
                headers=headers,
                auth=auth,
            )
        except httpx.HTTPError as error:
            LOGGER.warning("Token request to %s failed: %s", request.token_url, error)
            raise TransportError(error) from error

        status = response.status_code
        body = response.content
        LOGGER.info("Token response %s -> %s", request.token_url, status)

        if not body:
            LOGGER.warning("Token endpoint returned an empty body status=%s", status)
            raise EmptyResponse(status)

        if not response.is_success:
            try:
                error_response = ErrorResponse.model_validate_json(body)
            except ValueError as error:
                LOGGER.warning("Malformed token error response status=%s", status)
                raise BadResponse(status, body, error) from error

            LOGGER.warning(
                "Token endpoint error status=%s error=%s description=%s",
                status,
                error_response.error,
                error_response.error_description,
            )
            raise TokenErrorResponse(status, error_response)

        try:
            return _token_adapter(token_cls).validate_json(body)
        except ValueError as error:
            LOGGER.warning("Malformed token response status=%s", status)
            raise BadResponse(status, body, error) from error
