from __future__ import annotations

import httpx
from pydantic import SecretStr

from .helpers import append_query_params, join_space_delimited, parse_url
from .request import Request
from .state import State
from .types import (
    AuthType,
    AuthorizationCode,
    ClientSecret,
    RefreshToken,
    ResourceOwnerPassword,
    Scope,
    as_secret,
)


class Client:
    """Configuration of an OAuth2 client.

    Build it once, adjust it with the ``set_*``/``add_scope`` methods, then share
    it between concurrent exchanges; nothing here changes while a request runs.

    ``auth_url`` is the authorization endpoint used for user-agent redirection
    (every flow except the password and client credentials grants).
    ``token_url`` is the endpoint where grants are exchanged for tokens (every
    flow except the implicit grant).
    """

    def __init__(
        self,
        client_id: str,
        auth_url: str | httpx.URL,
        token_url: str | httpx.URL,
    ) -> None:
        self._client_id = client_id
        self._client_secret: ClientSecret | None = None
        self._auth_url = parse_url(auth_url)
        self._token_url = parse_url(token_url)
        self._auth_type = AuthType.BASIC_AUTH
        self._scopes: list[Scope] = []
        self._redirect_url: httpx.URL | None = None

    def __repr__(self) -> str:
        return (
            f"Client(client_id={self._client_id!r}, client_secret={self._client_secret!r}, "
            f"auth_url={str(self._auth_url)!r}, token_url={str(self._token_url)!r}, "
            f"auth_type={self._auth_type.name}, scopes={self._scopes!r}, "
            f"redirect_url={None if self._redirect_url is None else str(self._redirect_url)!r})"
        )

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def client_secret(self) -> ClientSecret | None:
        return self._client_secret

    @property
    def auth_url(self) -> httpx.URL:
        return self._auth_url

    @property
    def token_url(self) -> httpx.URL:
        return self._token_url

    @property
    def auth_type(self) -> AuthType:
        return self._auth_type

    @property
    def scopes(self) -> list[Scope]:
        return list(self._scopes)

    @property
    def redirect_url(self) -> httpx.URL | None:
        return self._redirect_url

    def set_client_secret(self, client_secret: str | SecretStr) -> None:
        self._client_secret = as_secret(ClientSecret, client_secret)

    def add_scope(self, scope: str) -> None:
        """Append a scope; order is kept and duplicates are not removed."""
        self._scopes.append(Scope(scope))

    def set_auth_type(self, auth_type: AuthType) -> None:
        self._auth_type = AuthType(auth_type)

    def set_redirect_url(self, redirect_url: str | httpx.URL) -> None:
        self._redirect_url = parse_url(redirect_url)

    def authorize_url(self, state: State) -> httpx.URL:
        """Authorization URL for the authorization code grant.

        Use a fresh ``State.new_random()`` for each authorization request and
        check that the redirect hands the same value back; this mitigates CSRF
        (https://tools.ietf.org/html/rfc6749#section-10.12).
        """
        return self._authorize_url("code", state)

    def authorize_url_implicit(self, state: State) -> httpx.URL:
        """Authorization URL for the implicit grant. Same ``state`` rules apply."""
        return self._authorize_url("token", state)

    def _authorize_url(self, response_type: str, state: State) -> httpx.URL:
        params = [
            ("response_type", response_type),
            ("client_id", self._client_id),
        ]
        if self._redirect_url is not None:
            params.append(("redirect_uri", str(self._redirect_url)))

        scopes = self._scope_param()
        if scopes is not None:
            params.append(("scope", scopes))

        params.append(("state", state.to_base64()))
        return append_query_params(self._auth_url, params)

    def exchange_code(self, code: str | AuthorizationCode) -> Request:
        """Exchange an authorization code for a token (RFC 6749 section 4.1.3).

        Codes are single use; do not exchange the same one twice.
        """
        code = as_secret(AuthorizationCode, code)
        return (
            self._request_token()
            .param("grant_type", "authorization_code")
            .param("code", code)
        )

    def exchange_password(
        self, username: str, password: str | ResourceOwnerPassword
    ) -> Request:
        """Request a token with the password grant (RFC 6749 section 4.3.2)."""
        password = as_secret(ResourceOwnerPassword, password)
        request = (
            self._request_token()
            .param("grant_type", "password")
            .param("username", username)
            .param("password", password)
        )

        scopes = self._scope_param()
        if scopes is not None:
            request = request.param("scope", scopes)
        return request

    def exchange_client_credentials(self) -> Request:
        """Request a token with the client credentials grant (RFC 6749 section 4.4.2)."""
        request = self._request_token().param("grant_type", "client_credentials")

        scopes = self._scope_param()
        if scopes is not None:
            # NOTE: sent as "scopes", unlike the "scope" key of the other grants.
            request = request.param("scopes", scopes)
        return request

    def exchange_refresh_token(self, refresh_token: str | RefreshToken) -> Request:
        """Exchange a refresh token for a new access token (RFC 6749 section 6)."""
        refresh_token = as_secret(RefreshToken, refresh_token)
        return (
            self._request_token()
            .param("grant_type", "refresh_token")
            .param("refresh_token", refresh_token)
        )

    def _scope_param(self) -> str | None:
        if not self._scopes:
            return None
        return join_space_delimited(self._scopes)

    def _request_token(self) -> Request:
        return Request(
            token_url=self._token_url,
            auth_type=self._auth_type,
            client_id=self._client_id,
            client_secret=self._client_secret,
            redirect_url=self._redirect_url,
        )
