"""Showcases how to define and use a nonstandard token type.

Twitch wants ``client_id`` and ``client_secret`` as extra form parameters on
the token exchange, on top of the Basic credentials.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta

from pydantic import BaseModel, Field

from async_oauth2 import AccessToken, Client, RefreshToken, Scope, TokenType
from async_oauth2.env import setup_logging
from examples.helpers import REDIRECT_URL, authorization_code_flow, config_from_args


class TwitchToken(BaseModel):
    """Twitch returns ``scope`` as a JSON list instead of a space-delimited string."""

    access_token: AccessToken
    token_type: TokenType
    expires_in: timedelta | None = None
    refresh_token: RefreshToken | None = None
    scopes: list[Scope] | None = Field(default=None, alias="scope")


async def main() -> None:
    config, _ = config_from_args("Twitch Example")
    debug = setup_logging()

    client = Client(
        config.client_id,
        "https://id.twitch.tv/oauth2/authorize",
        "https://id.twitch.tv/oauth2/token",
    )
    client.set_client_secret(config.client_secret)
    client.set_redirect_url(REDIRECT_URL)

    token = await authorization_code_flow(
        client,
        token_cls=TwitchToken,
        debug=debug,
        extra_params=[
            ("client_id", config.client_id),
            ("client_secret", config.client_secret),
        ],
    )
    print(f"Token: {token!r}")


if __name__ == "__main__":
    asyncio.run(main())
