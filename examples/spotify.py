from __future__ import annotations

import asyncio

from async_oauth2 import Client, StandardToken
from async_oauth2.env import setup_logging
from examples.helpers import REDIRECT_URL, authorization_code_flow, config_from_args


async def main() -> None:
    config, _ = config_from_args("Spotify Example")
    debug = setup_logging()

    client = Client(
        config.client_id,
        "https://accounts.spotify.com/authorize",
        "https://accounts.spotify.com/api/token",
    )
    client.set_client_secret(config.client_secret)
    client.add_scope("user-read-email")
    client.set_redirect_url(REDIRECT_URL)

    # Spotify accepts PKCE on top of the client secret.
    token = await authorization_code_flow(
        client, token_cls=StandardToken, debug=debug, pkce=True
    )
    print(f"Token: {token!r}")


if __name__ == "__main__":
    asyncio.run(main())
