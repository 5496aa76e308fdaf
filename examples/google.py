from __future__ import annotations

import asyncio

from async_oauth2 import Client, StandardToken
from async_oauth2.env import setup_logging
from examples.helpers import REDIRECT_URL, authorization_code_flow, config_from_args


async def main() -> None:
    config, _ = config_from_args("Google Example")
    debug = setup_logging()

    client = Client(
        config.client_id,
        "https://accounts.google.com/o/oauth2/v2/auth",
        "https://www.googleapis.com/oauth2/v4/token",
    )
    client.set_client_secret(config.client_secret)
    client.add_scope("https://www.googleapis.com/auth/youtube.readonly")
    client.set_redirect_url(REDIRECT_URL)

    token = await authorization_code_flow(client, token_cls=StandardToken, debug=debug)
    print(f"Token: {token!r}")


if __name__ == "__main__":
    asyncio.run(main())
