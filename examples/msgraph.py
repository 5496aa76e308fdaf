"""Client credentials grant against Microsoft Graph.

Microsoft needs the tenant domain in both endpoint URLs.
"""

from __future__ import annotations

import argparse
import asyncio

from async_oauth2 import Client, StandardToken, build_http_client
from async_oauth2.env import http_timeout_from_env, setup_logging
from examples.helpers import config_from_args


async def main() -> None:
    parser = argparse.ArgumentParser(prog="msgraph Example", description="Testing out OAuth 2.0 flows")
    parser.add_argument("--tenant-domain", required=True, help="Tenant domain to use.")
    config, args = config_from_args("msgraph Example", parser=parser)
    debug = setup_logging()

    client = Client(
        config.client_id,
        f"https://login.microsoftonline.com/{args.tenant_domain}/oauth2/authorize",
        f"https://login.microsoftonline.com/{args.tenant_domain}/oauth2/token",
    )
    client.set_client_secret(config.client_secret)
    client.set_redirect_url("https://login.microsoftonline.com/common/oauth2/nativeclient")
    client.add_scope("User.ReadAll")

    async with build_http_client(timeout=http_timeout_from_env(), debug=debug) as http_client:
        token = await client.exchange_client_credentials().with_client(http_client).execute(
            StandardToken
        )
    print(f"Token: {token!r}")


if __name__ == "__main__":
    asyncio.run(main())
