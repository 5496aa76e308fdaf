from __future__ import annotations

import argparse
import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Sequence, TypeVar

import uvicorn
from pydantic import BaseModel, ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route

from async_oauth2 import (
    AuthorizationCode,
    Client,
    PkceCodeVerifierS256,
    StandardToken,
    State,
    append_query_params,
    build_http_client,
)
from async_oauth2.env import http_timeout_from_env, load_env

LOGGER = logging.getLogger("async_oauth2.examples")

REDIRECT_PATH = "/api/auth/redirect"
REDIRECT_PORT = 8080
REDIRECT_URL = f"http://localhost:{REDIRECT_PORT}{REDIRECT_PATH}"

T = TypeVar("T")


@dataclass
class Config:
    client_id: str
    client_secret: str


class ReceivedCode(BaseModel):
    code: AuthorizationCode
    state: State


def config_from_args(
    name: str,
    argv: Sequence[str] | None = None,
    parser: argparse.ArgumentParser | None = None,
) -> tuple[Config, argparse.Namespace]:
    """Read ``--client-id``/``--client-secret``, falling back to the environment."""
    load_env()
    parser = parser or argparse.ArgumentParser(prog=name, description="Testing out OAuth 2.0 flows")
    parser.add_argument(
        "--client-id",
        default=os.getenv("OAUTH2_CLIENT_ID"),
        help="Client ID to use.",
    )
    parser.add_argument(
        "--client-secret",
        default=os.getenv("OAUTH2_CLIENT_SECRET"),
        help="Client Secret to use.",
    )
    args = parser.parse_args(argv)

    if not args.client_id:
        parser.error("missing: --client-id <argument>")
    if not args.client_secret:
        parser.error("missing: --client-secret <argument>")

    return Config(client_id=args.client_id, client_secret=args.client_secret), args


def build_callback_app(received: asyncio.Future, path: str = REDIRECT_PATH) -> Starlette:
    """Starlette app resolving ``received`` with the first valid redirect."""

    async def redirect_route(request: Request) -> Response:
        if request.query_params.get("error"):
            description = request.query_params.get("error_description", "")
            LOGGER.warning(
                "Authorization failed error=%s description=%s",
                request.query_params["error"],
                description,
            )
            return PlainTextResponse("Authorization failed.", status_code=400)

        try:
            code = ReceivedCode.model_validate(dict(request.query_params))
        except ValidationError:
            return PlainTextResponse("Missing or invalid code or state.", status_code=400)

        if not received.done():
            received.set_result(code)
        return PlainTextResponse("Authorization received. You can close this window.")

    return Starlette(routes=[Route(path, redirect_route, methods=["GET"])])


async def listen_for_code(port: int = REDIRECT_PORT, host: str = "127.0.0.1") -> ReceivedCode:
    """Serve the redirect URL locally until the provider calls back."""
    received: asyncio.Future = asyncio.get_running_loop().create_future()
    app = build_callback_app(received)

    config = uvicorn.Config(app, host=host, port=port, log_level="warning")
    server = uvicorn.Server(config)
    LOGGER.info("Listening on: http://%s:%s", host, port)
    server_task = asyncio.create_task(server.serve())

    try:
        return await received
    finally:
        server.should_exit = True
        await server_task


def check_state(received: ReceivedCode, expected: State) -> None:
    if received.state != expected:
        raise RuntimeError("CSRF token mismatch :(")


async def authorization_code_flow(
    client: Client,
    *,
    token_cls: type[T] = StandardToken,
    debug: bool = False,
    pkce: bool = False,
    extra_params: Sequence[tuple[str, str]] = (),
) -> T:
    """Run the authorization code grant end to end against a real provider."""
    state = State.new_random()
    auth_url = client.authorize_url(state)

    verifier = None
    if pkce:
        verifier = PkceCodeVerifierS256.new_random()
        auth_url = append_query_params(auth_url, verifier.authorize_url_params())

    print(f"Browse to: {auth_url}")

    received = await listen_for_code()
    check_state(received, state)

    request = client.exchange_code(received.code)
    if verifier is not None:
        request = request.param("code_verifier", verifier)
    for key, value in extra_params:
        request = request.param(key, value)

    async with build_http_client(timeout=http_timeout_from_env(), debug=debug) as http_client:
        return await request.with_client(http_client).execute(token_cls)
