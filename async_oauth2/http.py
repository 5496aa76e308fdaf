from __future__ import annotations

import logging

import httpx

from .constants import LOGGER

ERROR_BODY_LOG_LIMIT = 1000


def build_http_client(
    *,
    timeout: float = 30.0,
    debug: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
    logger: logging.Logger | None = None,
) -> httpx.AsyncClient:
    """Build the ``httpx.AsyncClient`` used to talk to token endpoints.

    The client never retries; callers own retry policy. With ``debug`` on,
    requests and responses are logged without headers, so Authorization
    credentials never reach the log.
    """
    log = logger or LOGGER

    async def log_request(request: httpx.Request) -> None:
        if not debug:
            return
        log.info("OAuth2 request %s %s", request.method, request.url)

    async def log_response(response: httpx.Response) -> None:
        if not debug:
            return
        log.info(
            "OAuth2 response %s %s -> %s",
            response.request.method,
            response.request.url,
            response.status_code,
        )
        if response.status_code >= 400:
            body = await response.aread()
            text = body.decode("utf-8", errors="replace")
            if len(text) > ERROR_BODY_LOG_LIMIT:
                text = text[:ERROR_BODY_LOG_LIMIT] + "...<truncated>"
            log.warning("OAuth2 error body: %s", text)

    return httpx.AsyncClient(
        timeout=timeout,
        transport=transport,
        event_hooks={"request": [log_request], "response": [log_response]},
    )
