from __future__ import annotations

import urllib.parse
from typing import Iterable, Sequence

import httpx


def split_space_delimited(value: str | None) -> list[str] | None:
    """Split ``"read write"`` into ``["read", "write"]``; ``None`` stays ``None``."""
    if value is None:
        return None
    return value.split(" ")


def join_space_delimited(items: Sequence[str] | None) -> str | None:
    if items is None:
        return None
    return " ".join(str(item) for item in items)


def parse_url(value: str | httpx.URL) -> httpx.URL:
    url = value if isinstance(value, httpx.URL) else httpx.URL(value)
    if not url.is_absolute_url:
        raise ValueError(f"Expected an absolute URL, got {str(url)!r}.")
    return url


def append_query_params(
    url: str | httpx.URL, params: Iterable[tuple[str, str]]
) -> httpx.URL:
    """Append ``params`` after any query the URL already carries, keeping order.

    The existing query is left byte for byte as it was.
    """
    url = parse_url(url)
    appended = urllib.parse.urlencode([(key, str(value)) for key, value in params])
    query = url.query
    if appended:
        query = query + b"&" + appended.encode("ascii") if query else appended.encode("ascii")
    return url.copy_with(query=query)


def form_urlencode(value: str) -> str:
    """Encode a single value with ``application/x-www-form-urlencoded`` rules."""
    return urllib.parse.quote_plus(value, safe="")
