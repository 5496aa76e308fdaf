from __future__ import annotations

import base64
import hmac
import re
import secrets
from typing import Any, Callable

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .constants import REDACTED, STATE_NUM_BYTES

Rng = Callable[[int], bytes]

_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


class State:
    """Value used for CSRF protection via the ``state`` parameter.

    See https://tools.ietf.org/html/rfc6749#section-10.12. Compare the state
    handed back to the redirect URI against the one used to build the
    authorization URL; a mismatch means the callback was not initiated by this
    client and must be rejected.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes) -> None:
        raw = bytes(raw)
        if len(raw) != STATE_NUM_BYTES:
            raise ValueError(f"State must be {STATE_NUM_BYTES} bytes, got {len(raw)}.")
        self._raw = raw

    @classmethod
    def new_random(cls, rng: Rng = secrets.token_bytes) -> "State":
        """Generate a new random 128-bit CSRF token."""
        return cls(rng(STATE_NUM_BYTES))

    def to_base64(self) -> str:
        return base64.urlsafe_b64encode(self._raw).rstrip(b"=").decode("ascii")

    @classmethod
    def from_base64(cls, value: str) -> "State":
        if not _URLSAFE_ALPHABET.fullmatch(value):
            raise ValueError("State is not URL-safe base64.")
        try:
            raw = base64.urlsafe_b64decode(value + "==")
        except ValueError as error:
            raise ValueError(f"State is not valid base64: {error}") from error
        return cls(raw)

    def __bytes__(self) -> bytes:
        return self._raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return hmac.compare_digest(self._raw, other._raw)

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"State({REDACTED})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_str = core_schema.no_info_after_validator_function(
            cls.from_base64, core_schema.str_schema()
        )
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_str]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda state: state.to_base64()
            ),
        )
