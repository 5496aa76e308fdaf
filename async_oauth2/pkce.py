from __future__ import annotations

import base64
import hashlib
import secrets

from .constants import (
    PKCE_MAX_LEN,
    PKCE_MAX_NUM_BYTES,
    PKCE_MIN_LEN,
    PKCE_MIN_NUM_BYTES,
)
from .state import Rng
from .types import PkceCodeChallengeMethod, PkceCodeChallengeS256, RedactedSecret


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


class PkceCodeVerifierS256(RedactedSecret):
    """Code verifier for PKCE (RFC 7636) sent as the ``code_verifier`` param.

    The value must be between 43 and 128 characters long. Keep the verifier
    until the code exchange; only its challenge goes into the authorization URL.
    """

    def __init__(self, secret_value: str) -> None:
        if not PKCE_MIN_LEN <= len(secret_value) <= PKCE_MAX_LEN:
            raise ValueError(
                f"PKCE code verifier must be {PKCE_MIN_LEN}-{PKCE_MAX_LEN} characters, "
                f"got {len(secret_value)}."
            )
        super().__init__(secret_value)

    @classmethod
    def new_random(cls, rng: Rng = secrets.token_bytes) -> "PkceCodeVerifierS256":
        return cls.new_random_len(PKCE_MIN_NUM_BYTES, rng=rng)

    @classmethod
    def new_random_len(
        cls, num_bytes: int, rng: Rng = secrets.token_bytes
    ) -> "PkceCodeVerifierS256":
        """Generate a verifier from ``num_bytes`` random bytes (32 to 96)."""
        # 43..128 characters of base64 means 32..96 bytes of entropy.
        if not PKCE_MIN_NUM_BYTES <= num_bytes <= PKCE_MAX_NUM_BYTES:
            raise ValueError(
                f"num_bytes must be between {PKCE_MIN_NUM_BYTES} and "
                f"{PKCE_MAX_NUM_BYTES}, got {num_bytes}."
            )
        code = _b64url(rng(num_bytes))
        assert PKCE_MIN_LEN <= len(code) <= PKCE_MAX_LEN
        return cls(code)

    def code_challenge(self) -> PkceCodeChallengeS256:
        digest = hashlib.sha256(self.get_secret_value().encode("utf-8")).digest()
        return PkceCodeChallengeS256(_b64url(digest))

    @staticmethod
    def code_challenge_method() -> PkceCodeChallengeMethod:
        return PkceCodeChallengeMethod("S256")

    def authorize_url_params(self) -> list[tuple[str, str]]:
        """Extension params to merge into the authorization URL."""
        return [
            ("code_challenge_method", str(self.code_challenge_method())),
            ("code_challenge", str(self.code_challenge())),
        ]
