import string

import pytest

from async_oauth2 import PkceCodeChallengeS256, PkceCodeVerifierS256


def test_new_random_length() -> None:
    verifier = PkceCodeVerifierS256.new_random()

    assert len(verifier.get_secret_value()) == 43


@pytest.mark.parametrize("num_bytes", [32, 33, 47, 64, 95, 96])
def test_new_random_len_within_bounds(num_bytes: int) -> None:
    verifier = PkceCodeVerifierS256.new_random_len(num_bytes)

    assert 43 <= len(verifier.get_secret_value()) <= 128


def test_new_random_len_extremes() -> None:
    assert len(PkceCodeVerifierS256.new_random_len(32).get_secret_value()) == 43
    assert len(PkceCodeVerifierS256.new_random_len(96).get_secret_value()) == 128


@pytest.mark.parametrize("num_bytes", [0, 31, 97, 1024])
def test_new_random_len_out_of_range(num_bytes: int) -> None:
    with pytest.raises(ValueError, match="num_bytes"):
        PkceCodeVerifierS256.new_random_len(num_bytes)


def test_verifier_is_url_safe() -> None:
    verifier = PkceCodeVerifierS256.new_random_len(96).get_secret_value()
    allowed = set(string.ascii_letters + string.digits + "-_")

    assert all(char in allowed for char in verifier)


def test_verifier_uses_injected_rng() -> None:
    verifier = PkceCodeVerifierS256.new_random(rng=lambda num_bytes: bytes(num_bytes))

    assert verifier.get_secret_value() == "A" * 43


def test_code_challenge_is_s256() -> None:
    verifier = PkceCodeVerifierS256("dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk")

    challenge = verifier.code_challenge()

    assert isinstance(challenge, PkceCodeChallengeS256)
    assert challenge == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


def test_code_challenge_deterministic() -> None:
    verifier = PkceCodeVerifierS256.new_random()

    assert verifier.code_challenge() == verifier.code_challenge()


def test_independent_verifiers_differ() -> None:
    first = PkceCodeVerifierS256.new_random()
    second = PkceCodeVerifierS256.new_random()

    assert first != second
    assert first.code_challenge() != second.code_challenge()


def test_code_challenge_method() -> None:
    assert PkceCodeVerifierS256.code_challenge_method() == "S256"


def test_authorize_url_params_order() -> None:
    verifier = PkceCodeVerifierS256("dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk")

    assert verifier.authorize_url_params() == [
        ("code_challenge_method", "S256"),
        ("code_challenge", "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"),
    ]


def test_constructor_enforces_length() -> None:
    with pytest.raises(ValueError):
        PkceCodeVerifierS256("too-short")
    with pytest.raises(ValueError):
        PkceCodeVerifierS256("a" * 129)


def test_verifier_is_redacted() -> None:
    verifier = PkceCodeVerifierS256("dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk")

    assert "dBjf" not in repr(verifier)
    assert str(verifier) == "[redacted]"
