import async_oauth2


EXPECTED_EXPORTS = (
    "Client",
    "State",
    "PkceCodeVerifierS256",
    "StandardToken",
    "build_http_client",
)


def test_import_package() -> None:
    for name in EXPECTED_EXPORTS:
        assert hasattr(async_oauth2, name)
    assert async_oauth2.__version__ == "0.5.0"
