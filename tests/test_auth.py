from urllib.parse import parse_qs, urlparse

import pytest

import auth


@pytest.mark.parametrize(
    "fragment, expected",
    [
        ("#session_id=abc123", "abc123"),
        ("session_id=abc123&state=xyz", "abc123"),
        ("#foo=1&session_id=tok", "tok"),
        ("#session_id=", None),
        ("#other=1", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_handshake_token(fragment, expected):
    assert auth.extract_handshake_token(fragment) == expected


def test_session_cookie_attributes():
    attrs = auth.session_cookie_attributes()
    assert f"max-age={7 * 24 * 60 * 60}" in attrs
    assert "path=/" in attrs
    assert "secure" in attrs
    assert "samesite=none" in attrs
    assert auth.session_cookie_attributes(0) == "path=/; max-age=0"


def test_build_login_url_encodes_return_address():
    url = auth.build_login_url("https://auth.example.com", "https://app.example.com")

    parsed = urlparse(url)
    assert parsed.netloc == "auth.example.com"
    redirect = parse_qs(parsed.query)["redirect"][0]
    assert redirect == "https://app.example.com/?page=/dashboard"


def test_cookie_name_matches_api_client():
    from infrastructure.api_client import SESSION_COOKIE_NAME

    assert auth.SESSION_COOKIE_NAME == SESSION_COOKIE_NAME == "session_token"
