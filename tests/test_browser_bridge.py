from unittest.mock import patch

from infrastructure import browser_bridge


@patch("infrastructure.browser_bridge.components.html")
def test_session_cookie_token_is_url_encoded(mock_html):
    browser_bridge.write_session_cookie("tok;1 =x", max_age=60)

    script = mock_html.call_args.args[0]
    assert 'encodeURIComponent("tok;1 =x")' in script
    assert '"session_token="' in script
    assert "max-age=60; secure; samesite=none" in script
    assert mock_html.call_args.kwargs["height"] == 0


@patch("infrastructure.browser_bridge.components.html")
def test_expire_session_cookie(mock_html):
    browser_bridge.expire_session_cookie()

    script = mock_html.call_args.args[0]
    assert "session_token=; path=/; max-age=0" in script


@patch("infrastructure.browser_bridge.components.html")
def test_redirect_escapes_url(mock_html):
    browser_bridge.redirect_top_level('https://pay.example.com/c?x="1"')

    script = mock_html.call_args.args[0]
    assert 'window.parent.location.href = "https://pay.example.com/c?x=\\"1\\"";' in script
