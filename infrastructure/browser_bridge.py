"""
Browser-side effects Streamlit cannot perform from Python:
cookie writes, location rewrites and top-level redirects, via injected JS.
"""

import json
import logging

import streamlit.components.v1 as components

import auth

log = logging.getLogger(__name__)

FRAGMENT_PARAM = "auth_fragment"
PAGE_PARAM = "page"


def _run_script(body: str) -> None:
    components.html(f"<script>\n{body}\n</script>", height=0)


def write_session_cookie(token: str, max_age: int = auth.SESSION_MAX_AGE) -> None:
    attrs = auth.session_cookie_attributes(max_age)
    # Set on parent as well: components render inside an iframe.
    _run_script(
        f"""
        var cookieStr = {json.dumps(auth.SESSION_COOKIE_NAME + "=")} + encodeURIComponent({json.dumps(token)}) + {json.dumps("; " + attrs)};
        document.cookie = cookieStr;
        try {{
            window.parent.document.cookie = cookieStr;
        }} catch (e) {{
            console.log("Cross-origin frame block, normal behavior if different origin");
        }}
        """
    )


def expire_session_cookie() -> None:
    cookie = f"{auth.SESSION_COOKIE_NAME}=; " + auth.session_cookie_attributes(0)
    _run_script(
        f"""
        var cookieStr = {json.dumps(cookie)};
        document.cookie = cookieStr;
        try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
        """
    )


def install_location_shim() -> None:
    """
    The login provider returns with ``#session_id=...`` and the checkout provider
    with a ``/payment/...`` path; neither reaches the Python side. Move both into
    query parameters and reload once.
    """
    _run_script(
        f"""
        (function () {{
          try {{
            var loc = window.parent.location;
            var params = new URLSearchParams(loc.search);
            var changed = false;
            if (loc.hash && loc.hash.indexOf({json.dumps(auth.HANDSHAKE_MARKER)}) !== -1) {{
              params.set({json.dumps(FRAGMENT_PARAM)}, loc.hash.substring(1));
              changed = true;
            }}
            if (loc.pathname && loc.pathname !== "/" && !params.has({json.dumps(PAGE_PARAM)})) {{
              params.set({json.dumps(PAGE_PARAM)}, loc.pathname);
              changed = true;
            }}
            if (changed) {{
              loc.replace("/?" + params.toString());
            }}
          }} catch (e) {{
            console.error("Location shim error", e);
          }}
        }})();
        """
    )


def redirect_top_level(url: str) -> None:
    log.info("Redirecting browser to hosted page")
    _run_script(f"window.parent.location.href = {json.dumps(url)};")
