import logging
from typing import Optional
from urllib.parse import quote

from infrastructure.api_client import SESSION_COOKIE_NAME

log = logging.getLogger(__name__)

HANDSHAKE_MARKER = "session_id="
SESSION_TTL_DAYS = 7
SESSION_MAX_AGE = SESSION_TTL_DAYS * 24 * 60 * 60

__all__ = [
    "HANDSHAKE_MARKER",
    "SESSION_COOKIE_NAME",
    "SESSION_MAX_AGE",
    "SESSION_TTL_DAYS",
    "build_login_url",
    "extract_handshake_token",
    "session_cookie_attributes",
]


def extract_handshake_token(fragment: Optional[str]) -> Optional[str]:
    """
    Pull the one-time login token out of a URL fragment like
    ``#session_id=abc123&foo=bar``. Returns None when no usable marker is present.
    """
    if not fragment or HANDSHAKE_MARKER not in fragment:
        return None
    token = fragment.split(HANDSHAKE_MARKER, 1)[1].split("&", 1)[0]
    return token or None


def session_cookie_attributes(max_age: int = SESSION_MAX_AGE) -> str:
    # SameSite=None is required: the cookie must survive the cross-site login redirect.
    if max_age <= 0:
        return "path=/; max-age=0"
    return f"path=/; max-age={max_age}; secure; samesite=none"


def build_login_url(auth_url: str, app_url: str, landing_path: str = "/dashboard") -> str:
    redirect_url = f"{app_url}/?page={landing_path}"
    return f"{auth_url}/?redirect={quote(redirect_url, safe='')}"
