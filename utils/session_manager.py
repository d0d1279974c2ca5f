import logging
from urllib.parse import unquote

import streamlit as st

import config
import ui
from infrastructure import browser_bridge
from infrastructure.api_client import SESSION_COOKIE_NAME, MarketplaceApiClient
from use_cases import auth_flow, bootstrap
from use_cases.confirmation import ConfirmationGate
from use_cases.route_guard import Route, normalize_path
from use_cases.session_store import SessionStore

log = logging.getLogger(__name__)

"""
SESSION STATE CONTRACT

Keys of st.session_state owned by this module:

auth_user: Identity | None
    current authenticated identity (written only through SessionStore)
    default: None
    owner: session_manager / use_cases.session_store

bootstrap_done: bool
    the auth bootstrap has signalled completion for this browser session
    default: False
    owner: session_manager

api_client: MarketplaceApiClient | None
    per-session HTTP client carrying the session cookie
    default: None
    owner: session_manager

pending_confirmation: tuple[str, str] | None
    destructive action awaiting confirmation
    default: None
    owner: use_cases.confirmation

view_cache: dict
    per-view scratch values (AI results, search terms)
    default: {}
    owner: views
"""


def init_session_state():
    if "auth_user" not in st.session_state:
        st.session_state.auth_user = None
    if "bootstrap_done" not in st.session_state:
        st.session_state.bootstrap_done = False
    if "api_client" not in st.session_state:
        st.session_state.api_client = None
    if "pending_confirmation" not in st.session_state:
        st.session_state.pending_confirmation = None
    if "view_cache" not in st.session_state:
        st.session_state.view_cache = {}


class BrowserCookieCredentials:
    """Session credential persisted as a browser cookie."""

    def persist(self, token: str) -> None:
        browser_bridge.write_session_cookie(token)

    def expire(self) -> None:
        browser_bridge.expire_session_cookie()

    def stored(self):
        try:
            raw = st.context.cookies.get(SESSION_COOKIE_NAME)
        except Exception:
            # Headless runs (tests, bare imports) have no request context.
            return None
        return unquote(raw) if raw else None


def get_store() -> SessionStore:
    return SessionStore(st.session_state)


def get_confirmation_gate() -> ConfirmationGate:
    return ConfirmationGate(st.session_state)


def get_api() -> MarketplaceApiClient:
    api = st.session_state.get("api_client")
    if api is None:
        settings = config.load_settings()
        api = MarketplaceApiClient(settings.api_base, timeout=settings.request_timeout)
        api.attach_credential(BrowserCookieCredentials().stored())
        st.session_state.api_client = api
    return api


def read_fragment():
    return st.query_params.get(browser_bridge.FRAGMENT_PARAM)


def strip_fragment():
    # Updating query params rewrites the URL without a reload.
    if browser_bridge.FRAGMENT_PARAM in st.query_params:
        del st.query_params[browser_bridge.FRAGMENT_PARAM]


def _mark_bootstrap_done():
    st.session_state.bootstrap_done = True


def ensure_bootstrapped():
    """Run the auth bootstrap once per browser session."""
    if st.session_state.bootstrap_done:
        return None
    with st.spinner("Loading..."):
        result = bootstrap.run_bootstrap(
            read_fragment(),
            store=get_store(),
            api=get_api(),
            credentials=BrowserCookieCredentials(),
            notifier=ui.ToastNotifier(),
            on_complete=_mark_bootstrap_done,
            strip_fragment=strip_fragment,
        )
    log.info(f"Bootstrap finished: {result.status} via {result.branch} ({result.reason})")
    return result


def current_path() -> str:
    return normalize_path(st.query_params.get(browser_bridge.PAGE_PARAM))


def sync_path(path: str) -> None:
    if st.query_params.get(browser_bridge.PAGE_PARAM) != path:
        st.query_params[browser_bridge.PAGE_PARAM] = path


def navigate(path: str) -> None:
    sync_path(normalize_path(path))
    st.rerun()


def refresh_user():
    return auth_flow.refresh_identity(get_store(), get_api())


def logout():
    auth_flow.logout(get_store(), get_api(), BrowserCookieCredentials(), ui.ToastNotifier())
    get_confirmation_gate().cancel()
    st.session_state.view_cache = {}
    navigate(Route.LANDING.value)
