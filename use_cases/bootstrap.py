"""Startup orchestration: resolve the initial identity once per application load."""

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Protocol

import auth
from infrastructure.api_client import ApiError, MarketplaceApiClient
from use_cases.session_models import Identity
from use_cases.session_store import SessionStore

log = logging.getLogger(__name__)

BootstrapStatus = Literal["AUTHENTICATED", "ANONYMOUS"]
BootstrapBranch = Literal["handshake", "existing_session"]


class CredentialSink(Protocol):
    def persist(self, token: str) -> None: ...


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass(frozen=True)
class BootstrapResult:
    """Result contract for the auth bootstrap."""

    status: BootstrapStatus
    branch: BootstrapBranch
    reason: str
    user_id: Optional[str] = None


def load_identity(store: SessionStore, api: MarketplaceApiClient) -> Optional[Identity]:
    """Fetch "who am I" with the ambient credential. Failure is the normal anonymous state."""
    try:
        identity = Identity.from_payload(api.get_current_user())
    except (ApiError, ValueError) as e:
        log.info(f"Not authenticated: {e}")
        return None
    store.set(identity)
    return identity


def run_bootstrap(
    fragment: Optional[str],
    *,
    store: SessionStore,
    api: MarketplaceApiClient,
    credentials: CredentialSink,
    notifier: Notifier,
    on_complete: Callable[[], None],
    strip_fragment: Callable[[], None],
) -> BootstrapResult:
    """
    Run the login handshake (when the URL carries one) or restore the existing session.
    `on_complete` fires exactly once, whichever branch runs and however it ends.
    """
    try:
        token = auth.extract_handshake_token(fragment)
        if token is None:
            identity = load_identity(store, api)
            if identity is None:
                return BootstrapResult(status="ANONYMOUS", branch="existing_session", reason="no_valid_session")
            return BootstrapResult(
                status="AUTHENTICATED", branch="existing_session", reason="session_restored", user_id=identity.id
            )

        try:
            session_token = api.exchange_session(token)
        except ApiError as e:
            log.warning(f"Handshake exchange rejected: {e}")
            notifier.error("Authentication failed")
            strip_fragment()
            return BootstrapResult(status="ANONYMOUS", branch="handshake", reason="exchange_failed")

        credentials.persist(session_token)
        api.attach_credential(session_token)
        identity = load_identity(store, api)
        strip_fragment()
        notifier.success("Welcome back!")
        if identity is None:
            return BootstrapResult(status="ANONYMOUS", branch="handshake", reason="profile_unavailable")

        log.info(f"Handshake completed for user {identity.id} ({identity.role})")
        return BootstrapResult(status="AUTHENTICATED", branch="handshake", reason="handshake_ok", user_id=identity.id)
    finally:
        on_complete()
