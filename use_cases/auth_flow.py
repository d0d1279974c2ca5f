"""Authentication flow orchestration (application layer)."""

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from infrastructure.api_client import ApiError, MarketplaceApiClient
from use_cases.bootstrap import Notifier
from use_cases.session_models import Identity
from use_cases.session_store import SessionStore

log = logging.getLogger(__name__)

AuthFlowStatus = Literal["CONTINUE", "STOP"]


class CredentialExpirer(Protocol):
    def expire(self) -> None: ...


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for auth flow orchestration."""

    status: AuthFlowStatus
    reason: str
    user_id: Optional[str] = None


def logout(
    store: SessionStore,
    api: MarketplaceApiClient,
    credentials: CredentialExpirer,
    notifier: Notifier,
) -> AuthFlowResult:
    """End the session. Local state is cleared even when the backend call fails."""
    user = store.get()
    server_ok = True
    try:
        api.logout()
    except ApiError as e:
        server_ok = False
        log.warning(f"Backend logout failed for user {user.id if user else None}: {e}")
    finally:
        credentials.expire()
        api.drop_credential()
        store.clear()

    if server_ok:
        notifier.success("Logged out successfully")
    return AuthFlowResult(status="STOP", reason="logged_out" if server_ok else "logged_out_locally")


def refresh_identity(store: SessionStore, api: MarketplaceApiClient) -> AuthFlowResult:
    """Re-validate the session after a profile change; a failed fetch destroys the identity."""
    try:
        identity = Identity.from_payload(api.get_current_user())
    except (ApiError, ValueError) as e:
        log.info(f"Session re-validation failed: {e}")
        store.clear()
        return AuthFlowResult(status="STOP", reason="revalidation_failed")

    store.set(identity)
    return AuthFlowResult(status="CONTINUE", reason="refreshed", user_id=identity.id)
