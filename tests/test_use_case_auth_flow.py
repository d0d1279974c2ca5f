from unittest.mock import MagicMock

from infrastructure.api_client import ApiError, AuthenticationError
from use_cases import auth_flow, route_guard
from use_cases.session_models import Identity
from use_cases.session_store import SessionStore

TECHNICIAN = Identity(id="t1", role="technician", name="Tina")


def _store_with(identity):
    store = SessionStore({})
    store.set(identity)
    return store


def test_logout_clears_credential_and_identity():
    store = _store_with(TECHNICIAN)
    api, credentials, notifier = MagicMock(), MagicMock(), MagicMock()

    result = auth_flow.logout(store, api, credentials, notifier)

    api.logout.assert_called_once()
    credentials.expire.assert_called_once()
    api.drop_credential.assert_called_once()
    notifier.success.assert_called_once_with("Logged out successfully")
    assert result.status == "STOP"
    assert result.reason == "logged_out"
    assert store.get() is None


def test_logout_clears_locally_when_backend_fails():
    store = _store_with(TECHNICIAN)
    api, credentials, notifier = MagicMock(), MagicMock(), MagicMock()
    api.logout.side_effect = ApiError("Network error: ConnectionError")

    result = auth_flow.logout(store, api, credentials, notifier)

    assert result.reason == "logged_out_locally"
    credentials.expire.assert_called_once()
    api.drop_credential.assert_called_once()
    notifier.success.assert_not_called()
    assert store.get() is None
    # The very next guard evaluation sees an anonymous visitor.
    assert route_guard.authorize(store.get(), "/technician/dashboard").target == "/"


def test_refresh_identity_replaces_snapshot():
    store = _store_with(Identity(id="c1", role="consumer", location="Old"))
    api = MagicMock()
    api.get_current_user.return_value = {"id": "c1", "role": "consumer", "location": "New"}

    result = auth_flow.refresh_identity(store, api)

    assert result.status == "CONTINUE"
    assert result.user_id == "c1"
    assert store.get().location == "New"


def test_refresh_identity_failure_destroys_identity():
    store = _store_with(Identity(id="c1", role="consumer"))
    api = MagicMock()
    api.get_current_user.side_effect = AuthenticationError("expired", status_code=401)

    result = auth_flow.refresh_identity(store, api)

    assert result.status == "STOP"
    assert result.reason == "revalidation_failed"
    assert store.get() is None
