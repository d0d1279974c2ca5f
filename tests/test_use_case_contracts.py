import logging
from unittest.mock import MagicMock

from use_cases import auth_flow, bootstrap, rbac_policy
from use_cases.confirmation import ConfirmationGate
from use_cases.session_models import Identity
from use_cases.session_store import SessionStore

CONSUMER = Identity(id="c1", role="consumer")
TECHNICIAN = Identity(id="t1", role="technician")
ADMIN = Identity(id="a1", role="admin")


def test_bootstrap_contract() -> None:
    assert hasattr(bootstrap, "run_bootstrap")
    api = MagicMock()
    api.get_current_user.return_value = None
    result = bootstrap.run_bootstrap(
        None,
        store=SessionStore({}),
        api=api,
        credentials=MagicMock(),
        notifier=MagicMock(),
        on_complete=MagicMock(),
        strip_fragment=MagicMock(),
    )
    assert isinstance(result, bootstrap.BootstrapResult)
    assert result.status in {"AUTHENTICATED", "ANONYMOUS"}
    assert result.branch in {"handshake", "existing_session"}


def test_auth_flow_contract() -> None:
    result = auth_flow.logout(SessionStore({}), MagicMock(), MagicMock(), MagicMock())
    assert isinstance(result, auth_flow.AuthFlowResult)
    assert result.status in {"CONTINUE", "STOP"}


def test_rbac_actions_by_role() -> None:
    assert rbac_policy.enforce(CONSUMER, "CREATE_BOOKING")
    assert rbac_policy.enforce(CONSUMER, "START_CHECKOUT")
    assert rbac_policy.enforce(TECHNICIAN, "UPDATE_BOOKING")
    assert rbac_policy.enforce(ADMIN, "DELETE_USER")
    assert not rbac_policy.enforce(TECHNICIAN, "CREATE_BOOKING")
    assert not rbac_policy.enforce(CONSUMER, "DELETE_REVIEW")
    assert not rbac_policy.enforce(None, "EDIT_PROFILE")


def test_rbac_deny_is_logged(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="use_cases.rbac_policy"):
        assert rbac_policy.enforce(CONSUMER, "VIEW_ADMIN") is False
    assert "RBAC denied" in caplog.text
    assert "VIEW_ADMIN" in caplog.text


def test_confirmation_gate_two_step() -> None:
    state = {}
    gate = ConfirmationGate(state)
    assert gate.pending() is None
    assert gate.confirm() is None

    gate.request("delete_user", 17)
    assert gate.is_pending("delete_user", "17")
    assert not gate.is_pending("delete_review", "17")

    assert gate.confirm() == ("delete_user", "17")
    assert gate.pending() is None


def test_confirmation_gate_cancel_and_replace() -> None:
    gate = ConfirmationGate({})
    gate.request("delete_user", "u1")
    gate.request("delete_review", "r9")
    assert gate.pending() == ("delete_review", "r9")
    gate.cancel()
    assert gate.pending() is None
