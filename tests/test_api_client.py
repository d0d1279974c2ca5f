from unittest.mock import MagicMock, patch

import pytest
import requests

from infrastructure.api_client import (
    SESSION_COOKIE_NAME,
    SESSION_HEADER,
    ApiError,
    AuthenticationError,
    MarketplaceApiClient,
)

API_BASE = "http://backend.test/api"


def _response(status_code=200, body=None, content=b"x"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content if body is not None or content else b""
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def client():
    return MarketplaceApiClient(API_BASE, timeout=3)


@patch.object(requests.Session, "request")
def test_exchange_session_sends_header(mock_request, client):
    mock_request.return_value = _response(body={"session_token": "tok1"})

    assert client.exchange_session("abc123") == "tok1"

    args, kwargs = mock_request.call_args
    assert args == ("GET", f"{API_BASE}/auth/session")
    assert kwargs["headers"] == {SESSION_HEADER: "abc123"}
    assert kwargs["timeout"] == 3


@patch.object(requests.Session, "request")
def test_exchange_session_without_token_is_auth_error(mock_request, client):
    mock_request.return_value = _response(body={"user": {}})

    with pytest.raises(AuthenticationError):
        client.exchange_session("abc123")


@patch.object(requests.Session, "request")
def test_unauthorized_maps_to_authentication_error(mock_request, client):
    mock_request.return_value = _response(401, body={"detail": "Not authenticated"})

    with pytest.raises(AuthenticationError) as exc_info:
        client.get_current_user()

    assert str(exc_info.value) == "Not authenticated"
    assert exc_info.value.status_code == 401


@patch.object(requests.Session, "request")
def test_server_error_uses_status_when_no_detail(mock_request, client):
    mock_request.return_value = _response(500, body=ValueError("not json"))

    with pytest.raises(ApiError) as exc_info:
        client.list_bookings()

    assert str(exc_info.value) == "HTTP 500"
    assert not isinstance(exc_info.value, AuthenticationError)


@patch.object(requests.Session, "request", side_effect=requests.ConnectionError("refused"))
def test_network_failure_is_api_error(mock_request, client):
    with pytest.raises(ApiError, match="Network error: ConnectionError"):
        client.get_payment_status("cs_1")


@patch.object(requests.Session, "request")
def test_malformed_body_is_api_error(mock_request, client):
    mock_request.return_value = _response(200, body=ValueError("bad json"))

    with pytest.raises(ApiError, match="Malformed"):
        client.get_current_user()


@patch.object(requests.Session, "request")
def test_empty_list_responses_default(mock_request, client):
    mock_request.return_value = _response(200, body=None, content=b"")

    assert client.list_bookings() == []
    assert client.list_parts() == []
    assert client.get_payment_status("cs_1") == {}


@patch.object(requests.Session, "request")
def test_list_technicians_sends_location_only_when_set(mock_request, client):
    mock_request.return_value = _response(body=[{"id": "t1"}])

    client.list_technicians()
    assert mock_request.call_args.kwargs["params"] is None

    client.list_technicians("Austin")
    assert mock_request.call_args.kwargs["params"] == {"location": "Austin"}


@patch.object(requests.Session, "request")
def test_start_checkout_returns_redirect_url(mock_request, client):
    mock_request.return_value = _response(body={"url": "https://pay.example.com/cs_1", "session_id": "cs_1"})

    assert client.start_checkout({"part_ids": ["p1"]}) == "https://pay.example.com/cs_1"

    mock_request.return_value = _response(body={"session_id": "cs_1"})
    with pytest.raises(ApiError):
        client.start_checkout({"part_ids": ["p1"]})


@patch.object(requests.Session, "request")
def test_admin_delete_paths(mock_request, client):
    mock_request.return_value = _response(body=None, content=b"")

    client.admin_delete_user("u1")
    assert mock_request.call_args.args == ("DELETE", f"{API_BASE}/admin/users/u1")

    client.admin_delete_review("r1")
    assert mock_request.call_args.args == ("DELETE", f"{API_BASE}/admin/reviews/r1")


def test_credential_attach_and_drop(client):
    client.attach_credential(None)
    assert client._http.cookies.get(SESSION_COOKIE_NAME) is None

    client.attach_credential("tok1")
    assert client._http.cookies.get(SESSION_COOKIE_NAME) == "tok1"

    client.drop_credential()
    assert client._http.cookies.get(SESSION_COOKIE_NAME) is None
    client.drop_credential()


@patch.object(requests.Session, "request")
def test_ai_endpoints_default_empty_body_to_dict(mock_request, client):
    mock_request.return_value = _response(200, body=None, content=b"")

    assert client.match_technician("repair", "Treadmill", "Austin") == {}
    assert client.predictive_maintenance({"name": "Treadmill"}) == {}
    assert client.recommend_parts({"name": "Treadmill"}) == {}
    assert client.recommend_parts({}).get("recommendations", "") == ""
