import logging
from typing import Any, Dict, List, Optional

import requests

log = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session_token"
SESSION_HEADER = "X-Session-ID"


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ApiError):
    pass


class MarketplaceApiClient:
    """
    Thin HTTP client for the marketplace backend.
    The session credential travels as a cookie on the underlying requests.Session,
    so callers never handle it after `attach_credential`.
    """

    def __init__(self, api_base: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._http = session or requests.Session()

    # --- credential ---

    def attach_credential(self, token: Optional[str]) -> None:
        if token:
            self._http.cookies.set(SESSION_COOKIE_NAME, token, path="/")

    def drop_credential(self) -> None:
        self._http.cookies.pop(SESSION_COOKIE_NAME, None)

    # --- transport ---

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.api_base}{path}"
        try:
            resp = self._http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            log.warning(f"Network error on {method} {path}: {e.__class__.__name__}")
            raise ApiError(f"Network error: {e.__class__.__name__}") from e

        if resp.status_code in (401, 403):
            raise AuthenticationError(_error_detail(resp), status_code=resp.status_code)
        if resp.status_code >= 400:
            log.error(f"{method} {path} failed: HTTP {resp.status_code}")
            raise ApiError(_error_detail(resp), status_code=resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(f"Malformed response from {path}", status_code=resp.status_code) from e

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return self._request("GET", path, params=params, headers=headers)

    def _post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("POST", path, json=payload if payload is not None else {})

    def _put(self, path: str, payload: Dict[str, Any]) -> Any:
        return self._request("PUT", path, json=payload)

    def _delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    # --- auth ---

    def exchange_session(self, session_id: str) -> str:
        data = self._get("/auth/session", headers={SESSION_HEADER: session_id})
        token = (data or {}).get("session_token")
        if not token:
            raise AuthenticationError("Auth exchange returned no session token")
        return token

    def logout(self) -> None:
        self._post("/auth/logout")

    # --- users ---

    def get_current_user(self) -> Dict[str, Any]:
        return self._get("/users/me")

    def update_current_user(self, fields: Dict[str, Any]) -> Any:
        return self._put("/users/me", fields)

    # --- bookings ---

    def list_bookings(self) -> List[Dict[str, Any]]:
        return self._get("/bookings") or []

    def create_booking(self, booking: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/bookings", booking)

    def update_booking(self, booking_id: str, fields: Dict[str, Any]) -> Any:
        return self._put(f"/bookings/{booking_id}", fields)

    # --- technicians & AI ---

    def list_technicians(self, location: str = "") -> List[Dict[str, Any]]:
        params = {"location": location} if location else None
        return self._get("/technicians", params=params) or []

    def match_technician(self, service_type: str, equipment: str, location: str) -> Dict[str, Any]:
        return self._post("/ai/match-technician", {
            "service_type": service_type,
            "equipment": equipment,
            "location": location,
        }) or {}

    def predictive_maintenance(self, equipment: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/ai/predictive-maintenance", equipment) or {}

    # --- parts ---

    def list_parts(self, search: str = "") -> List[Dict[str, Any]]:
        params = {"search": search} if search else None
        return self._get("/parts", params=params) or []

    def recommend_parts(self, equipment_info: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/parts/ai-recommend", equipment_info) or {}

    # --- payments ---

    def start_checkout(self, checkout: Dict[str, Any]) -> str:
        data = self._post("/payments/checkout", checkout)
        url = (data or {}).get("url")
        if not url:
            raise ApiError("Checkout did not return a payment URL")
        return url

    def get_payment_status(self, session_id: str) -> Dict[str, Any]:
        return self._get(f"/payments/status/{session_id}") or {}

    # --- admin ---

    def admin_dashboard(self) -> Dict[str, Any]:
        return self._get("/admin/dashboard") or {}

    def admin_users(self) -> List[Dict[str, Any]]:
        return self._get("/admin/users") or []

    def admin_bookings(self) -> List[Dict[str, Any]]:
        return self._get("/admin/bookings") or []

    def admin_transactions(self) -> List[Dict[str, Any]]:
        return self._get("/admin/transactions") or []

    def admin_revenue_stats(self) -> Dict[str, Any]:
        return self._get("/admin/revenue-stats") or {}

    def admin_reviews(self) -> List[Dict[str, Any]]:
        return self._get("/admin/reviews") or []

    def admin_delete_user(self, user_id: str) -> None:
        self._delete(f"/admin/users/{user_id}")

    def admin_delete_review(self, review_id: str) -> None:
        self._delete(f"/admin/reviews/{review_id}")


def _error_detail(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return f"HTTP {resp.status_code}"
