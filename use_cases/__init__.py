"""Application layer contracts for orchestrating high-level flows."""

from .auth_flow import AuthFlowResult, AuthFlowStatus, logout, refresh_identity
from .bootstrap import BootstrapResult, BootstrapStatus, load_identity, run_bootstrap
from .booking_flow import InvalidTransitionError, partition_bookings
from .confirmation import ConfirmationGate
from .payment_watch import PaymentStatusWatcher, PaymentWatchResult
from .route_guard import Route, RouteDecision, authorize, role_home, settle
from .session_models import Equipment, Identity, Role, is_consumer
from .session_store import SessionStore

__all__ = [
    "AuthFlowResult",
    "AuthFlowStatus",
    "BootstrapResult",
    "BootstrapStatus",
    "ConfirmationGate",
    "Equipment",
    "Identity",
    "InvalidTransitionError",
    "PaymentStatusWatcher",
    "PaymentWatchResult",
    "Role",
    "Route",
    "RouteDecision",
    "SessionStore",
    "authorize",
    "is_consumer",
    "load_identity",
    "logout",
    "partition_bookings",
    "refresh_identity",
    "role_home",
    "run_bootstrap",
    "settle",
]
