"""Route authorization: decide what a navigation renders for the current identity."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Literal, Optional

from use_cases.session_models import Identity

RouteAction = Literal["RENDER", "REDIRECT"]


class Route(str, Enum):
    LANDING = "/"
    DASHBOARD = "/dashboard"
    TECHNICIANS = "/technicians"
    MARKETPLACE = "/marketplace"
    TECHNICIAN_DASHBOARD = "/technician/dashboard"
    ADMIN_DASHBOARD = "/admin/dashboard"
    PAYMENT_SUCCESS = "/payment/success"
    PAYMENT_CANCEL = "/payment/cancel"


# Role required to render a route; "*" means any authenticated role.
ROUTE_ACCESS: Dict[Route, str] = {
    Route.DASHBOARD: "consumer",
    Route.TECHNICIANS: "consumer",
    Route.MARKETPLACE: "consumer",
    Route.TECHNICIAN_DASHBOARD: "technician",
    Route.ADMIN_DASHBOARD: "admin",
    Route.PAYMENT_SUCCESS: "*",
    Route.PAYMENT_CANCEL: "*",
}

ROLE_HOMES: Dict[str, Route] = {
    "admin": Route.ADMIN_DASHBOARD,
    "technician": Route.TECHNICIAN_DASHBOARD,
    "consumer": Route.DASHBOARD,
}


@dataclass(frozen=True)
class RouteDecision:
    action: RouteAction
    target: str


def normalize_path(path: Optional[str]) -> str:
    if not path:
        return Route.LANDING.value
    path = path.split("?", 1)[0].split("#", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def match_route(path: Optional[str]) -> Optional[Route]:
    try:
        return Route(normalize_path(path))
    except ValueError:
        return None


def effective_role(identity: Identity) -> str:
    """Roles outside the known set are routed as consumers."""
    return identity.role if identity.role in ROLE_HOMES else "consumer"


def role_home(identity: Optional[Identity]) -> str:
    if identity is None:
        return Route.LANDING.value
    return ROLE_HOMES[effective_role(identity)].value


def authorize(identity: Optional[Identity], path: Optional[str]) -> RouteDecision:
    route = match_route(path)
    if route is None:
        return RouteDecision("REDIRECT", Route.LANDING.value)

    if route is Route.LANDING:
        if identity is None:
            return RouteDecision("RENDER", Route.LANDING.value)
        return RouteDecision("REDIRECT", role_home(identity))

    if identity is None:
        return RouteDecision("REDIRECT", Route.LANDING.value)

    required = ROUTE_ACCESS[route]
    if required == "*" or effective_role(identity) == required:
        return RouteDecision("RENDER", route.value)
    return RouteDecision("REDIRECT", Route.LANDING.value)


def settle(identity: Optional[Identity], path: Optional[str], max_hops: int = 4) -> str:
    """Follow redirects until a path renders. Returns the rendered path."""
    current = normalize_path(path)
    for _ in range(max_hops):
        decision = authorize(identity, current)
        if decision.action == "RENDER":
            return decision.target
        current = decision.target
    # Every chain ends on a role home or the landing page within two hops.
    raise RuntimeError(f"Routing did not settle for {path!r}")
