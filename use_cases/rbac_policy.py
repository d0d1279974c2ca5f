"""Centralized Role-Based Access Control logic."""

import logging
from typing import Dict, FrozenSet, Optional

from use_cases.session_models import Identity

log = logging.getLogger(__name__)

ROLE_ACTIONS: Dict[str, FrozenSet[str]] = {
    "consumer": frozenset({"EDIT_PROFILE", "CREATE_BOOKING", "START_CHECKOUT", "USE_AI_TOOLS"}),
    "technician": frozenset({"UPDATE_BOOKING"}),
    "admin": frozenset({"VIEW_ADMIN", "DELETE_USER", "DELETE_REVIEW"}),
}


def enforce(user: Optional[Identity], action: str) -> bool:
    """
    Evaluates if the user is authorized to perform the action.
    Returns True if authorized, False otherwise.
    """
    authorized = user is not None and action in ROLE_ACTIONS.get(user.role, frozenset())

    if not authorized:
        log.warning(
            "RBAC denied: action=%s actor_id=%s actor_role=%s",
            action,
            user.id if user else None,
            user.role if user else None,
        )

    return authorized
