"""Booking, equipment and checkout payload preparation for the views."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from use_cases.session_models import Equipment, Identity

SERVICE_TYPES = ("repair", "maintenance", "installation", "inspection")
ACTIVE_STATUSES = ("accepted", "in_progress")
STATUS_TRANSITIONS = {
    "pending": "accepted",
    "accepted": "completed",
    "in_progress": "completed",
}


class InvalidTransitionError(ValueError):
    pass


@dataclass(frozen=True)
class BookingBuckets:
    pending: List[Dict[str, Any]] = field(default_factory=list)
    active: List[Dict[str, Any]] = field(default_factory=list)
    completed: List[Dict[str, Any]] = field(default_factory=list)


def partition_bookings(bookings: Iterable[Dict[str, Any]]) -> BookingBuckets:
    buckets = BookingBuckets()
    for booking in bookings:
        status = booking.get("status")
        if status == "pending":
            buckets.pending.append(booking)
        elif status in ACTIVE_STATUSES:
            buckets.active.append(booking)
        elif status == "completed":
            buckets.completed.append(booking)
    return buckets


def count_completed(bookings: Iterable[Dict[str, Any]]) -> int:
    return sum(1 for b in bookings if b.get("status") == "completed")


def next_status(current: Optional[str]) -> str:
    try:
        return STATUS_TRANSITIONS[current]
    except KeyError:
        raise InvalidTransitionError(f"Booking in status {current!r} cannot advance") from None


def build_status_update(booking: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    """PUT /bookings/{id} payload moving the booking one step forward."""
    target = next_status(booking.get("status"))
    payload: Dict[str, Any] = {"status": target}
    if target == "completed":
        payload["completed_at"] = (now or datetime.now(timezone.utc)).isoformat()
    return payload


def build_booking_request(
    service_type: str,
    equipment_name: str,
    issue_description: str,
    location: str,
    preferred_date: Optional[str] = None,
    technician_id: Optional[str] = None,
) -> Dict[str, Any]:
    if service_type not in SERVICE_TYPES:
        raise ValueError(f"Unknown service type: {service_type!r}")
    payload: Dict[str, Any] = {
        "service_type": service_type,
        "equipment_details": {
            "name": equipment_name.strip(),
            "issue_description": issue_description.strip(),
        },
        "location": location.strip(),
        "preferred_date": preferred_date or "",
    }
    if technician_id:
        payload["technician_id"] = technician_id
    return payload


def append_equipment(identity: Identity, new_item: Equipment) -> List[Dict[str, Any]]:
    """Full equipment list for PUT /users/me; duplicates are allowed."""
    return [item.to_payload() for item in identity.equipment] + [new_item.to_payload()]


def build_maintenance_request(item: Equipment, usage_frequency: str = "regular") -> Dict[str, Any]:
    return {
        "name": item.name,
        "model": item.model,
        "brand": item.brand,
        "purchase_date": item.purchase_date or "",
        "usage_frequency": usage_frequency,
    }


def build_profile_update(location: str, phone: str) -> Dict[str, Any]:
    return {"location": location.strip(), "phone": phone.strip()}


def build_checkout_request(part: Dict[str, Any], origin_url: str, currency: str = "usd") -> Dict[str, Any]:
    if not part.get("id"):
        raise ValueError("Part has no id")
    return {
        "part_ids": [part["id"]],
        "amount": float(part.get("price") or 0.0),
        "currency": currency,
        "origin_url": origin_url,
    }
