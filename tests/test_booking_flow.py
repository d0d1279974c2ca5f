from datetime import datetime, timezone

import pytest

from use_cases import booking_flow
from use_cases.session_models import Equipment, Identity

BOOKINGS = [
    {"id": "b1", "status": "pending"},
    {"id": "b2", "status": "accepted"},
    {"id": "b3", "status": "in_progress"},
    {"id": "b4", "status": "completed"},
    {"id": "b5", "status": "cancelled"},
]


def test_partition_bookings():
    buckets = booking_flow.partition_bookings(BOOKINGS)
    assert [b["id"] for b in buckets.pending] == ["b1"]
    assert [b["id"] for b in buckets.active] == ["b2", "b3"]
    assert [b["id"] for b in buckets.completed] == ["b4"]
    assert booking_flow.count_completed(BOOKINGS) == 1


def test_status_transitions():
    assert booking_flow.build_status_update({"status": "pending"}) == {"status": "accepted"}

    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    payload = booking_flow.build_status_update({"status": "accepted"}, now=now)
    assert payload == {"status": "completed", "completed_at": now.isoformat()}

    with pytest.raises(booking_flow.InvalidTransitionError):
        booking_flow.next_status("completed")
    with pytest.raises(ValueError):
        booking_flow.next_status(None)


def test_build_booking_request():
    payload = booking_flow.build_booking_request(
        "repair", " Furnace ", "No heat ", "Austin", technician_id="t9"
    )
    assert payload["service_type"] == "repair"
    assert payload["equipment_details"] == {"name": "Furnace", "issue_description": "No heat"}
    assert payload["preferred_date"] == ""
    assert payload["technician_id"] == "t9"

    assert "technician_id" not in booking_flow.build_booking_request("inspection", "AC", "noise", "Austin")
    with pytest.raises(ValueError):
        booking_flow.build_booking_request("demolition", "AC", "noise", "Austin")


def test_append_equipment_keeps_existing_items():
    existing = Equipment(name="Furnace", brand="Acme", model="F1")
    identity = Identity(id="c1", role="consumer", equipment=(existing,))
    new_item = Equipment(name="Furnace", brand="Acme", model="F1", condition="poor", purchase_date="2020-01-01")

    payload = booking_flow.append_equipment(identity, new_item)

    assert len(payload) == 2
    assert payload[1]["condition"] == "poor"
    assert payload[1]["purchase_date"] == "2020-01-01"


def test_maintenance_and_profile_payloads():
    item = Equipment(name="Boiler", brand="B", model="M")
    assert booking_flow.build_maintenance_request(item) == {
        "name": "Boiler",
        "model": "M",
        "brand": "B",
        "purchase_date": "",
        "usage_frequency": "regular",
    }
    assert booking_flow.build_profile_update(" Austin ", "555 ") == {"location": "Austin", "phone": "555"}


def test_build_checkout_request():
    payload = booking_flow.build_checkout_request({"id": "p1", "price": "19.5"}, "https://app.example.com")
    assert payload == {
        "part_ids": ["p1"],
        "amount": 19.5,
        "currency": "usd",
        "origin_url": "https://app.example.com",
    }
    with pytest.raises(ValueError):
        booking_flow.build_checkout_request({"price": 3}, "https://app.example.com")
