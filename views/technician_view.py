import streamlit as st

import ui
from infrastructure.api_client import ApiError
from use_cases import booking_flow, rbac_policy
from utils import session_manager
from views import layout

COMPLETED_SHOWN = 5


def _advance(user, api, booking):
    if not rbac_policy.enforce(user, "UPDATE_BOOKING"):
        st.error("Only technicians can update bookings.")
        return
    try:
        payload = booking_flow.build_status_update(booking)
        api.update_booking(booking["id"], payload)
    except booking_flow.InvalidTransitionError as e:
        ui.notify_error(str(e))
        return
    except ApiError as e:
        verb = "accept" if booking.get("status") == "pending" else "complete"
        ui.notify_error(f"Failed to {verb} booking", e)
        return
    ui.ToastNotifier().success("Booking accepted" if payload["status"] == "accepted" else "Booking completed")
    st.rerun()


def _render_booking(booking, action_label=None, on_action=None):
    details = booking.get("equipment_details") or {}
    with st.container(border=True):
        st.markdown(
            f"**{booking.get('service_type', '')}** {ui.badge(booking.get('status', ''))}",
            unsafe_allow_html=True,
        )
        st.write(f"{details.get('name', '')} - {details.get('issue_description', '')}")
        st.caption(f"Location: {booking.get('location', '')}")
        if booking.get("preferred_date"):
            st.caption(f"Preferred Date: {booking['preferred_date']}")
        if action_label and st.button(action_label, key=f"{action_label}_{booking['id']}"):
            on_action(booking)


def render_technician_dashboard(user):
    api = session_manager.get_api()
    layout.render_sidebar(user)

    st.title("Technician Dashboard")
    st.caption("Manage your service requests and schedule")

    try:
        bookings = api.list_bookings()
    except ApiError as e:
        ui.notify_error("Failed to load bookings", e)
        bookings = []

    buckets = booking_flow.partition_bookings(b for b in bookings if b.get("id"))
    ui.render_stat_cards([
        ("Pending Requests", len(buckets.pending)),
        ("Active Jobs", len(buckets.active)),
        ("Completed", len(buckets.completed)),
    ])

    def advance(booking):
        _advance(user, api, booking)

    st.subheader("Pending Requests")
    if not buckets.pending:
        st.info("No pending requests")
    for booking in buckets.pending:
        _render_booking(booking, "✅ Accept", advance)

    st.subheader("Active Jobs")
    if not buckets.active:
        st.info("No active jobs")
    for booking in buckets.active:
        _render_booking(booking, "✅ Mark as Completed", advance)

    st.subheader("Completed Jobs")
    for booking in buckets.completed[:COMPLETED_SHOWN]:
        _render_booking(booking)
