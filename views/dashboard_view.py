import streamlit as st

import ui
from infrastructure.api_client import ApiError
from use_cases import booking_flow, rbac_policy
from use_cases.route_guard import Route
from use_cases.session_models import EQUIPMENT_CONDITIONS, Equipment
from utils import session_manager
from views import layout


def _load_bookings(api):
    try:
        return api.list_bookings()
    except ApiError as e:
        ui.notify_error("Failed to load bookings", e)
        return []


def _render_profile_form(user, api):
    with st.expander("👤 Edit Profile", expanded=False):
        with st.form("profile_form"):
            location = st.text_input("Location", value=user.location, placeholder="City, State")
            phone = st.text_input("Phone", value=user.phone, placeholder="Phone number")
            if st.form_submit_button("Save Profile"):
                if not rbac_policy.enforce(user, "EDIT_PROFILE"):
                    st.error("You are not allowed to edit this profile.")
                    return
                try:
                    api.update_current_user(booking_flow.build_profile_update(location, phone))
                except ApiError as e:
                    ui.notify_error("Failed to update profile", e)
                    return
                ui.ToastNotifier().success("Profile updated successfully")
                session_manager.refresh_user()
                st.rerun()


def _render_add_equipment(user, api):
    with st.expander("➕ Add Equipment", expanded=not user.equipment):
        with st.form("add_equipment_form", clear_on_submit=True):
            name = st.text_input("Equipment Name *", placeholder="e.g., Treadmill")
            brand = st.text_input("Brand *", placeholder="e.g., NordicTrack")
            model = st.text_input("Model *", placeholder="e.g., Commercial 1750")
            condition = st.selectbox(
                "Condition",
                EQUIPMENT_CONDITIONS,
                index=EQUIPMENT_CONDITIONS.index("good"),
                format_func=str.capitalize,
            )
            purchase_date = st.date_input("Purchase Date", value=None)
            if st.form_submit_button("Add Equipment"):
                if not all([name.strip(), brand.strip(), model.strip()]):
                    st.error("Fill in name, brand and model.")
                    return
                item = Equipment(
                    name=name.strip(),
                    brand=brand.strip(),
                    model=model.strip(),
                    condition=condition,
                    purchase_date=purchase_date.isoformat() if purchase_date else None,
                )
                try:
                    api.update_current_user({"equipment": booking_flow.append_equipment(user, item)})
                except ApiError as e:
                    ui.notify_error("Failed to add equipment", e)
                    return
                ui.ToastNotifier().success("Equipment added successfully")
                session_manager.refresh_user()
                st.rerun()


def _render_equipment(user, api):
    st.subheader("My Equipment")
    if not user.equipment:
        st.info("No equipment added yet")
        return

    cache = st.session_state.view_cache
    for index, item in enumerate(user.equipment):
        with st.container(border=True):
            c1, c2 = st.columns([4, 1])
            c1.markdown(f"**{item.name}** {ui.badge(item.condition)}", unsafe_allow_html=True)
            c1.caption(f"{item.brand} - {item.model}")
            if item.purchase_date:
                c1.caption(f"Purchased: {item.purchase_date}")
            if c2.button("⚡ AI Maintenance Check", key=f"ai_maint_{index}"):
                try:
                    result = api.predictive_maintenance(booking_flow.build_maintenance_request(item))
                except ApiError as e:
                    ui.notify_error("Failed to get AI recommendation", e)
                else:
                    cache["maintenance_plan"] = result.get("maintenance_plan", "")
                    ui.ToastNotifier().success("AI recommendation generated")

    plan = cache.get("maintenance_plan")
    if plan:
        with st.container(border=True):
            st.markdown("#### ⚡ AI Maintenance Recommendation")
            st.write(plan)
            if st.button("Close", key="close_maintenance_plan"):
                cache.pop("maintenance_plan", None)
                st.rerun()


def _render_bookings(bookings):
    c1, c2 = st.columns([4, 1])
    c1.subheader("Service Requests")
    if c2.button("➕ Book Service"):
        session_manager.navigate(Route.TECHNICIANS.value)

    if not bookings:
        st.info("No service requests yet")
        return

    for booking in bookings:
        details = booking.get("equipment_details") or {}
        with st.container(border=True):
            st.markdown(
                f"**{booking.get('service_type', '')}** {ui.badge(booking.get('status', ''))}",
                unsafe_allow_html=True,
            )
            st.write(f"{details.get('name', '')} - {details.get('issue_description', '')}")
            meta = [f"📍 {booking.get('location', '')}"]
            if booking.get("preferred_date"):
                meta.append(f"📅 {booking['preferred_date']}")
            st.caption("  ".join(meta))
            if booking.get("estimated_cost"):
                st.caption(f"Estimated: ${booking['estimated_cost']}")


def render_dashboard(user):
    api = session_manager.get_api()
    layout.render_sidebar(user)

    st.title(f"Welcome back, {user.first_name or 'there'}!")
    st.caption("Manage your equipment and service requests")

    bookings = _load_bookings(api)
    ui.render_stat_cards([
        ("Equipment", len(user.equipment)),
        ("Service Requests", len(bookings)),
        ("Completed", booking_flow.count_completed(bookings)),
    ])

    _render_profile_form(user, api)
    _render_add_equipment(user, api)
    st.divider()
    _render_equipment(user, api)
    st.divider()
    _render_bookings(bookings)
