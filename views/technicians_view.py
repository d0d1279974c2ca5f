import streamlit as st

import ui
from infrastructure.api_client import ApiError
from use_cases import booking_flow, rbac_policy
from use_cases.route_guard import Route
from utils import session_manager
from views import layout


def _load_technicians(api, location=""):
    try:
        return api.list_technicians(location)
    except ApiError as e:
        ui.notify_error("Failed to load technicians", e)
        return []


def _render_ai_match(user, api, cache):
    with st.expander("⚡ AI Smart Match", expanded=False):
        with st.form("ai_match_form"):
            service_type = st.selectbox("Service Type", booking_flow.SERVICE_TYPES, format_func=str.capitalize)
            equipment = st.text_input("Equipment", placeholder="e.g., Treadmill")
            location = st.text_input("Location", value=user.location)
            if st.form_submit_button("Match"):
                try:
                    result = api.match_technician(service_type, equipment.strip(), location.strip())
                except ApiError as e:
                    ui.notify_error("AI matching failed", e)
                    return
                cache["matched_technicians"] = result.get("technicians") or []
                cache["match_recommendation"] = result.get("ai_recommendation", "")
                ui.ToastNotifier().success("AI matching completed")


def _render_booking_form(user, api, tech):
    with st.form(f"book_form_{tech['id']}"):
        st.markdown(f"#### Book {tech.get('name', 'technician')}")
        service_type = st.selectbox("Service Type", booking_flow.SERVICE_TYPES, format_func=str.capitalize)
        equipment_name = st.text_input("Equipment Name *", placeholder="e.g., Treadmill")
        issue = st.text_area("Issue Description *", placeholder="Describe the issue...")
        location = st.text_input("Service Location *", value=user.location)
        preferred_date = st.date_input("Preferred Date", value=None)
        c1, c2 = st.columns(2)
        submitted = c1.form_submit_button("Submit Booking Request", type="primary")
        cancelled = c2.form_submit_button("Cancel")

    if cancelled:
        st.session_state.view_cache.pop("booking_tech", None)
        st.rerun()
    if not submitted:
        return
    if not all([equipment_name.strip(), issue.strip(), location.strip()]):
        st.error("Fill in all required fields.")
        return
    if not rbac_policy.enforce(user, "CREATE_BOOKING"):
        st.error("Only consumers can book technicians.")
        return
    payload = booking_flow.build_booking_request(
        service_type,
        equipment_name,
        issue,
        location,
        preferred_date.isoformat() if preferred_date else None,
        technician_id=tech["id"],
    )
    try:
        api.create_booking(payload)
    except ApiError as e:
        ui.notify_error("Failed to create booking", e)
        return
    st.session_state.view_cache.pop("booking_tech", None)
    ui.ToastNotifier().success("Booking request sent successfully")
    session_manager.navigate(Route.DASHBOARD.value)


def _render_technician_card(tech):
    with st.container(border=True):
        st.markdown(f"**{tech.get('name', 'Technician')}**")
        meta = []
        if tech.get("location"):
            meta.append(f"📍 {tech['location']}")
        if tech.get("rating") is not None:
            meta.append(f"⭐ {tech['rating']}")
        if tech.get("hourly_rate") is not None:
            meta.append(f"${tech['hourly_rate']}/hr")
        if meta:
            st.caption("  ".join(str(m) for m in meta))
        services = tech.get("services_offered") or []
        if services:
            st.markdown(" ".join(ui.badge(s) for s in services[:3]), unsafe_allow_html=True)
        if tech.get("qualifications"):
            st.caption(tech["qualifications"])
        if st.button("Book Service", key=f"book_tech_{tech['id']}"):
            st.session_state.view_cache["booking_tech"] = tech
            st.rerun()


def render_technicians(user):
    api = session_manager.get_api()
    cache = st.session_state.view_cache
    layout.render_sidebar(user)

    st.title("Find Technicians")

    c1, c2 = st.columns([4, 1])
    search = c1.text_input("Search by location...", value=cache.get("tech_location", ""), label_visibility="collapsed",
                           placeholder="Search by location...")
    if c2.button("Search", use_container_width=True):
        cache["tech_location"] = search.strip()
        cache.pop("matched_technicians", None)
        cache.pop("match_recommendation", None)

    _render_ai_match(user, api, cache)

    if cache.get("match_recommendation"):
        st.info(cache["match_recommendation"])

    booking_tech = cache.get("booking_tech")
    if booking_tech:
        _render_booking_form(user, api, booking_tech)
        st.divider()

    technicians = cache.get("matched_technicians")
    if technicians is None:
        technicians = _load_technicians(api, cache.get("tech_location", ""))

    if not technicians:
        st.info("No technicians found")
        return

    cols = st.columns(2)
    for index, tech in enumerate(t for t in technicians if t.get("id")):
        with cols[index % 2]:
            _render_technician_card(tech)
