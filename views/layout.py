import streamlit as st

import ui
from use_cases.route_guard import Route
from use_cases.session_models import is_consumer
from utils import session_manager

CONSUMER_LINKS = [
    ("🏠 Dashboard", Route.DASHBOARD),
    ("🔎 Find Technicians", Route.TECHNICIANS),
    ("🛒 Marketplace", Route.MARKETPLACE),
]


def sidebar_links(user):
    # Technicians and admins have a single page each.
    return CONSUMER_LINKS if is_consumer(user) else []


def render_sidebar(user):
    """Brand, navigation, user info and logout shared by authenticated pages."""
    with st.sidebar:
        st.markdown(f"## 🔧 {ui.BRAND}")
        for label, route in sidebar_links(user):
            if st.button(label, key=f"nav_{route.value}", use_container_width=True):
                session_manager.navigate(route.value)

        st.divider()
        if user.picture_url:
            st.image(user.picture_url, width=48)
        st.markdown(f"**{user.name or 'Account'}**")
        st.caption(user.role)

        if st.button("Logout", key="logout_btn", type="secondary", use_container_width=True):
            session_manager.logout()
