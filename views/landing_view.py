import streamlit as st

import auth
import config
import ui

FEATURES = [
    ("🛡 Verified Technicians", "Background-checked professionals who know commercial and home gym equipment."),
    ("⚡ AI Smart Matching", "Describe the issue and get matched with the right technician near you."),
    ("📈 Predictive Maintenance", "AI maintenance plans that catch problems before your treadmill does."),
]


def render_landing():
    settings = config.load_settings()
    login_url = auth.build_login_url(settings.auth_url, settings.app_url)

    st.title(f"🔧 {ui.BRAND}")
    st.subheader("Connect with Expert Fitness Equipment Technicians")
    st.write(
        "Your all-in-one platform for maintenance, repairs, and parts. "
        "Smart matching, transparent pricing, verified professionals."
    )
    st.link_button("Get Started with Google", login_url, type="primary")

    st.divider()
    cols = st.columns(len(FEATURES))
    for col, (title, text) in zip(cols, FEATURES):
        with col:
            st.markdown(f"**{title}**")
            st.caption(text)

    st.divider()
    st.markdown("### Ready to keep your equipment running?")
    st.link_button("Sign In with Google", login_url)
