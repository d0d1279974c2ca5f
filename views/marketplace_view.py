import streamlit as st

import config
import ui
from infrastructure import browser_bridge
from infrastructure.api_client import ApiError
from use_cases import booking_flow, rbac_policy
from utils import session_manager
from views import layout


def _load_parts(api, search=""):
    try:
        return api.list_parts(search)
    except ApiError as e:
        ui.notify_error("Failed to load parts", e)
        return []


def _render_part_finder(api, cache):
    with st.expander("⚡ AI Part Finder", expanded=False):
        with st.form("ai_part_finder"):
            name = st.text_input("Equipment Name *", placeholder="e.g., Treadmill")
            brand = st.text_input("Brand *", placeholder="e.g., NordicTrack")
            model = st.text_input("Model *", placeholder="e.g., Commercial 1750")
            issue = st.text_area("Issue/Need *", placeholder="Describe what's broken or what you need...")
            if st.form_submit_button("Get Recommendations"):
                if not all([name.strip(), brand.strip(), model.strip(), issue.strip()]):
                    st.error("Fill in all required fields.")
                    return
                try:
                    result = api.recommend_parts({
                        "name": name.strip(),
                        "brand": brand.strip(),
                        "model": model.strip(),
                        "issue": issue.strip(),
                    })
                except ApiError as e:
                    ui.notify_error("Failed to get AI recommendations", e)
                    return
                cache["part_recommendations"] = result.get("recommendations", "")
                ui.ToastNotifier().success("AI recommendations generated")


def _buy_part(user, api, part):
    if not rbac_policy.enforce(user, "START_CHECKOUT"):
        st.error("Only consumers can purchase parts.")
        return
    settings = config.load_settings()
    try:
        checkout_url = api.start_checkout(booking_flow.build_checkout_request(part, settings.app_url))
    except (ApiError, ValueError) as e:
        ui.notify_error("Failed to initiate payment", e)
        return
    browser_bridge.redirect_top_level(checkout_url)
    st.link_button("Continue to payment", checkout_url, type="primary")


def _render_part_card(user, api, part):
    with st.container(border=True):
        if part.get("image_url"):
            st.image(part["image_url"], use_container_width=True)
        st.markdown(f"**{part.get('name', 'Part')}**")
        if part.get("description"):
            st.caption(part["description"])
        models = part.get("compatible_models") or []
        if models:
            st.caption("Fits: " + ", ".join(models[:2]))
        c1, c2 = st.columns([1, 1])
        c1.markdown(f"### ${float(part.get('price') or 0):.2f}")
        if c2.button("🛒 Buy Now", key=f"buy_part_{part['id']}"):
            _buy_part(user, api, part)


def render_marketplace(user):
    api = session_manager.get_api()
    cache = st.session_state.view_cache
    layout.render_sidebar(user)

    st.title("Parts Marketplace")

    c1, c2 = st.columns([4, 1])
    query = c1.text_input("Search parts...", value=cache.get("parts_search", ""), label_visibility="collapsed",
                          placeholder="Search parts...")
    if c2.button("Search", use_container_width=True):
        cache["parts_search"] = query.strip()

    _render_part_finder(api, cache)

    recommendations = cache.get("part_recommendations")
    if recommendations:
        with st.container(border=True):
            st.markdown("#### ⚡ AI Part Recommendations")
            st.write(recommendations)
            if st.button("Close", key="close_part_recommendations"):
                cache.pop("part_recommendations", None)
                st.rerun()

    parts = [p for p in _load_parts(api, cache.get("parts_search", "")) if p.get("id")]
    if not parts:
        st.info("No parts found")
        return

    cols = st.columns(3)
    for index, part in enumerate(parts):
        with cols[index % 3]:
            _render_part_card(user, api, part)
