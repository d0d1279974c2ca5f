import pandas as pd
import plotly.express as px
import streamlit as st

import ui
from infrastructure.api_client import ApiError
from use_cases import rbac_policy
from utils import session_manager
from views import layout

DELETE_ACTIONS = {
    "user": ("DELETE_USER", "Are you sure you want to delete this user?", "User deleted", "Failed to delete user"),
    "review": ("DELETE_REVIEW", "Are you sure you want to delete this review?", "Review deleted", "Failed to delete review"),
}


def _load_dashboard_data(api):
    try:
        return {
            "stats": (api.admin_dashboard() or {}).get("stats") or {},
            "users": api.admin_users(),
            "bookings": api.admin_bookings(),
            "transactions": api.admin_transactions(),
            "revenue": api.admin_revenue_stats(),
            "reviews": api.admin_reviews(),
        }
    except ApiError as e:
        ui.notify_error("Failed to load dashboard data", e)
        return None


def _label(key):
    return str(key).replace("_", " ").title()


def _render_stats(stats):
    numeric = [(k, v) for k, v in stats.items() if isinstance(v, (int, float))]
    for start in range(0, len(numeric), 4):
        ui.render_stat_cards([(_label(k), v) for k, v in numeric[start:start + 4]])


def _render_revenue(revenue):
    values = {k: v for k, v in revenue.items() if isinstance(v, (int, float))}
    if not values:
        return
    st.subheader("Revenue Breakdown")
    df = pd.DataFrame({"Metric": [_label(k) for k in values], "Amount": list(values.values())})
    fig = px.bar(df, x="Metric", y="Amount", text_auto=".2s")
    st.plotly_chart(ui.update_chart_layout(fig), use_container_width=True)


def _execute_delete(user, api, kind, target_id):
    action, _, ok_message, fail_message = DELETE_ACTIONS[kind]
    if not rbac_policy.enforce(user, action):
        st.error("Insufficient rights for this action.")
        return
    try:
        if kind == "user":
            api.admin_delete_user(target_id)
        else:
            api.admin_delete_review(target_id)
    except ApiError as e:
        ui.notify_error(fail_message, e)
        return
    ui.ToastNotifier().success(ok_message)
    st.rerun()


def _render_delete_control(user, api, kind, target_id):
    gate = session_manager.get_confirmation_gate()
    _, question, _, _ = DELETE_ACTIONS[kind]
    if not gate.is_pending(kind, target_id):
        if st.button("🗑 Delete", key=f"delete_{kind}_{target_id}"):
            gate.request(kind, target_id)
            st.rerun()
        return

    st.warning(question)
    c1, c2 = st.columns(2)
    if c1.button("Yes, delete", key=f"confirm_{kind}_{target_id}", type="primary"):
        confirmed = gate.confirm()
        if confirmed == (kind, str(target_id)):
            _execute_delete(user, api, kind, target_id)
    if c2.button("Cancel", key=f"cancel_{kind}_{target_id}"):
        gate.cancel()
        st.rerun()


def _render_users(user, api, users):
    if not users:
        st.info("No users.")
        return
    for u in users:
        c1, c2 = st.columns([4, 2])
        c1.markdown(f"**{u.get('name', '')}** · {u.get('email', '')} {ui.badge(u.get('role', ''))}",
                    unsafe_allow_html=True)
        if u.get("role") != "admin" and u.get("id"):
            with c2:
                _render_delete_control(user, api, "user", u["id"])


def _render_reviews(user, api, reviews):
    if not reviews:
        st.info("No reviews.")
        return
    for r in reviews:
        with st.container(border=True):
            st.markdown(f"**{'⭐' * int(r.get('rating') or 0)}** {r.get('comment', '')}")
            if r.get("id"):
                _render_delete_control(user, api, "review", r["id"])


def render_admin_panel(user):
    api = session_manager.get_api()
    layout.render_sidebar(user)

    st.title("⚙️ Admin Dashboard")
    if not rbac_policy.enforce(user, "VIEW_ADMIN"):
        st.error("Insufficient rights.")
        return

    data = _load_dashboard_data(api)
    if data is None:
        return

    _render_stats(data["stats"])
    _render_revenue(data["revenue"])

    tab_users, tab_bookings, tab_tx, tab_reviews = st.tabs(["👥 Users", "📅 Bookings", "💳 Transactions", "⭐ Reviews"])

    with tab_users:
        _render_users(user, api, data["users"])

    with tab_bookings:
        ui.render_aggrid(pd.json_normalize(data["bookings"]) if data["bookings"] else pd.DataFrame(), pagination=True)

    with tab_tx:
        ui.render_aggrid(pd.json_normalize(data["transactions"]) if data["transactions"] else pd.DataFrame(),
                         pagination=True)

    with tab_reviews:
        _render_reviews(user, api, data["reviews"])
