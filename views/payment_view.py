import streamlit as st

import ui
from use_cases.payment_watch import POLL_INTERVAL_SECONDS, PaymentStatusWatcher
from use_cases.route_guard import Route, role_home
from use_cases.session_models import is_consumer
from utils import session_manager
from views import layout

CHECKOUT_SESSION_PARAM = "session_id"
PAYMENT_WATCH_KEY = "payment_watch"


def _watcher():
    return PaymentStatusWatcher(session_manager.get_api().get_payment_status)


def _watch_state(session_id):
    cache = st.session_state.view_cache
    result = cache.get(PAYMENT_WATCH_KEY)
    if result is None or result.session_id != session_id:
        result = _watcher().start(session_id)
        cache[PAYMENT_WATCH_KEY] = result
    return result


@st.fragment(run_every=POLL_INTERVAL_SECONDS)
def _poll_payment():
    # One status request per run. The timer only exists while this fragment is rendered.
    cache = st.session_state.view_cache
    result = _watcher().advance(cache[PAYMENT_WATCH_KEY])
    cache[PAYMENT_WATCH_KEY] = result
    if result.finished:
        st.rerun()
    ui.show_loading_overlay()


def _back_buttons(user, include_marketplace=False):
    include_marketplace = include_marketplace and is_consumer(user)
    cols = st.columns(2 if include_marketplace else 1)
    if include_marketplace and cols[0].button("Back to Marketplace"):
        session_manager.navigate(Route.MARKETPLACE.value)
    if cols[-1].button("Back to Dashboard ➜", type="primary"):
        session_manager.navigate(role_home(user))


def _render_outcome(result):
    if result is not None and result.outcome == "paid":
        st.success("✅ Payment Successful!")
        st.caption("Thank you for your purchase")
        c1, c2 = st.columns(2)
        c1.metric("Amount Paid", f"${result.amount or 0:.2f}")
        c2.metric("Status", result.last_status.get("payment_status", "paid"))
    elif result is not None and result.outcome == "expired":
        st.error("Payment Expired")
        st.write("This checkout session expired before payment was completed. No charges were made.")
    else:
        st.info("Payment Processing")
        st.write("Your payment is being processed. Please check back later.")


def render_payment_success(user):
    layout.render_sidebar(user)
    session_id = st.query_params.get(CHECKOUT_SESSION_PARAM)

    result = _watch_state(session_id) if session_id else None
    if result is not None and not result.finished:
        _poll_payment()
    else:
        _render_outcome(result)

    _back_buttons(user)


def render_payment_cancel(user):
    layout.render_sidebar(user)
    st.error("❌ Payment Cancelled")
    st.write("Your payment was cancelled. No charges were made.")
    _back_buttons(user, include_marketplace=True)
