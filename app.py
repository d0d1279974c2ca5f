import logging

import streamlit as st

from infrastructure.observability import setup_observability
setup_observability()

import ui
from infrastructure import browser_bridge
from use_cases import route_guard
from use_cases.route_guard import Route
from utils import session_manager
from views import (
    admin_view, dashboard_view, landing_view, marketplace_view,
    payment_view, technician_view, technicians_view
)

log = logging.getLogger(__name__)

# --- PAGE SETUP ---
st.set_page_config(page_title=ui.BRAND, page_icon="🔧", layout="wide", initial_sidebar_state="expanded")

ui.setup_style()
browser_bridge.install_location_shim()

PAGES = {
    Route.DASHBOARD.value: dashboard_view.render_dashboard,
    Route.TECHNICIANS.value: technicians_view.render_technicians,
    Route.MARKETPLACE.value: marketplace_view.render_marketplace,
    Route.TECHNICIAN_DASHBOARD.value: technician_view.render_technician_dashboard,
    Route.ADMIN_DASHBOARD.value: admin_view.render_admin_panel,
    Route.PAYMENT_SUCCESS.value: payment_view.render_payment_success,
    Route.PAYMENT_CANCEL.value: payment_view.render_payment_cancel,
}

# --- SESSION BOOTSTRAP ---
session_manager.init_session_state()
session_manager.ensure_bootstrapped()

# --- ROUTING ---
user = session_manager.get_store().get()
requested = session_manager.current_path()
target = route_guard.settle(user, requested)
if target != requested:
    log.info(f"Route {requested} -> {target} (role={user.role if user else None})")
session_manager.sync_path(target)

if target == Route.LANDING.value:
    landing_view.render_landing()
else:
    PAGES[target](user)
