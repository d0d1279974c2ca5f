import logging

import pandas as pd
import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder, GridUpdateMode

log = logging.getLogger(__name__)

BRAND = "GearUp Repairs"


def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&display=swap');

        :root {
            --card-bg: rgba(255, 255, 255, 0.04);
            --card-border: rgba(255, 255, 255, 0.14);
            --text-main: #f3f8ff;
            --text-soft: rgba(234, 244, 255, 0.72);
            --accent: #ff8a3d;
            --ease-fluid: cubic-bezier(0.22, 1, 0.36, 1);
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
            color: var(--text-main);
            background: linear-gradient(180deg, #0d1117 0%, #111826 60%, #0f1520 100%);
        }

        h1, h2, h3 {
            font-weight: 800;
            letter-spacing: -0.03em;
        }

        [data-testid="stMetric"] {
            background: var(--card-bg);
            border: 1px solid var(--card-border);
            border-radius: 16px;
            padding: 14px !important;
            transition: transform 0.3s var(--ease-fluid);
        }

        [data-testid="stMetric"]:hover {
            transform: translateY(-2px);
        }

        .gu-badge {
            display: inline-block;
            padding: 0.1rem 0.55rem;
            border-radius: 999px;
            font-size: 0.8rem;
            font-weight: 700;
            background: rgba(255, 138, 61, 0.18);
            color: var(--accent);
        }

        .gu-loading-card {
            margin: 4rem auto;
            max-width: 420px;
            text-align: center;
            padding: 2rem;
            border-radius: 20px;
            background: var(--card-bg);
            border: 1px solid var(--card-border);
        }

        .gu-loading-sub {
            color: var(--text-soft);
        }
    </style>
    """, unsafe_allow_html=True)


class ToastNotifier:
    """Transient user notifications."""

    def success(self, message: str) -> None:
        st.toast(message, icon="✅")

    def error(self, message: str) -> None:
        st.toast(message, icon="⚠️")

    def info(self, message: str) -> None:
        st.toast(message, icon="ℹ️")


def notify_error(message, exc=None):
    if exc is not None:
        log.warning(f"{message}: {exc}")
    ToastNotifier().error(message)


def show_loading_overlay(title="Verifying Payment...", message="Please wait while we confirm your payment"):
    st.markdown(
        f"""
        <div class="gu-loading-card">
          <h2>{title}</h2>
          <div class="gu-loading-sub">{message}</div>
        </div>
        """,
        unsafe_allow_html=True
    )


def badge(text):
    return f'<span class="gu-badge">{text}</span>'


def render_stat_cards(stats):
    """stats: list of (label, value) pairs rendered as metric cards in one row."""
    if not stats:
        return
    cols = st.columns(len(stats))
    for col, (label, value) in zip(cols, stats):
        col.metric(label, value)


def update_chart_layout(fig):
    fig.update_layout(
        template="plotly_dark",
        font=dict(family="Manrope, sans-serif", size=13, color="#EAF2FF"),
        margin=dict(l=20, r=20, t=50, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(185,220,255,0.06)",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    return fig


def render_aggrid(df, height=400, pagination=False, theme="balham"):
    if df.empty:
        st.info("No records to display")
        return

    gb = GridOptionsBuilder.from_dataframe(df)
    gb.configure_default_column(filterable=True, sortable=True, resizable=True, wrapText=True, autoHeight=True)

    for col in df.columns:
        is_num = pd.api.types.is_numeric_dtype(df[col])
        gb.configure_column(col, minWidth=80 if is_num else 150, flex=1 if is_num else 3)

    if pagination:
        gb.configure_pagination(paginationAutoPageSize=False, paginationPageSize=25)

    valid_themes = ["streamlit", "alpine", "balham", "material"]
    AgGrid(
        df,
        gridOptions=gb.build(),
        height=height,
        theme=theme if theme in valid_themes else "balham",
        update_mode=GridUpdateMode.NO_UPDATE,
    )
