"""Runtime configuration resolved from Streamlit secrets and environment."""

import os
from dataclasses import dataclass

import streamlit as st

DEFAULT_BACKEND_URL = "http://localhost:8000"
DEFAULT_AUTH_URL = "https://auth.emergentagent.com"
DEFAULT_APP_URL = "http://localhost:8501"
DEFAULT_REQUEST_TIMEOUT = 10.0


def get_secret(key):
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None


def get_setting(key, default=None):
    return get_secret(key) or os.getenv(key) or default


@dataclass(frozen=True)
class Settings:
    backend_url: str
    auth_url: str
    app_url: str
    request_timeout: float

    @property
    def api_base(self) -> str:
        return f"{self.backend_url}/api"


def load_settings() -> Settings:
    timeout_raw = get_setting("REQUEST_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
    except ValueError:
        timeout = DEFAULT_REQUEST_TIMEOUT

    return Settings(
        backend_url=str(get_setting("BACKEND_URL", DEFAULT_BACKEND_URL)).rstrip("/"),
        auth_url=str(get_setting("AUTH_URL", DEFAULT_AUTH_URL)).rstrip("/"),
        app_url=str(get_setting("APP_URL", DEFAULT_APP_URL)).rstrip("/"),
        request_timeout=timeout,
    )
