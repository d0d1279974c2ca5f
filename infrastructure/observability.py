"""
Centralized Observability Infrastructure.
Provides structured logging setup and Sentry SDK initialization
governed entirely by environment variables.
"""

import logging
import os
import re
from typing import Any, Dict

import sentry_sdk

# Standard python logger initialization for the top-level app
log = logging.getLogger(__name__)

REDACTED = "[REDACTED]"

# Patterns to scrub in logs and Sentry events
KEYED_PATTERNS = [
    re.compile(r"(session_token=)[^;&\s]+", re.IGNORECASE),
    re.compile(r"(session_id=)[^;&\s]+", re.IGNORECASE),
]
SENSITIVE_PATTERNS = [
    re.compile(r"([a-zA-Z0-9_\-]{30,})"),  # Catch tokens/dsn looking strings
]
SENSITIVE_KEYS = {"session_token", "x-session-id", "cookie", "authorization"}


def mask_string(val: str) -> str:
    for pattern in KEYED_PATTERNS:
        val = pattern.sub(lambda m: m.group(1) + REDACTED, val)
    for pattern in SENSITIVE_PATTERNS:
        val = pattern.sub(REDACTED, val)
    return val


def scrub(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: (REDACTED if str(k).lower() in SENSITIVE_KEYS else scrub(v))
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [scrub(i) for i in obj]
    if isinstance(obj, str):
        return mask_string(obj)
    return obj


def _scrub_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sentry before_send hook. Scrubs session credentials from request data
    and stack-frame locals before the event leaves the server.
    """
    if "request" in event:
        event["request"] = scrub(event["request"])

    for exc in (event.get("exception") or {}).get("values") or []:
        for frame in (exc.get("stacktrace") or {}).get("frames") or []:
            if "vars" in frame:
                frame["vars"] = scrub(frame["vars"])

    return event


class CredentialScrubFilter(logging.Filter):
    """Keeps session credentials out of log output."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = mask_string(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(mask_string(a) if isinstance(a, str) else a for a in record.args)
        return True


def setup_observability() -> None:
    """
    Initializes global system logging and Sentry (if DSN is present).
    Should be called once at application startup.
    """

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    # Complete format: 2026-02-27 15:00:00 | INFO    | module.name | The message
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, CredentialScrubFilter) for f in handler.filters):
            handler.addFilter(CredentialScrubFilter())

    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        sentry_env = os.getenv("SENTRY_ENV", "development")
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=sentry_env,
            traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.2")),
            send_default_pii=False,
            before_send=_scrub_sensitive_data
        )
        log.info(f"Sentry SDK initialized (env: {sentry_env})")
    else:
        log.info("SENTRY_DSN not provided. Running without Sentry.")

    # We also quiet down noisy third-party loggers here
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
