"""Bounded short-polling of the hosted checkout status after the payment redirect."""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Literal, Optional

from infrastructure.api_client import ApiError

log = logging.getLogger(__name__)

PaymentOutcome = Literal["paid", "expired", "pending"]

MAX_ATTEMPTS = 5
POLL_INTERVAL_SECONDS = 2.0


@dataclass(frozen=True)
class PaymentWatchResult:
    session_id: str
    outcome: PaymentOutcome = "pending"
    attempts: int = 0
    last_status: Dict[str, Any] = field(default_factory=dict)
    finished: bool = False

    @property
    def amount(self) -> Optional[float]:
        amount = self.last_status.get("amount")
        try:
            return float(amount) if amount is not None else None
        except (TypeError, ValueError):
            return None


def classify_status(status: Dict[str, Any]) -> Optional[PaymentOutcome]:
    """Map a status payload to a terminal outcome, or None while still in flight."""
    if status.get("payment_status") == "paid":
        return "paid"
    if status.get("status") == "expired":
        return "expired"
    return None


class PaymentStatusWatcher:
    """
    Issues at most one `fetch_status(session_id)` request per `advance` call and
    at most `max_attempts` per checkout session. Progress lives in the returned
    `PaymentWatchResult`, so the caller keeps it between script runs and decides
    when the next attempt happens.
    """

    def __init__(self, fetch_status: Callable[[str], Dict[str, Any]], max_attempts: int = MAX_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._fetch_status = fetch_status
        self.max_attempts = max_attempts

    def start(self, session_id: str) -> PaymentWatchResult:
        return PaymentWatchResult(session_id=session_id)

    def advance(self, result: PaymentWatchResult) -> PaymentWatchResult:
        if result.finished or result.attempts >= self.max_attempts:
            return replace(result, finished=True)

        attempts = result.attempts + 1
        try:
            status = self._fetch_status(result.session_id) or {}
        except ApiError as e:
            log.warning(f"Payment status attempt {attempts}/{self.max_attempts} failed: {e}")
            return replace(result, attempts=attempts, finished=attempts >= self.max_attempts)

        outcome = classify_status(status)
        if outcome is not None:
            log.info(f"Payment {result.session_id} reached '{outcome}' on attempt {attempts}")
            return replace(result, outcome=outcome, attempts=attempts, last_status=status, finished=True)

        if attempts >= self.max_attempts:
            log.info(f"Payment {result.session_id} still pending after {attempts} attempts")
        return replace(result, attempts=attempts, last_status=status, finished=attempts >= self.max_attempts)
