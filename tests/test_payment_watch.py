from unittest.mock import MagicMock

import pytest

from infrastructure.api_client import ApiError
from use_cases.payment_watch import PaymentStatusWatcher, classify_status

PENDING = {"payment_status": "unpaid", "status": "open", "amount": 49.99}
PAID = {"payment_status": "paid", "status": "complete", "amount": 49.99}
EXPIRED = {"payment_status": "unpaid", "status": "expired", "amount": 49.99}


def _run_until_finished(watcher, session_id="cs_1", max_steps=20):
    result = watcher.start(session_id)
    for _ in range(max_steps):
        if result.finished:
            break
        result = watcher.advance(result)
    return result


def test_classify_status():
    assert classify_status(PAID) == "paid"
    assert classify_status(EXPIRED) == "expired"
    assert classify_status(PENDING) is None
    assert classify_status({}) is None


def test_start_makes_no_request():
    fetch = MagicMock()
    result = PaymentStatusWatcher(fetch).start("cs_1")
    assert result.attempts == 0
    assert result.finished is False
    fetch.assert_not_called()


def test_each_advance_is_one_request():
    fetch = MagicMock(return_value=PENDING)
    watcher = PaymentStatusWatcher(fetch)

    result = watcher.advance(watcher.start("cs_1"))

    assert fetch.call_count == 1
    assert result.attempts == 1
    assert result.finished is False
    fetch.assert_called_with("cs_1")


def test_stops_on_paid_at_third_attempt():
    fetch = MagicMock(side_effect=[PENDING, PENDING, PAID])

    result = _run_until_finished(PaymentStatusWatcher(fetch))

    assert result.outcome == "paid"
    assert result.attempts == 3
    assert result.amount == pytest.approx(49.99)
    assert fetch.call_count == 3


def test_exhausted_budget_reports_pending_without_sixth_request():
    fetch = MagicMock(return_value=PENDING)
    watcher = PaymentStatusWatcher(fetch)

    result = _run_until_finished(watcher)
    again = watcher.advance(result)

    assert result.outcome == "pending"
    assert result.attempts == 5
    assert result.finished is True
    assert again == result
    assert fetch.call_count == 5


def test_expired_on_first_attempt_stops_immediately():
    fetch = MagicMock(side_effect=[EXPIRED, PAID])

    result = _run_until_finished(PaymentStatusWatcher(fetch))

    assert result.outcome == "expired"
    assert result.attempts == 1
    assert fetch.call_count == 1


def test_transport_errors_count_as_attempts_and_continue():
    fetch = MagicMock(side_effect=[ApiError("Network error: ConnectionError"), ApiError("HTTP 502", 502), PAID])

    result = _run_until_finished(PaymentStatusWatcher(fetch))

    assert result.outcome == "paid"
    assert result.attempts == 3


def test_all_attempts_failing_resolves_pending():
    fetch = MagicMock(side_effect=[ApiError("down")] * 5)

    result = _run_until_finished(PaymentStatusWatcher(fetch))

    assert result.outcome == "pending"
    assert result.finished is True
    assert fetch.call_count == 5
    assert result.last_status == {}


def test_failed_attempt_keeps_previous_status():
    fetch = MagicMock(side_effect=[PENDING, ApiError("down")])
    watcher = PaymentStatusWatcher(fetch)

    result = watcher.advance(watcher.advance(watcher.start("cs_1")))

    assert result.attempts == 2
    assert result.last_status == PENDING


def test_custom_budget_and_validation():
    fetch = MagicMock(return_value=PENDING)
    assert _run_until_finished(PaymentStatusWatcher(fetch, max_attempts=2)).attempts == 2
    with pytest.raises(ValueError):
        PaymentStatusWatcher(MagicMock(), max_attempts=0)
