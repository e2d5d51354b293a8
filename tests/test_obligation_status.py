from datetime import date

import pytest

from app.utils.obligation_status import (
    OVERDUE,
    aid_display_status,
    cotisation_status,
    debt_display_status,
    debt_status,
    is_due_soon,
    is_loan_due_soon,
    loan_display_status,
)

TODAY = date(2025, 3, 15)


@pytest.mark.parametrize(
    "expected, paid, oil, soap, sport, status",
    [
        (10000, 10000, True, True, True, "PAID"),
        (10000, 12000, True, True, True, "PAID"),
        (10000, 10000, True, True, False, "PARTIAL"),
        (10000, 5000, True, True, True, "PARTIAL"),
        (10000, 0, False, False, False, "UNPAID"),
        (10000, 0, True, False, False, "PARTIAL"),
        (0, 0, True, True, True, "PAID"),
    ],
)
def test_cotisation_status(expected, paid, oil, soap, sport, status):
    assert cotisation_status(expected, paid, oil, soap, sport) == status


def test_loan_overdue_only_when_open_and_past_due():
    yesterday = date(2025, 3, 14)
    assert loan_display_status("ACTIVE", yesterday, TODAY) == OVERDUE
    assert loan_display_status("RENEWED", yesterday, TODAY) == OVERDUE
    assert loan_display_status("REPAID", yesterday, TODAY) == "REPAID"
    # due today is not overdue yet
    assert loan_display_status("ACTIVE", TODAY, TODAY) == "ACTIVE"


def test_loan_due_soon_window_is_seven_days():
    assert is_loan_due_soon(date(2025, 3, 22), TODAY)
    assert is_loan_due_soon(TODAY, TODAY)
    assert not is_loan_due_soon(date(2025, 3, 23), TODAY)
    assert not is_loan_due_soon(date(2025, 3, 14), TODAY)


def test_aid_due_soon_window_is_thirty_days():
    assert is_due_soon(date(2025, 4, 14), TODAY)
    assert not is_due_soon(date(2025, 4, 15), TODAY)
    assert not is_due_soon(None, TODAY)


def test_aid_and_debt_display_status():
    past = date(2025, 1, 1)
    assert aid_display_status("GRANTED", past, TODAY) == OVERDUE
    assert aid_display_status("REPAID", past, TODAY) == "REPAID"
    assert debt_display_status("IN_PROGRESS", past, TODAY) == OVERDUE
    assert debt_display_status("SETTLED", past, TODAY) == "SETTLED"


def test_debt_status_settles_at_zero_or_below():
    assert debt_status(50000, 20000) == "IN_PROGRESS"
    assert debt_status(50000, 50000) == "SETTLED"
    assert debt_status(50000, 70000) == "SETTLED"
