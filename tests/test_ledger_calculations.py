from datetime import date
from decimal import Decimal

import pytest

from app.utils.formatting import format_currency, format_date, format_long_date, month_name, period_label
from app.utils.ledger_calculations import (
    add_months,
    aid_repayment_due_date,
    compute_loan_interest,
    days_until,
    loan_due_date,
    percentage,
    remaining_amount,
    to_fcfa,
)


@pytest.mark.parametrize(
    "value, expected",
    [(None, 0), (0, 0), (2.5, 3), (2.4, 2), ("1250.5", 1251), (Decimal("99.49"), 99)],
)
def test_to_fcfa_rounds_half_up(value, expected):
    assert to_fcfa(value) == expected


def test_loan_interest_is_five_percent_rounded():
    assert compute_loan_interest(100000) == 5000
    assert compute_loan_interest(25000) == 1250
    # 12345 * 5% = 617.25
    assert compute_loan_interest(12345) == 617
    # 10 * 5% = 0.5 -> half up
    assert compute_loan_interest(10) == 1


def test_add_months_clamps_to_month_end():
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 12, 31), 2) == date(2026, 2, 28)
    assert add_months(date(2025, 3, 15), 0) == date(2025, 3, 15)


def test_loan_term_is_two_months():
    assert loan_due_date(date(2025, 3, 15)) == date(2025, 5, 15)
    assert loan_due_date(date(2024, 12, 31)) == date(2025, 2, 28)


def test_aid_due_date_uses_type_delay():
    assert aid_repayment_due_date(date(2025, 1, 10), 12) == date(2026, 1, 10)
    assert aid_repayment_due_date(date(2025, 1, 10), None) == date(2025, 1, 10)


def test_days_until_is_signed():
    today = date(2025, 3, 15)
    assert days_until(date(2025, 3, 22), today) == 7
    assert days_until(today, today) == 0
    assert days_until(date(2025, 3, 10), today) == -5


def test_remaining_amount_is_not_clamped():
    assert remaining_amount(50000, 20000) == 30000
    assert remaining_amount(50000, 60000) == -10000


def test_percentage():
    assert percentage(75000, 100000) == 75.0
    assert percentage(1, 3) == 33.33
    assert percentage(10, 0) == 0.0


def test_format_currency():
    assert format_currency(2450000) == "2 450 000 FCFA"
    assert format_currency(0) == "0 FCFA"
    assert format_currency(-1500) == "-1 500 FCFA"


def test_dates_and_months_in_french():
    assert format_date(date(2025, 1, 5)) == "05/01/2025"
    assert format_long_date(date(2025, 1, 15)) == "15 janvier 2025"
    assert format_date(None) == ""
    assert month_name(8) == "Août"
    assert period_label(3, 2025) == "Mars 2025"
    with pytest.raises(ValueError):
        month_name(13)
