from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from dateutil.relativedelta import relativedelta

LOAN_INTEREST_RATE_PERCENT = Decimal("5")
LOAN_TERM_MONTHS = 2


def to_fcfa(x) -> int:
    """Always return a whole FCFA amount with HALF_UP rounding."""
    if x is None:
        x = 0
    if not isinstance(x, Decimal):
        x = Decimal(str(x))
    return int(x.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def add_months(d: date, months: int) -> date:
    """
    Calendar month offset, clamped to the end of the target month:
      2025-01-31 + 1 month => 2025-02-28
    """
    return d + relativedelta(months=months)


def days_until(due: date, today: date) -> int:
    """Signed number of days from `today` to `due` (negative once past)."""
    return (due - today).days


def compute_loan_interest(principal, rate_percent=LOAN_INTEREST_RATE_PERCENT) -> int:
    """
    FLAT, fixed for the life of the loan:
      interest = principal * (rate% / 100)

    Example:
      principal=100000, rate=5 => 5000
    """
    principal = Decimal(str(principal))
    rate = Decimal(str(rate_percent))
    return to_fcfa(principal * rate / Decimal("100"))


def loan_due_date(start: date) -> date:
    return add_months(start, LOAN_TERM_MONTHS)


def aid_repayment_due_date(grant_date: date, delay_months: int) -> date:
    return add_months(grant_date, int(delay_months or 0))


def remaining_amount(owed, paid) -> int:
    # no clamp: an overpayment shows up as a negative remainder
    return to_fcfa(owed) - to_fcfa(paid)


def percentage(part, whole) -> float:
    """part / whole as a percentage with 2 decimals; 0 when nothing is expected."""
    whole = Decimal(str(whole or 0))
    if whole <= 0:
        return 0.0
    pct = Decimal(str(part or 0)) * Decimal("100") / whole
    return float(pct.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
