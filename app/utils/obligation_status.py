"""
Status values and pure status-derivation rules for every obligation kind.

Nothing in here reads the clock: time-relative rules take `today` explicitly.
OVERDUE is a display label only and is never written to the database.
"""
from datetime import date
from typing import Iterable, Optional

from app.utils.ledger_calculations import days_until, remaining_amount

LOAN_DUE_SOON_DAYS = 7
AID_DUE_SOON_DAYS = 30

OVERDUE = "OVERDUE"


class MemberStatus:
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    ALL = (ACTIVE, INACTIVE, SUSPENDED)


class CotisationStatus:
    PAID = "PAID"
    PARTIAL = "PARTIAL"
    UNPAID = "UNPAID"
    ALL = (PAID, PARTIAL, UNPAID)


class LoanStatus:
    ACTIVE = "ACTIVE"
    REPAID = "REPAID"
    RENEWED = "RENEWED"
    ALL = (ACTIVE, REPAID, RENEWED)
    OPEN = (ACTIVE, RENEWED)


class SanctionStatus:
    UNPAID = "UNPAID"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
    ALL = (UNPAID, PAID, CANCELLED)


class SanctionCategory:
    MEETING = "MEETING"
    SPORT_E2D = "SPORT_E2D"
    SPORT_PHOENIX = "SPORT_PHOENIX"
    DISCIPLINARY = "DISCIPLINARY"
    ALL = (MEETING, SPORT_E2D, SPORT_PHOENIX, DISCIPLINARY)


class AidStatus:
    GRANTED = "GRANTED"
    REPAID = "REPAID"
    ALL = (GRANTED, REPAID)
    OPEN = (GRANTED,)


class DebtLinkStatus:
    NOT_REQUESTED = "NOT_REQUESTED"
    PENDING = "PENDING"
    CREATED = "CREATED"
    FAILED = "FAILED"


class DebtStatus:
    IN_PROGRESS = "IN_PROGRESS"
    SETTLED = "SETTLED"
    ALL = (IN_PROGRESS, SETTLED)
    OPEN = (IN_PROGRESS,)


class SavingsStatus:
    ACTIVE = "ACTIVE"
    REPAID = "REPAID"
    ALL = (ACTIVE, REPAID)


# -------------------------------------------------
# Cotisation
# -------------------------------------------------
def cotisation_status(
        expected_amount: int,
        paid_amount: int,
        oil_paid: bool,
        soap_paid: bool,
        sport_fund_paid: bool,
) -> str:
    paid_amount = paid_amount or 0
    flags = (bool(oil_paid), bool(soap_paid), bool(sport_fund_paid))

    if paid_amount >= (expected_amount or 0) and all(flags):
        return CotisationStatus.PAID
    if paid_amount == 0 and not any(flags):
        return CotisationStatus.UNPAID
    return CotisationStatus.PARTIAL


# -------------------------------------------------
# Due-date predicates
# -------------------------------------------------
def is_overdue(due_date: Optional[date], status: str, open_states: Iterable[str], today: date) -> bool:
    if due_date is None:
        return False
    return due_date < today and status in tuple(open_states)


def is_due_within(due_date: Optional[date], today: date, days: int) -> bool:
    if due_date is None:
        return False
    return 0 <= days_until(due_date, today) <= days


def is_loan_due_soon(due_date: Optional[date], today: date) -> bool:
    return is_due_within(due_date, today, LOAN_DUE_SOON_DAYS)


def is_due_soon(due_date: Optional[date], today: date) -> bool:
    """Aid and sovereign-fund debt window."""
    return is_due_within(due_date, today, AID_DUE_SOON_DAYS)


# -------------------------------------------------
# Loans / aids / debts
# -------------------------------------------------
def loan_display_status(status: str, due_date: Optional[date], today: date) -> str:
    if is_overdue(due_date, status, LoanStatus.OPEN, today):
        return OVERDUE
    return status


def aid_display_status(status: str, repayment_due_date: Optional[date], today: date) -> str:
    if is_overdue(repayment_due_date, status, AidStatus.OPEN, today):
        return OVERDUE
    return status


def debt_status(owed_amount: int, paid_amount: int) -> str:
    if remaining_amount(owed_amount, paid_amount) <= 0:
        return DebtStatus.SETTLED
    return DebtStatus.IN_PROGRESS


def debt_display_status(status: str, due_date: Optional[date], today: date) -> str:
    if is_overdue(due_date, status, DebtStatus.OPEN, today):
        return OVERDUE
    return status
