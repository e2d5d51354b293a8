import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidTransitionError
from app.models.loan_model import Loan
from app.repositories import gateways
from app.services.common import get_active_member, require, unwrap
from app.utils.ledger_calculations import (
    LOAN_INTEREST_RATE_PERCENT,
    compute_loan_interest,
    loan_due_date,
)
from app.utils.obligation_status import LoanStatus, is_loan_due_soon, loan_display_status

logger = logging.getLogger(__name__)


def to_out(loan: Loan, today: date) -> dict:
    return {
        "loan_id": loan.loan_id,
        "borrower_id": loan.borrower_id,
        "principal_amount": loan.principal_amount,
        "interest_rate": float(loan.interest_rate or 0),
        "interest_amount": loan.interest_amount,
        "total_due": (loan.principal_amount or 0) + (loan.interest_amount or 0),
        "grant_date": loan.grant_date,
        "due_date": loan.due_date,
        "repayment_date": loan.repayment_date,
        "status": loan.status,
        "display_status": loan_display_status(loan.status, loan.due_date, today),
        "due_soon": loan.status in LoanStatus.OPEN and is_loan_due_soon(loan.due_date, today),
        "renewal_count": loan.renewal_count,
        "document_url": loan.document_url,
        "granted_by": loan.granted_by,
        "borrower": loan.borrower,
    }


def get_loan(db: Session, loan_id: int) -> Loan:
    return require(gateways.loans(db), loan_id, "Loan")


def list_loans(db: Session, today: date, status: str = None, borrower_id: int = None) -> list[Loan]:
    """`status` may be a stored status or the derived OVERDUE label."""
    rows = unwrap(gateways.loans(db).get_by_period(borrower_id=borrower_id))
    if status:
        rows = [l for l in rows if loan_display_status(l.status, l.due_date, today) == status]
    return rows


def create_loan(db: Session, borrower_id: int, principal_amount: int, today: date,
                document_url: Optional[str] = None, actor: Optional[str] = None) -> Loan:
    borrower = get_active_member(db, borrower_id)

    loan = unwrap(gateways.loans(db).create({
        "borrower_id": borrower.member_id,
        "principal_amount": principal_amount,
        "interest_rate": LOAN_INTEREST_RATE_PERCENT,
        "interest_amount": compute_loan_interest(principal_amount),
        "grant_date": today,
        "due_date": loan_due_date(today),
        "status": LoanStatus.ACTIVE,
        "renewal_count": 0,
        "document_url": document_url,
        "granted_by": actor,
    }))
    logger.info(
        "loan %s granted to member %s: %s + %s due %s",
        loan.loan_id, borrower.member_id, loan.principal_amount, loan.interest_amount, loan.due_date,
    )
    return loan


def edit_loan(db: Session, loan_id: int, changes: dict) -> Loan:
    loan = get_loan(db, loan_id)
    changes.pop("status", None)

    if changes.get("principal_amount") is not None:
        # explicit principal correction: interest follows at the stored rate
        changes["interest_amount"] = compute_loan_interest(changes["principal_amount"], loan.interest_rate)

    if not changes:
        return loan
    loan = unwrap(gateways.loans(db).update(loan_id, changes))
    logger.info("loan %s edited: %s", loan_id, ", ".join(sorted(changes)))
    return loan


def repay_loan(db: Session, loan_id: int, today: date) -> Loan:
    loan = get_loan(db, loan_id)
    if loan.status not in LoanStatus.OPEN:
        raise InvalidTransitionError(f"Loan is {loan.status}, only an open loan can be repaid")

    loan = unwrap(gateways.loans(db).update(loan_id, {
        "status": LoanStatus.REPAID,
        "repayment_date": today,
    }))
    logger.info("loan %s repaid on %s", loan_id, today)
    return loan


def renew_loan(db: Session, loan_id: int, today: date) -> Loan:
    """New term from today; interest stays what it was at grant time."""
    loan = get_loan(db, loan_id)
    if loan.status not in LoanStatus.OPEN:
        raise InvalidTransitionError(f"Loan is {loan.status}, only an open loan can be renewed")

    loan = unwrap(gateways.loans(db).update(loan_id, {
        "status": LoanStatus.RENEWED,
        "due_date": loan_due_date(today),
        "renewal_count": (loan.renewal_count or 0) + 1,
    }))
    logger.info("loan %s renewed (#%s) until %s", loan_id, loan.renewal_count, loan.due_date)
    return loan
