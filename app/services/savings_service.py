import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidTransitionError
from app.models.savings_model import SavingsDeposit
from app.repositories import gateways
from app.services.common import get_active_member, require, unwrap
from app.utils.aggregations import distribute_interest
from app.utils.obligation_status import SavingsStatus

logger = logging.getLogger(__name__)


def get_deposit(db: Session, deposit_id: int) -> SavingsDeposit:
    return require(gateways.savings(db), deposit_id, "Savings deposit")


def list_deposits(db: Session, exercise: int = None, member_id: int = None,
                  status: str = None) -> list[SavingsDeposit]:
    return unwrap(gateways.savings(db).get_by_period(exercise=exercise, member_id=member_id, status=status))


def create_deposit(db: Session, member_id: int, amount: int, today: date,
                   deposit_date: Optional[date] = None, exercise: Optional[int] = None) -> SavingsDeposit:
    member = get_active_member(db, member_id)
    deposit_date = deposit_date or today

    obj = unwrap(gateways.savings(db).create({
        "member_id": member.member_id,
        "exercise": exercise or deposit_date.year,
        "amount": amount,
        "deposit_date": deposit_date,
        "status": SavingsStatus.ACTIVE,
        "interest_received": 0,
    }))
    logger.info("savings deposit %s: member %s, %s (exercise %s)", obj.deposit_id, member.member_id,
                amount, obj.exercise)
    return obj


def repay_deposit(db: Session, deposit_id: int, today: date, interest_received: int = 0) -> SavingsDeposit:
    d = get_deposit(db, deposit_id)
    if d.status != SavingsStatus.ACTIVE:
        raise InvalidTransitionError(f"Savings deposit is {d.status}, only an active deposit can be repaid")

    d = unwrap(gateways.savings(db).update(deposit_id, {
        "status": SavingsStatus.REPAID,
        "repayment_date": today,
        "interest_received": interest_received,
    }))
    logger.info("savings deposit %s repaid with %s interest", deposit_id, interest_received)
    return d


def interest_preview(db: Session, exercise: int) -> dict:
    """Loan interest of the exercise year split over that exercise's active deposits. Nothing is written."""
    deposits = list_deposits(db, exercise=exercise)
    loans = unwrap(gateways.loans(db).get_all())
    pool = sum(l.interest_amount or 0 for l in loans if l.grant_date and l.grant_date.year == exercise)

    shares = distribute_interest(deposits, pool)
    return {
        "exercise": exercise,
        "interest_pool": pool,
        "savings_base": sum(r["amount"] for r in shares),
        "shares": shares,
    }
