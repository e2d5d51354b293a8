"""
Social aids and the sovereign-fund debts they open.

An aid and its debt are two separate commits. The aid is written first with
debt_link_status PENDING; the debt follows and flips the marker to CREATED.
If the debt write fails the aid stays (marker FAILED) and can be completed
later through retry_debt().
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, LedgerError, NotFoundError
from app.models.aid_model import AidType, DebtPayment, SocialAid, SovereignFundDebt
from app.repositories import gateways
from app.services.common import get_active_member, require, unwrap
from app.utils.ledger_calculations import aid_repayment_due_date, remaining_amount
from app.utils.obligation_status import (
    AidStatus,
    DebtLinkStatus,
    DebtStatus,
    aid_display_status,
    debt_display_status,
    debt_status,
    is_due_soon,
)

logger = logging.getLogger(__name__)


# =====================================================
# Output shaping
# =====================================================
def aid_to_out(aid: SocialAid, today: date) -> dict:
    return {
        "aid_id": aid.aid_id,
        "beneficiary_id": aid.beneficiary_id,
        "aid_type_id": aid.aid_type_id,
        "amount": aid.amount,
        "grant_date": aid.grant_date,
        "repayment_due_date": aid.repayment_due_date,
        "reason": aid.reason,
        "justification_url": aid.justification_url,
        "status": aid.status,
        "display_status": aid_display_status(aid.status, aid.repayment_due_date, today),
        "due_soon": aid.status in AidStatus.OPEN and is_due_soon(aid.repayment_due_date, today),
        "debt_link_status": aid.debt_link_status,
        "granted_by": aid.granted_by,
        "beneficiary": aid.beneficiary,
        "aid_type": aid.aid_type,
    }


def debt_to_out(debt: SovereignFundDebt, today: date) -> dict:
    return {
        "debt_id": debt.debt_id,
        "member_id": debt.member_id,
        "aid_id": debt.aid_id,
        "owed_amount": debt.owed_amount,
        "paid_amount": debt.paid_amount,
        "remaining_amount": debt.remaining_amount,
        "due_date": debt.due_date,
        "status": debt.status,
        "display_status": debt_display_status(debt.status, debt.due_date, today),
        "due_soon": debt.status in DebtStatus.OPEN and is_due_soon(debt.due_date, today),
        "member": debt.member,
        "payments": list(debt.payments),
    }


# =====================================================
# Aid types
# =====================================================
def list_types(db: Session, active_only: bool = False) -> list[AidType]:
    rows = unwrap(gateways.aid_types(db).get_all())
    if active_only:
        rows = [t for t in rows if t.is_active]
    return rows


def create_type(db: Session, fields: dict) -> AidType:
    name = fields["name"].strip()
    if unwrap(gateways.aid_types(db).get_by_period(name=name)):
        raise ConflictError("Aid type already exists")

    obj = unwrap(gateways.aid_types(db).create({**fields, "name": name, "is_active": True}))
    logger.info("aid type %s created", obj.name)
    return obj


def update_type(db: Session, aid_type_id: int, changes: dict) -> AidType:
    require(gateways.aid_types(db), aid_type_id, "Aid type")
    return unwrap(gateways.aid_types(db).update(aid_type_id, changes))


# =====================================================
# Aids
# =====================================================
def get_aid(db: Session, aid_id: int) -> SocialAid:
    return require(gateways.social_aids(db), aid_id, "Aid")


def list_aids(db: Session, today: date, status: str = None, beneficiary_id: int = None) -> list[SocialAid]:
    rows = unwrap(gateways.social_aids(db).get_by_period(beneficiary_id=beneficiary_id))
    if status:
        rows = [a for a in rows if aid_display_status(a.status, a.repayment_due_date, today) == status]
    return rows


def debt_for_aid(db: Session, aid_id: int) -> Optional[SovereignFundDebt]:
    rows = unwrap(gateways.debts(db).get_by_period(aid_id=aid_id))
    return rows[0] if rows else None


def _open_debt(db: Session, aid: SocialAid) -> SovereignFundDebt:
    return unwrap(gateways.debts(db).create({
        "member_id": aid.beneficiary_id,
        "aid_id": aid.aid_id,
        "owed_amount": aid.amount,
        "paid_amount": 0,
        "remaining_amount": aid.amount,
        "due_date": aid.repayment_due_date,
        "status": DebtStatus.IN_PROGRESS,
    }))


def _link_debt(db: Session, aid: SocialAid) -> tuple[Optional[SovereignFundDebt], Optional[str]]:
    try:
        debt = _open_debt(db, aid)
    except LedgerError as e:
        logger.error("aid %s saved but its sovereign-fund debt failed: %s", aid.aid_id, e.message)
        unwrap(gateways.social_aids(db).update(aid.aid_id, {"debt_link_status": DebtLinkStatus.FAILED}))
        return None, e.message

    unwrap(gateways.social_aids(db).update(aid.aid_id, {"debt_link_status": DebtLinkStatus.CREATED}))
    logger.info("debt %s opened for aid %s (%s)", debt.debt_id, aid.aid_id, debt.owed_amount)
    return debt, None


def create_aid(
        db: Session,
        beneficiary_id: int,
        aid_type_id: int,
        today: date,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
        justification_url: Optional[str] = None,
        create_debt: bool = True,
        actor: Optional[str] = None,
) -> tuple[SocialAid, Optional[SovereignFundDebt], Optional[str]]:
    """Returns (aid, debt, debt_error). debt_error is set when only the aid was saved."""
    member = get_active_member(db, beneficiary_id)
    aid_type = unwrap(gateways.aid_types(db).get_by_id(aid_type_id))
    if aid_type is None or not aid_type.is_active:
        raise NotFoundError("Aid type not found / inactive")

    amount = aid_type.default_amount if amount is None else amount
    if not amount or amount <= 0:
        raise ConflictError("Aid amount must be greater than zero")

    aid = unwrap(gateways.social_aids(db).create({
        "beneficiary_id": member.member_id,
        "aid_type_id": aid_type.aid_type_id,
        "amount": amount,
        "grant_date": today,
        "repayment_due_date": aid_repayment_due_date(today, aid_type.repayment_delay_months),
        "reason": reason,
        "justification_url": justification_url,
        "status": AidStatus.GRANTED,
        "debt_link_status": DebtLinkStatus.PENDING if create_debt else DebtLinkStatus.NOT_REQUESTED,
        "granted_by": actor,
    }))
    logger.info("aid %s (%s) granted to member %s: %s", aid.aid_id, aid_type.name, member.member_id, amount)

    if not create_debt:
        return aid, None, None

    debt, debt_error = _link_debt(db, aid)
    return get_aid(db, aid.aid_id), debt, debt_error


def retry_debt(db: Session, aid_id: int) -> tuple[SocialAid, Optional[SovereignFundDebt], Optional[str]]:
    aid = get_aid(db, aid_id)

    if aid.debt_link_status == DebtLinkStatus.CREATED or debt_for_aid(db, aid_id) is not None:
        raise ConflictError("A debt already exists for this aid")

    debt, debt_error = _link_debt(db, aid)
    return get_aid(db, aid_id), debt, debt_error


def edit_aid(db: Session, aid_id: int, changes: dict) -> SocialAid:
    """Field edits and GRANTED -> REPAID. The linked debt is left as it is."""
    aid = get_aid(db, aid_id)
    if not changes:
        return aid

    aid = unwrap(gateways.social_aids(db).update(aid_id, changes))
    logger.info("aid %s edited: %s", aid_id, ", ".join(sorted(changes)))
    return aid


# =====================================================
# Sovereign-fund debts
# =====================================================
def get_debt(db: Session, debt_id: int) -> SovereignFundDebt:
    return require(gateways.debts(db), debt_id, "Debt")


def list_debts(db: Session, today: date, status: str = None, member_id: int = None) -> list[SovereignFundDebt]:
    rows = unwrap(gateways.debts(db).get_by_period(member_id=member_id))
    if status:
        rows = [d for d in rows if debt_display_status(d.status, d.due_date, today) == status]
    return rows


def record_debt_payment(
        db: Session,
        debt_id: int,
        amount: int,
        today: date,
        payment_date: Optional[date] = None,
        remarks: Optional[str] = None,
        actor: Optional[str] = None,
) -> SovereignFundDebt:
    """No overpayment guard: a payment past the owed amount leaves a negative remainder."""
    debt = get_debt(db, debt_id)

    paid = (debt.paid_amount or 0) + amount
    remaining = remaining_amount(debt.owed_amount, paid)

    unwrap(gateways.debt_payments(db).create(
        {
            "debt_id": debt.debt_id,
            "amount": amount,
            "payment_date": payment_date or today,
            "remarks": remarks,
            "recorded_by": actor,
        },
        commit=False,
    ))
    debt = unwrap(gateways.debts(db).update(debt_id, {
        "paid_amount": paid,
        "remaining_amount": remaining,
        "status": debt_status(debt.owed_amount, paid),
    }))
    logger.info("debt %s payment %s, remaining %s (%s)", debt_id, amount, remaining, debt.status)
    return debt


def payments_of(db: Session, debt_id: int) -> list[DebtPayment]:
    get_debt(db, debt_id)
    return unwrap(gateways.debt_payments(db).get_by_period(debt_id=debt_id))
