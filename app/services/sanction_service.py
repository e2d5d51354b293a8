import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, InvalidTransitionError, NotFoundError
from app.models.sanction_model import Sanction, SanctionType
from app.repositories import gateways
from app.services.common import get_active_member, require, unwrap
from app.utils.obligation_status import SanctionStatus

logger = logging.getLogger(__name__)


# =====================================================
# Sanction types
# =====================================================
def list_types(db: Session, category: str = None, active_only: bool = False) -> list[SanctionType]:
    rows = unwrap(gateways.sanction_types(db).get_by_period(category=category))
    if active_only:
        rows = [t for t in rows if t.is_active]
    return rows


def create_type(db: Session, fields: dict) -> SanctionType:
    name = fields["name"].strip()
    if unwrap(gateways.sanction_types(db).get_by_period(name=name, category=fields["category"])):
        raise ConflictError("Sanction type already exists in this category")

    obj = unwrap(gateways.sanction_types(db).create({**fields, "name": name, "is_active": True}))
    logger.info("sanction type %s created (%s)", obj.name, obj.category)
    return obj


def update_type(db: Session, sanction_type_id: int, changes: dict) -> SanctionType:
    require(gateways.sanction_types(db), sanction_type_id, "Sanction type")
    return unwrap(gateways.sanction_types(db).update(sanction_type_id, changes))


def find_type(db: Session, name: str, category: str) -> Optional[SanctionType]:
    rows = unwrap(gateways.sanction_types(db).get_by_period(category=category))
    for t in rows:
        if t.is_active and t.name.lower() == name.lower():
            return t
    return None


# =====================================================
# Sanctions
# =====================================================
def get_sanction(db: Session, sanction_id: int) -> Sanction:
    return require(gateways.sanctions(db), sanction_id, "Sanction")


def list_sanctions(db: Session, status: str = None, member_id: int = None,
                   category: str = None) -> list[Sanction]:
    rows = unwrap(gateways.sanctions(db).get_by_period(status=status, member_id=member_id))
    if category:
        rows = [s for s in rows if s.sanction_type and s.sanction_type.category == category]
    return rows


def create_sanction(
        db: Session,
        member_id: int,
        sanction_type_id: int,
        today: date,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
        automatic: bool = False,
        actor: Optional[str] = None,
        commit: bool = True,
) -> Sanction:
    member = get_active_member(db, member_id)
    stype = unwrap(gateways.sanction_types(db).get_by_id(sanction_type_id))
    if stype is None or not stype.is_active:
        raise NotFoundError("Sanction type not found / inactive")

    obj = unwrap(gateways.sanctions(db).create(
        {
            "member_id": member.member_id,
            "sanction_type_id": stype.sanction_type_id,
            "amount": stype.default_amount if amount is None else amount,
            "reason": reason,
            "sanction_date": today,
            "status": SanctionStatus.UNPAID,
            "automatic": automatic,
            "recorded_by": actor,
        },
        commit=commit,
    ))
    logger.info(
        "sanction %s (%s) on member %s: %s%s",
        obj.sanction_id, stype.name, member.member_id, obj.amount, " [auto]" if automatic else "",
    )
    return obj


def pay_sanction(db: Session, sanction_id: int, today: date) -> Sanction:
    s = get_sanction(db, sanction_id)
    if s.status != SanctionStatus.UNPAID:
        raise InvalidTransitionError(f"Sanction is {s.status}, only an unpaid sanction can be paid")

    s = unwrap(gateways.sanctions(db).update(sanction_id, {
        "status": SanctionStatus.PAID,
        "payment_date": today,
    }))
    logger.info("sanction %s paid", sanction_id)
    return s


def cancel_sanction(db: Session, sanction_id: int) -> Sanction:
    s = get_sanction(db, sanction_id)
    if s.status != SanctionStatus.UNPAID:
        raise InvalidTransitionError(f"Sanction is {s.status}, only an unpaid sanction can be cancelled")

    s = unwrap(gateways.sanctions(db).update(sanction_id, {"status": SanctionStatus.CANCELLED}))
    logger.info("sanction %s cancelled", sanction_id)
    return s


def edit_sanction(db: Session, sanction_id: int, changes: dict, today: date) -> Sanction:
    s = get_sanction(db, sanction_id)

    new_status = changes.get("status")
    if new_status and new_status != s.status:
        if new_status == SanctionStatus.PAID:
            changes["payment_date"] = today
        elif s.status == SanctionStatus.PAID:
            changes["payment_date"] = None

    if not changes:
        return s
    s = unwrap(gateways.sanctions(db).update(sanction_id, changes))
    logger.info("sanction %s corrected: %s", sanction_id, ", ".join(sorted(changes)))
    return s
