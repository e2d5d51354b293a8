import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, UnderpaymentWarning
from app.models.cotisation_model import Cotisation
from app.repositories import gateways
from app.services import configuration_service
from app.services.common import get_active_member, require, unwrap
from app.utils.aggregations import derived_cotisation_status
from app.utils.formatting import format_currency

logger = logging.getLogger(__name__)

SPORT_FUND_KEY = "monthly_sport_fund_amount"
PERIOD_TAKEN = "A cotisation already exists for this member and period"
PAYMENT_FIELDS = ("paid_amount", "oil_paid", "soap_paid", "sport_fund_paid")


def underpayment_warning(paid_amount: int, monthly_due: int) -> Optional[str]:
    if (paid_amount or 0) < (monthly_due or 0):
        return (
            f"Paid amount ({format_currency(paid_amount)}) is below the configured "
            f"monthly due ({format_currency(monthly_due)})"
        )
    return None


def to_out(c: Cotisation) -> dict:
    return {
        "cotisation_id": c.cotisation_id,
        "member_id": c.member_id,
        "month": c.month,
        "year": c.year,
        "expected_amount": c.expected_amount,
        "paid_amount": c.paid_amount,
        "oil_paid": c.oil_paid,
        "soap_paid": c.soap_paid,
        "sport_fund_paid": c.sport_fund_paid,
        "sport_fund_amount": c.sport_fund_amount,
        "payment_date": c.payment_date,
        "recorded_by": c.recorded_by,
        "status": derived_cotisation_status(c),
        "member": c.member,
    }


def list_cotisations(db: Session, month: int = None, year: int = None, member_id: int = None,
                     status: str = None) -> list[Cotisation]:
    rows = unwrap(gateways.cotisations(db).get_by_period(month=month, year=year, member_id=member_id))
    if status:
        rows = [c for c in rows if derived_cotisation_status(c) == status]
    return rows


def _period_taken(db: Session, member_id: int, month: int, year: int) -> bool:
    return bool(unwrap(gateways.cotisations(db).get_by_period(member_id=member_id, month=month, year=year)))


def create_cotisation(db: Session, payload, today: date,
                      actor: Optional[str] = None) -> tuple[Cotisation, Optional[str]]:
    member = get_active_member(db, payload.member_id)

    if _period_taken(db, member.member_id, payload.month, payload.year):
        raise ConflictError(PERIOD_TAKEN)

    warning = underpayment_warning(payload.paid_amount, member.monthly_due_amount)
    if warning and not payload.acknowledge_underpayment:
        raise UnderpaymentWarning(warning)

    sport_fund_amount = payload.sport_fund_amount
    if sport_fund_amount is None:
        sport_fund_amount = int(configuration_service.get_value_or(db, SPORT_FUND_KEY, 0))

    something_paid = payload.paid_amount > 0 or payload.oil_paid or payload.soap_paid or payload.sport_fund_paid
    result = gateways.cotisations(db).create({
        "member_id": member.member_id,
        "month": payload.month,
        "year": payload.year,
        # snapshot: later changes to the member's due do not rewrite history
        "expected_amount": member.monthly_due_amount,
        "paid_amount": payload.paid_amount,
        "oil_paid": payload.oil_paid,
        "soap_paid": payload.soap_paid,
        "sport_fund_paid": payload.sport_fund_paid,
        "sport_fund_amount": sport_fund_amount,
        "payment_date": today if something_paid else None,
        "recorded_by": actor,
    })
    # concurrent insert for the same period: refused by the unique index
    if not result.ok and _period_taken(db, member.member_id, payload.month, payload.year):
        raise ConflictError(PERIOD_TAKEN)
    obj = unwrap(result)

    if warning:
        logger.warning("cotisation %s accepted below due: %s", obj.cotisation_id, warning)
    logger.info(
        "cotisation %s recorded for member %s %02d/%s (%s)",
        obj.cotisation_id, member.member_id, obj.month, obj.year, derived_cotisation_status(obj),
    )
    return obj, warning


def update_cotisation(db: Session, cotisation_id: int, changes: dict, today: date) -> Cotisation:
    current = require(gateways.cotisations(db), cotisation_id, "Cotisation")
    if not changes:
        return current

    if current.payment_date is None and any(changes.get(f) for f in PAYMENT_FIELDS):
        changes["payment_date"] = today

    obj = unwrap(gateways.cotisations(db).update(cotisation_id, changes))
    logger.info("cotisation %s updated (%s)", cotisation_id, derived_cotisation_status(obj))
    return obj
