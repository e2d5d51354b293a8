from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_actor
from app.core.clock import get_today
from app.services import aid_service, report_service
from app.utils.database import get_db
from app.schemas.aid_schema import (
    AidCreate,
    AidCreateResult,
    AidOut,
    AidStatsOut,
    AidTypeCreate,
    AidTypeOut,
    AidTypeUpdate,
    AidUpdate,
    DebtOut,
    DebtPaymentCreate,
    DebtPaymentOut,
)

router = APIRouter(prefix="/aids", tags=["Social aids"])


def _result(aid, debt, debt_error, today):
    return {
        "aid": aid_service.aid_to_out(aid, today),
        "debt": aid_service.debt_to_out(debt, today) if debt is not None else None,
        "debt_error": debt_error,
    }


# ===================================================
# AID TYPES
# ===================================================
@router.get("/types", response_model=list[AidTypeOut])
def list_aid_types(active_only: bool = Query(False), db: Session = Depends(get_db)):
    return aid_service.list_types(db, active_only=active_only)


@router.post("/types", response_model=AidTypeOut, status_code=status.HTTP_201_CREATED)
def create_aid_type(payload: AidTypeCreate, db: Session = Depends(get_db)):
    return aid_service.create_type(db, payload.model_dump())


@router.patch("/types/{aid_type_id}", response_model=AidTypeOut)
def update_aid_type(aid_type_id: int, payload: AidTypeUpdate, db: Session = Depends(get_db)):
    return aid_service.update_type(db, aid_type_id, payload.model_dump(exclude_unset=True, exclude_none=True))


# ===================================================
# SOVEREIGN-FUND DEBTS
# ===================================================
@router.get("/debts", response_model=list[DebtOut])
def list_debts(
    status: Optional[str] = Query(None, description="IN_PROGRESS / SETTLED / OVERDUE"),
    member_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    rows = aid_service.list_debts(db, today, status=status, member_id=member_id)
    return [aid_service.debt_to_out(d, today) for d in rows]


@router.get("/debts/{debt_id}", response_model=DebtOut)
def get_debt(debt_id: int, db: Session = Depends(get_db), today=Depends(get_today)):
    return aid_service.debt_to_out(aid_service.get_debt(db, debt_id), today)


@router.post("/debts/{debt_id}/payments", response_model=DebtOut, status_code=status.HTTP_201_CREATED)
def record_debt_payment(
    debt_id: int,
    payload: DebtPaymentCreate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
    actor: Optional[str] = Depends(get_actor),
):
    debt = aid_service.record_debt_payment(
        db,
        debt_id,
        payload.amount,
        today,
        payment_date=payload.payment_date,
        remarks=payload.remarks,
        actor=actor,
    )
    return aid_service.debt_to_out(debt, today)


@router.get("/debts/{debt_id}/payments", response_model=list[DebtPaymentOut])
def list_debt_payments(debt_id: int, db: Session = Depends(get_db)):
    return aid_service.payments_of(db, debt_id)


# ===================================================
# AIDS
# ===================================================
@router.post("/", response_model=AidCreateResult, status_code=status.HTTP_201_CREATED)
def create_aid(
    payload: AidCreate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
    actor: Optional[str] = Depends(get_actor),
):
    aid, debt, debt_error = aid_service.create_aid(
        db,
        beneficiary_id=payload.beneficiary_id,
        aid_type_id=payload.aid_type_id,
        today=today,
        amount=payload.amount,
        reason=payload.reason,
        justification_url=payload.justification_url,
        create_debt=payload.create_debt,
        actor=actor,
    )
    return _result(aid, debt, debt_error, today)


@router.get("/", response_model=list[AidOut])
def list_aids(
    status: Optional[str] = Query(None, description="GRANTED / REPAID / OVERDUE"),
    beneficiary_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    rows = aid_service.list_aids(db, today, status=status, beneficiary_id=beneficiary_id)
    return [aid_service.aid_to_out(a, today) for a in rows]


@router.get("/stats", response_model=AidStatsOut)
def aid_stats(db: Session = Depends(get_db)):
    return report_service.aid_stats(db)


@router.get("/{aid_id}", response_model=AidOut)
def get_aid(aid_id: int, db: Session = Depends(get_db), today=Depends(get_today)):
    return aid_service.aid_to_out(aid_service.get_aid(db, aid_id), today)


@router.patch("/{aid_id}", response_model=AidOut)
def edit_aid(
    aid_id: int,
    payload: AidUpdate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    changes = payload.model_dump(exclude_unset=True)
    for field in ("amount", "status"):
        if changes.get(field) is None:
            changes.pop(field, None)
    return aid_service.aid_to_out(aid_service.edit_aid(db, aid_id, changes), today)


@router.post("/{aid_id}/retry-debt", response_model=AidCreateResult)
def retry_aid_debt(aid_id: int, db: Session = Depends(get_db), today=Depends(get_today)):
    aid, debt, debt_error = aid_service.retry_debt(db, aid_id)
    return _result(aid, debt, debt_error, today)
