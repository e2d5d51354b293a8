from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.clock import get_today
from app.services import report_service, savings_service
from app.utils.database import get_db
from app.schemas.savings_schema import (
    InterestDistributionOut,
    SavingsCreate,
    SavingsOut,
    SavingsRepay,
    SavingsStatsOut,
)

router = APIRouter(prefix="/savings", tags=["Savings"])


@router.post("/", response_model=SavingsOut, status_code=status.HTTP_201_CREATED)
def create_deposit(
    payload: SavingsCreate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    return savings_service.create_deposit(
        db,
        member_id=payload.member_id,
        amount=payload.amount,
        today=today,
        deposit_date=payload.deposit_date,
        exercise=payload.exercise,
    )


@router.get("/", response_model=list[SavingsOut])
def list_deposits(
    exercise: Optional[int] = Query(None),
    member_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return savings_service.list_deposits(db, exercise=exercise, member_id=member_id, status=status)


# --------------------------------------
# EXERCISE STATS / INTEREST PREVIEW
# --------------------------------------
@router.get("/stats/{exercise}", response_model=SavingsStatsOut)
def savings_stats(exercise: int, db: Session = Depends(get_db)):
    return report_service.savings_stats(db, exercise)


@router.get("/interest-preview/{exercise}", response_model=InterestDistributionOut)
def interest_preview(exercise: int, db: Session = Depends(get_db)):
    return savings_service.interest_preview(db, exercise)


@router.get("/{deposit_id}", response_model=SavingsOut)
def get_deposit(deposit_id: int, db: Session = Depends(get_db)):
    return savings_service.get_deposit(db, deposit_id)


@router.post("/{deposit_id}/repay", response_model=SavingsOut)
def repay_deposit(
    deposit_id: int,
    payload: SavingsRepay,
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    return savings_service.repay_deposit(db, deposit_id, today, interest_received=payload.interest_received)
