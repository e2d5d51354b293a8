from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_actor
from app.core.clock import get_today
from app.repositories import gateways
from app.services import cotisation_service, report_service
from app.services.common import require
from app.utils.database import get_db
from app.schemas.cotisation_schema import (
    CotisationCreate,
    CotisationCreateResult,
    CotisationExerciseSummaryOut,
    CotisationOut,
    CotisationPeriodSummaryOut,
    CotisationUpdate,
)

router = APIRouter(prefix="/cotisations", tags=["Cotisations"])


# --------------------------------------
# RECORD A MONTHLY COTISATION
# --------------------------------------
@router.post("/", response_model=CotisationCreateResult, status_code=status.HTTP_201_CREATED)
def create_cotisation(
    payload: CotisationCreate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
    actor: Optional[str] = Depends(get_actor),
):
    obj, warning = cotisation_service.create_cotisation(db, payload, today, actor=actor)
    return {"cotisation": cotisation_service.to_out(obj), "warning": warning}


@router.get("/", response_model=list[CotisationOut])
def list_cotisations(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None),
    member_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None, description="PAID / PARTIAL / UNPAID (derived)"),
    db: Session = Depends(get_db),
):
    rows = cotisation_service.list_cotisations(db, month=month, year=year, member_id=member_id, status=status)
    return [cotisation_service.to_out(c) for c in rows]


# --------------------------------------
# SUMMARIES
# --------------------------------------
@router.get("/summary", response_model=CotisationPeriodSummaryOut)
def period_summary(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(...),
    db: Session = Depends(get_db),
):
    return report_service.cotisation_period_summary(db, month, year)


@router.get("/summary/{year}", response_model=CotisationExerciseSummaryOut)
def exercise_summary(year: int, db: Session = Depends(get_db)):
    return report_service.cotisation_exercise_summary(db, year)


@router.get("/{cotisation_id}", response_model=CotisationOut)
def get_cotisation(cotisation_id: int, db: Session = Depends(get_db)):
    return cotisation_service.to_out(require(gateways.cotisations(db), cotisation_id, "Cotisation"))


@router.patch("/{cotisation_id}", response_model=CotisationOut)
def update_cotisation(
    cotisation_id: int,
    payload: CotisationUpdate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    obj = cotisation_service.update_cotisation(db, cotisation_id, changes, today)
    return cotisation_service.to_out(obj)
