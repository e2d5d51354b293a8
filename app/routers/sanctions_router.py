from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_actor
from app.core.clock import get_today
from app.services import report_service, sanction_service
from app.utils.database import get_db
from app.schemas.report_schema import SuspensionCandidatesOut
from app.schemas.sanction_schema import (
    SanctionCreate,
    SanctionOut,
    SanctionStatsOut,
    SanctionTypeCreate,
    SanctionTypeOut,
    SanctionTypeUpdate,
    SanctionUpdate,
)

router = APIRouter(prefix="/sanctions", tags=["Sanctions"])


# ===================================================
# SANCTION TYPES
# ===================================================
@router.get("/types", response_model=list[SanctionTypeOut])
def list_sanction_types(
    category: Optional[str] = Query(None),
    active_only: bool = Query(False),
    db: Session = Depends(get_db),
):
    return sanction_service.list_types(db, category=category, active_only=active_only)


@router.post("/types", response_model=SanctionTypeOut, status_code=status.HTTP_201_CREATED)
def create_sanction_type(payload: SanctionTypeCreate, db: Session = Depends(get_db)):
    return sanction_service.create_type(db, payload.model_dump())


@router.patch("/types/{sanction_type_id}", response_model=SanctionTypeOut)
def update_sanction_type(
    sanction_type_id: int,
    payload: SanctionTypeUpdate,
    db: Session = Depends(get_db),
):
    return sanction_service.update_type(db, sanction_type_id, payload.model_dump(exclude_unset=True, exclude_none=True))


# ===================================================
# SANCTIONS
# ===================================================
@router.post("/", response_model=SanctionOut, status_code=status.HTTP_201_CREATED)
def create_sanction(
    payload: SanctionCreate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
    actor: Optional[str] = Depends(get_actor),
):
    return sanction_service.create_sanction(
        db,
        member_id=payload.member_id,
        sanction_type_id=payload.sanction_type_id,
        today=today,
        amount=payload.amount,
        reason=payload.reason,
        automatic=payload.automatic,
        actor=actor,
    )


@router.get("/", response_model=list[SanctionOut])
def list_sanctions(
    status: Optional[str] = Query(None),
    member_id: Optional[int] = Query(None),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return sanction_service.list_sanctions(db, status=status, member_id=member_id, category=category)


@router.get("/stats", response_model=SanctionStatsOut)
def sanction_stats(db: Session = Depends(get_db)):
    return report_service.sanction_stats(db)


@router.get("/suspension-candidates", response_model=SuspensionCandidatesOut)
def suspension_candidates(db: Session = Depends(get_db)):
    return report_service.suspension_candidates(db)


@router.get("/{sanction_id}", response_model=SanctionOut)
def get_sanction(sanction_id: int, db: Session = Depends(get_db)):
    return sanction_service.get_sanction(db, sanction_id)


@router.patch("/{sanction_id}", response_model=SanctionOut)
def edit_sanction(
    sanction_id: int,
    payload: SanctionUpdate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    return sanction_service.edit_sanction(
        db, sanction_id, payload.model_dump(exclude_unset=True, exclude_none=True), today
    )


# --------------------------------------
# PAY / CANCEL
# --------------------------------------
@router.post("/{sanction_id}/pay", response_model=SanctionOut)
def pay_sanction(sanction_id: int, db: Session = Depends(get_db), today=Depends(get_today)):
    return sanction_service.pay_sanction(db, sanction_id, today)


@router.post("/{sanction_id}/cancel", response_model=SanctionOut)
def cancel_sanction(sanction_id: int, db: Session = Depends(get_db)):
    return sanction_service.cancel_sanction(db, sanction_id)
