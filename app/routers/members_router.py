from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_actor
from app.core.clock import get_today
from app.services import member_service
from app.services.common import get_member
from app.utils.database import get_db
from app.schemas.member_schema import (
    MemberCreate,
    MemberOut,
    MemberStatusChange,
    MemberUpdate,
    StatusHistoryOut,
)

router = APIRouter(prefix="/members", tags=["Members"])


# --------------------------------------
# CREATE MEMBER
# --------------------------------------
@router.post("/", response_model=MemberOut, status_code=status.HTTP_201_CREATED)
def create_member(
    payload: MemberCreate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    return member_service.create_member(db, payload.model_dump(), today)


# --------------------------------------
# LIST MEMBERS
# --------------------------------------
@router.get("/", response_model=list[MemberOut])
def list_members(
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return member_service.list_members(db, status=status, search=search)


@router.get("/{member_id}", response_model=MemberOut)
def get_member_details(member_id: int, db: Session = Depends(get_db)):
    return get_member(db, member_id)


# --------------------------------------
# UPDATE PROFILE (status excluded)
# --------------------------------------
@router.patch("/{member_id}", response_model=MemberOut)
def update_member(
    member_id: int,
    payload: MemberUpdate,
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True)
    # only phone and photo_url may be cleared
    for field in ("email", "last_name", "first_name", "monthly_due_amount", "join_date"):
        if changes.get(field) is None:
            changes.pop(field, None)
    return member_service.update_member(db, member_id, changes)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(member_id: int, db: Session = Depends(get_db)):
    member_service.delete_member(db, member_id)
    return


# ===================================================
# STATUS CHANGE + HISTORY
# ===================================================
@router.post("/{member_id}/status", response_model=MemberOut)
def change_member_status(
    member_id: int,
    payload: MemberStatusChange,
    db: Session = Depends(get_db),
    actor: Optional[str] = Depends(get_actor),
):
    return member_service.change_status(
        db,
        member_id,
        payload.new_status,
        reason=payload.reason,
        actor=actor,
    )


@router.get("/{member_id}/status-history", response_model=list[StatusHistoryOut])
def member_status_history(member_id: int, db: Session = Depends(get_db)):
    return member_service.status_history(db, member_id)
