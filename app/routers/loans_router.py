from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_actor
from app.core.clock import get_today
from app.services import loan_service, report_service
from app.utils.database import get_db
from app.schemas.loan_schema import LoanCreate, LoanOut, LoanStatsOut, LoanUpdate

router = APIRouter(prefix="/loans", tags=["Loans"])


# =====================================================
# 🔹 GRANT LOAN
# =====================================================
@router.post("/", response_model=LoanOut, status_code=status.HTTP_201_CREATED)
def create_loan(
    payload: LoanCreate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
    actor: Optional[str] = Depends(get_actor),
):
    loan = loan_service.create_loan(
        db,
        borrower_id=payload.borrower_id,
        principal_amount=payload.principal_amount,
        today=today,
        document_url=payload.document_url,
        actor=actor,
    )
    return loan_service.to_out(loan, today)


# =====================================================
# 🔹 LIST / STATS
# =====================================================
@router.get("/", response_model=list[LoanOut])
def list_loans(
    status: Optional[str] = Query(None, description="ACTIVE / RENEWED / REPAID / OVERDUE"),
    borrower_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    rows = loan_service.list_loans(db, today, status=status, borrower_id=borrower_id)
    return [loan_service.to_out(l, today) for l in rows]


@router.get("/stats", response_model=LoanStatsOut)
def loan_stats(db: Session = Depends(get_db), today=Depends(get_today)):
    return report_service.loan_stats(db, today)


@router.get("/{loan_id}", response_model=LoanOut)
def get_loan(loan_id: int, db: Session = Depends(get_db), today=Depends(get_today)):
    return loan_service.to_out(loan_service.get_loan(db, loan_id), today)


# =====================================================
# 🔹 EDIT (principal / due date / document)
# =====================================================
@router.patch("/{loan_id}", response_model=LoanOut)
def edit_loan(
    loan_id: int,
    payload: LoanUpdate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
):
    changes = payload.model_dump(exclude_unset=True)
    # only document_url may be cleared
    for field in ("principal_amount", "due_date"):
        if changes.get(field) is None:
            changes.pop(field, None)
    loan = loan_service.edit_loan(db, loan_id, changes)
    return loan_service.to_out(loan, today)


# =====================================================
# 🔹 REPAY / RENEW
# =====================================================
@router.post("/{loan_id}/repay", response_model=LoanOut)
def repay_loan(loan_id: int, db: Session = Depends(get_db), today=Depends(get_today)):
    return loan_service.to_out(loan_service.repay_loan(db, loan_id, today), today)


@router.post("/{loan_id}/renew", response_model=LoanOut)
def renew_loan(loan_id: int, db: Session = Depends(get_db), today=Depends(get_today)):
    return loan_service.to_out(loan_service.renew_loan(db, loan_id, today), today)
