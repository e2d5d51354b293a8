from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Optional

from app.schemas.member_schema import MemberMiniOut


class LoanCreate(BaseModel):
    borrower_id: int
    principal_amount: int = Field(gt=0)
    document_url: Optional[str] = None

    @field_validator("document_url", mode="before")
    def empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class LoanUpdate(BaseModel):
    # status changes only through /repay and /renew
    principal_amount: Optional[int] = Field(None, gt=0)
    due_date: Optional[date] = None
    document_url: Optional[str] = None


class LoanOut(BaseModel):
    loan_id: int
    borrower_id: int

    principal_amount: int
    interest_rate: float
    interest_amount: int
    total_due: int

    grant_date: date
    due_date: date
    repayment_date: Optional[date] = None

    status: str
    display_status: str
    due_soon: bool
    renewal_count: int

    document_url: Optional[str] = None
    granted_by: Optional[str] = None
    borrower: Optional[MemberMiniOut] = None


class LoanStatsOut(BaseModel):
    total: int = 0
    active: int = 0
    renewed: int = 0
    repaid: int = 0
    overdue: int = 0
    capital_in_progress: int = 0
    interest_total: int = 0
