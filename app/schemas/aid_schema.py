from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Optional, Literal

from app.schemas.member_schema import MemberMiniOut


class AidTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    default_amount: int = Field(0, ge=0)
    repayment_delay_months: int = Field(0, ge=0)
    description: Optional[str] = None


class AidTypeUpdate(BaseModel):
    name: Optional[str] = None
    default_amount: Optional[int] = Field(None, ge=0)
    repayment_delay_months: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class AidTypeOut(BaseModel):
    aid_type_id: int
    name: str
    default_amount: int
    repayment_delay_months: int
    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class AidCreate(BaseModel):
    beneficiary_id: int
    aid_type_id: int
    # None -> type default
    amount: Optional[int] = Field(None, gt=0)
    reason: Optional[str] = None
    justification_url: Optional[str] = None
    create_debt: bool = True

    @field_validator("reason", "justification_url", mode="before")
    def empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class AidUpdate(BaseModel):
    # the linked debt is never touched by an aid edit
    amount: Optional[int] = Field(None, gt=0)
    reason: Optional[str] = None
    justification_url: Optional[str] = None
    status: Optional[Literal["GRANTED", "REPAID"]] = None
    repayment_due_date: Optional[date] = None


class DebtPaymentCreate(BaseModel):
    amount: int = Field(gt=0)
    payment_date: Optional[date] = None
    remarks: Optional[str] = None


class DebtPaymentOut(BaseModel):
    payment_id: int
    debt_id: int
    amount: int
    payment_date: date
    remarks: Optional[str] = None
    recorded_by: Optional[str] = None

    class Config:
        from_attributes = True


class DebtOut(BaseModel):
    debt_id: int
    member_id: int
    aid_id: int
    owed_amount: int
    paid_amount: int
    remaining_amount: int
    due_date: Optional[date] = None
    status: str
    display_status: str
    due_soon: bool
    member: Optional[MemberMiniOut] = None
    payments: list[DebtPaymentOut] = []


class AidOut(BaseModel):
    aid_id: int
    beneficiary_id: int
    aid_type_id: int
    amount: int
    grant_date: date
    repayment_due_date: Optional[date] = None
    reason: Optional[str] = None
    justification_url: Optional[str] = None
    status: str
    display_status: str
    due_soon: bool
    debt_link_status: str
    granted_by: Optional[str] = None
    beneficiary: Optional[MemberMiniOut] = None
    aid_type: Optional[AidTypeOut] = None


class AidCreateResult(BaseModel):
    aid: AidOut
    debt: Optional[DebtOut] = None
    # set when the aid was saved but its debt could not be
    debt_error: Optional[str] = None


class AidStatsOut(BaseModel):
    total: int
    granted: int
    repaid: int
    amount_total: int
    amount_granted: int
    debts_in_progress: int
    debts_remaining_total: int
