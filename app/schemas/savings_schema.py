from pydantic import BaseModel, Field
from datetime import date
from typing import Optional

from app.schemas.member_schema import MemberMiniOut


class SavingsCreate(BaseModel):
    member_id: int
    amount: int = Field(gt=0)
    deposit_date: Optional[date] = None
    # None -> year of deposit_date
    exercise: Optional[int] = Field(None, ge=2000, le=2100)


class SavingsRepay(BaseModel):
    interest_received: int = Field(0, ge=0)


class SavingsOut(BaseModel):
    deposit_id: int
    member_id: int
    exercise: int
    amount: int
    deposit_date: date
    status: str
    repayment_date: Optional[date] = None
    interest_received: int
    member: Optional[MemberMiniOut] = None

    class Config:
        from_attributes = True


class SavingsStatsOut(BaseModel):
    exercise: int
    total: int
    active: int
    repaid: int
    active_total: int
    interest_distributed: int


class InterestShareOut(BaseModel):
    deposit_id: int
    member_id: int
    amount: int
    share: int


class InterestDistributionOut(BaseModel):
    exercise: int
    interest_pool: int
    savings_base: int
    shares: list[InterestShareOut]
