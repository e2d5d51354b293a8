from pydantic import BaseModel, Field
from datetime import date
from typing import Optional

from app.schemas.member_schema import MemberMiniOut


class CotisationCreate(BaseModel):
    member_id: int
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)

    paid_amount: int = Field(0, ge=0)
    oil_paid: bool = False
    soap_paid: bool = False
    sport_fund_paid: bool = False
    # None -> configured monthly sport fund amount
    sport_fund_amount: Optional[int] = Field(None, ge=0)

    # staff confirmed an amount below the member's configured due
    acknowledge_underpayment: bool = False


class CotisationUpdate(BaseModel):
    paid_amount: Optional[int] = Field(None, ge=0)
    oil_paid: Optional[bool] = None
    soap_paid: Optional[bool] = None
    sport_fund_paid: Optional[bool] = None
    sport_fund_amount: Optional[int] = Field(None, ge=0)


class CotisationOut(BaseModel):
    cotisation_id: int
    member_id: int
    month: int
    year: int
    expected_amount: int
    paid_amount: int
    oil_paid: bool
    soap_paid: bool
    sport_fund_paid: bool
    sport_fund_amount: int
    payment_date: Optional[date] = None
    recorded_by: Optional[str] = None

    # derived, never stored
    status: str
    member: Optional[MemberMiniOut] = None


class CotisationCreateResult(BaseModel):
    cotisation: CotisationOut
    warning: Optional[str] = None


class CotisationSummaryOut(BaseModel):
    total: int
    paid: int
    partial: int
    unpaid: int
    expected_total: int
    paid_total: int
    recovery_rate: float


class CotisationPeriodSummaryOut(CotisationSummaryOut):
    month: int
    year: int
    label: str


class CotisationMonthRow(CotisationSummaryOut):
    month: int


class CotisationExerciseSummaryOut(BaseModel):
    year: int
    months: list[CotisationMonthRow]
    totals: CotisationSummaryOut
