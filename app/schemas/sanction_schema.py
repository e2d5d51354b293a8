from pydantic import BaseModel, Field
from datetime import date
from typing import Optional, Literal

from app.schemas.member_schema import MemberMiniOut

SanctionCategoryLiteral = Literal["MEETING", "SPORT_E2D", "SPORT_PHOENIX", "DISCIPLINARY"]
SanctionStatusLiteral = Literal["UNPAID", "PAID", "CANCELLED"]


class SanctionTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: SanctionCategoryLiteral
    default_amount: int = Field(0, ge=0)
    description: Optional[str] = None


class SanctionTypeUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[SanctionCategoryLiteral] = None
    default_amount: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class SanctionTypeOut(BaseModel):
    sanction_type_id: int
    name: str
    category: str
    default_amount: int
    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class SanctionCreate(BaseModel):
    member_id: int
    sanction_type_id: int
    # None -> type default
    amount: Optional[int] = Field(None, ge=0)
    reason: Optional[str] = None
    automatic: bool = False


class SanctionUpdate(BaseModel):
    """Correction form: entering PAID stamps the payment date, leaving PAID clears it."""
    amount: Optional[int] = Field(None, ge=0)
    reason: Optional[str] = None
    status: Optional[SanctionStatusLiteral] = None


class SanctionOut(BaseModel):
    sanction_id: int
    member_id: int
    sanction_type_id: int
    amount: int
    reason: Optional[str] = None
    sanction_date: date
    status: str
    payment_date: Optional[date] = None
    automatic: bool
    recorded_by: Optional[str] = None

    member: Optional[MemberMiniOut] = None
    sanction_type: Optional[SanctionTypeOut] = None

    class Config:
        from_attributes = True


class SanctionStatsOut(BaseModel):
    total: int
    unpaid: int
    paid: int
    cancelled: int
    unpaid_total: int
    by_category: dict[str, int]
