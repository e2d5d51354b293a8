from pydantic import BaseModel, Field, field_validator
from datetime import date, time
from typing import Optional, Literal

ClubLiteral = Literal["E2D", "PHOENIX"]
MatchTypeLiteral = Literal["FRIENDLY", "LEAGUE", "CUP", "GALA"]
ExpenseCategoryLiteral = Literal["EQUIPMENT", "TRANSPORT", "REFEREEING", "MEDICAL", "OTHER"]


def _empty_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


# =====================================================
# Phoenix adherents
# =====================================================
class AdherentCreate(BaseModel):
    # set for an association member, None for an external person
    member_id: Optional[int] = None
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None
    is_organizing_committee: bool = False

    @field_validator("last_name", "first_name", "phone", "email", "photo_url", mode="before")
    def empty_to_none(cls, v):
        return _empty_to_none(v)


class AdherentOut(BaseModel):
    adherent_id: int
    member_id: Optional[int] = None
    last_name: str
    first_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None
    status: str
    join_date: date
    membership_fee: int
    membership_fee_paid: bool
    payment_deadline: Optional[date] = None
    sovereign_fund_amount: int
    sovereign_fund_paid: bool
    is_organizing_committee: bool

    class Config:
        from_attributes = True


# =====================================================
# Training sessions
# =====================================================
class SessionCreate(BaseModel):
    club: ClubLiteral
    session_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    place: Optional[str] = None
    description: Optional[str] = None


class SessionCancel(BaseModel):
    reason: Optional[str] = None


class SessionOut(BaseModel):
    session_id: int
    club: str
    session_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    place: Optional[str] = None
    description: Optional[str] = None
    cancelled: bool
    cancellation_reason: Optional[str] = None

    class Config:
        from_attributes = True


# =====================================================
# Matches
# =====================================================
class MatchCreate(BaseModel):
    club: ClubLiteral
    match_date: date
    kickoff_time: Optional[time] = None
    opponent: str = Field(..., min_length=1, max_length=150)
    opponent_logo_url: Optional[str] = None
    place: Optional[str] = None
    match_type: MatchTypeLiteral = "FRIENDLY"
    description: Optional[str] = None


class ScoreIn(BaseModel):
    team_score: int = Field(ge=0)
    opponent_score: int = Field(ge=0)


class CardCreate(BaseModel):
    member_id: int
    color: Literal["YELLOW", "RED"]


class CardOut(BaseModel):
    card_id: int
    match_id: int
    member_id: int
    color: str
    sanction_id: Optional[int] = None

    class Config:
        from_attributes = True


class MatchOut(BaseModel):
    match_id: int
    club: str
    match_date: date
    kickoff_time: Optional[time] = None
    opponent: str
    opponent_logo_url: Optional[str] = None
    place: Optional[str] = None
    team_score: int
    opponent_score: int
    result: Optional[str] = None
    match_type: str
    description: Optional[str] = None
    cards: list[CardOut] = []

    class Config:
        from_attributes = True


# =====================================================
# Expenses / donations
# =====================================================
class ExpenseCreate(BaseModel):
    club: ClubLiteral
    label: str = Field(..., min_length=1, max_length=200)
    amount: int = Field(gt=0)
    expense_date: date
    category: ExpenseCategoryLiteral = "OTHER"
    justification_url: Optional[str] = None


class ExpenseOut(BaseModel):
    expense_id: int
    club: str
    label: str
    amount: int
    expense_date: date
    category: str
    justification_url: Optional[str] = None
    approved_by: Optional[str] = None

    class Config:
        from_attributes = True


class DonationCreate(BaseModel):
    club: ClubLiteral
    donor_name: str = Field(..., min_length=1, max_length=150)
    donor_contact: Optional[str] = None
    amount: Optional[int] = Field(None, gt=0)
    in_kind_nature: Optional[str] = None
    donation_date: date
    description: Optional[str] = None
    receipt_url: Optional[str] = None

    @field_validator("in_kind_nature", mode="before")
    def empty_to_none(cls, v):
        return _empty_to_none(v)


class DonationOut(BaseModel):
    donation_id: int
    club: str
    donor_name: str
    donor_contact: Optional[str] = None
    amount: Optional[int] = None
    in_kind_nature: Optional[str] = None
    donation_date: date
    description: Optional[str] = None
    receipt_url: Optional[str] = None

    class Config:
        from_attributes = True


class ClubBalanceOut(BaseModel):
    club: str
    donations_total: int
    expenses_total: int
    balance: int
