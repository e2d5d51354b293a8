from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional, Literal

MemberStatusLiteral = Literal["ACTIVE", "INACTIVE", "SUSPENDED"]


class MemberCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=150)
    last_name: str = Field(..., min_length=1, max_length=100)
    first_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = None
    photo_url: Optional[str] = None
    monthly_due_amount: int = Field(0, ge=0)
    join_date: Optional[date] = None

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return str(v).strip().lower()

    @field_validator("phone", "photo_url", mode="before")
    def empty_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class MemberUpdate(BaseModel):
    # status is NOT editable here, see /members/{id}/status
    email: Optional[str] = Field(None, min_length=3, max_length=150)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    photo_url: Optional[str] = None
    monthly_due_amount: Optional[int] = Field(None, ge=0)
    join_date: Optional[date] = None

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return str(v).strip().lower() if v is not None else None

    @field_validator("last_name", "first_name", mode="before")
    def strip_names(cls, v):
        return str(v).strip() if v is not None else None


class MemberStatusChange(BaseModel):
    new_status: MemberStatusLiteral
    reason: Optional[str] = None


class MemberOut(BaseModel):
    member_id: int
    email: str
    last_name: str
    first_name: str
    full_name: str
    phone: Optional[str] = None
    photo_url: Optional[str] = None
    status: str
    monthly_due_amount: int
    join_date: date

    class Config:
        from_attributes = True


class StatusHistoryOut(BaseModel):
    history_id: int
    member_id: int
    old_status: str
    new_status: str
    reason: Optional[str] = None
    changed_by: Optional[str] = None
    changed_on: Optional[datetime] = None

    class Config:
        from_attributes = True


class MemberMiniOut(BaseModel):
    member_id: int
    last_name: str
    first_name: str
    photo_url: Optional[str] = None

    class Config:
        from_attributes = True
