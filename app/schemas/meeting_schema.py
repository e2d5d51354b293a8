from pydantic import BaseModel, Field
from datetime import date, time
from typing import Optional, Literal

from app.schemas.member_schema import MemberMiniOut

ReportStatusLiteral = Literal["DRAFT", "FINALIZED", "APPROVED"]
ItemTypeLiteral = Literal["DISCUSSION", "DECISION", "INFORMATION", "VOTE"]
ResolutionTypeLiteral = Literal["DECISION", "RECOMMENDATION", "ACTION"]
ResolutionStatusLiteral = Literal["IN_PROGRESS", "DONE", "POSTPONED", "CANCELLED"]
HostingStatusLiteral = Literal["PLANNED", "CONFIRMED", "POSTPONED", "CANCELLED"]


class ReportCreate(BaseModel):
    meeting_date: date
    place: str = Field(..., min_length=1, max_length=200)
    host_member_id: Optional[int] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    present_count: int = Field(0, ge=0)
    absent_count: int = Field(0, ge=0)
    document_url: Optional[str] = None


class ReportUpdate(BaseModel):
    place: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    present_count: Optional[int] = Field(None, ge=0)
    absent_count: Optional[int] = Field(None, ge=0)
    document_url: Optional[str] = None


class ReportStatusIn(BaseModel):
    status: ReportStatusLiteral


class ResolutionCreate(BaseModel):
    text: str = Field(..., min_length=1)
    resolution_type: ResolutionTypeLiteral = "DECISION"
    responsible_member_id: Optional[int] = None
    deadline: Optional[date] = None


class ResolutionUpdate(BaseModel):
    text: Optional[str] = None
    responsible_member_id: Optional[int] = None
    deadline: Optional[date] = None
    status: Optional[ResolutionStatusLiteral] = None


class ResolutionOut(BaseModel):
    resolution_id: int
    item_id: int
    text: str
    resolution_type: str
    responsible_member_id: Optional[int] = None
    deadline: Optional[date] = None
    status: str

    class Config:
        from_attributes = True


class AgendaItemCreate(BaseModel):
    # None -> next number on the report
    item_number: Optional[int] = Field(None, ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    item_type: ItemTypeLiteral = "DISCUSSION"


class AgendaItemOut(BaseModel):
    item_id: int
    report_id: int
    item_number: int
    title: str
    description: Optional[str] = None
    item_type: str
    resolutions: list[ResolutionOut] = []

    class Config:
        from_attributes = True


class ReportOut(BaseModel):
    report_id: int
    meeting_date: date
    place: str
    host_member_id: Optional[int] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    present_count: int
    absent_count: int
    status: str
    document_url: Optional[str] = None
    written_by: Optional[str] = None
    host: Optional[MemberMiniOut] = None
    agenda_items: list[AgendaItemOut] = []

    class Config:
        from_attributes = True


class ScheduleCreate(BaseModel):
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    host_member_id: int
    place: Optional[str] = None
    planned_date: Optional[date] = None
    notes: Optional[str] = None


class ScheduleUpdate(BaseModel):
    host_member_id: Optional[int] = None
    place: Optional[str] = None
    planned_date: Optional[date] = None
    actual_date: Optional[date] = None
    status: Optional[HostingStatusLiteral] = None
    notes: Optional[str] = None


class ScheduleOut(BaseModel):
    schedule_id: int
    month: int
    year: int
    host_member_id: int
    place: Optional[str] = None
    planned_date: Optional[date] = None
    actual_date: Optional[date] = None
    status: str
    notes: Optional[str] = None
    host: Optional[MemberMiniOut] = None

    class Config:
        from_attributes = True
