from pydantic import BaseModel
from datetime import date
from typing import Optional, Literal


class SuspensionCandidateOut(BaseModel):
    member_id: int
    full_name: Optional[str] = None
    status: Optional[str] = None
    unpaid_count: int
    unpaid_total: int


class SuspensionCandidatesOut(BaseModel):
    threshold: int
    candidates: list[SuspensionCandidateOut]


class WatchListRow(BaseModel):
    kind: Literal["LOAN", "AID", "DEBT"]
    record_id: int
    member_id: Optional[int] = None
    full_name: Optional[str] = None
    due_date: date
    # negative once overdue
    days_left: int
    amount: int
    overdue: bool


class NextMeetingOut(BaseModel):
    month: int
    year: int
    label: str
    host_member_id: int
    host_name: Optional[str] = None
    place: Optional[str] = None
    planned_date: Optional[date] = None
    status: str


class DashboardOut(BaseModel):
    as_of: date
    association_name: str
    members_total: int
    members_active: int
    members_paid_this_month: int
    unpaid_sanctions: int
    unpaid_sanctions_total: int
    loans_open: int
    loans_overdue: int
    capital_in_progress: int
    next_meeting: Optional[NextMeetingOut] = None
