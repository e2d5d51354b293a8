import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, InvalidTransitionError
from app.models.meeting_model import AgendaItem, HostingSchedule, MeetingReport, Resolution
from app.repositories import gateways
from app.services.common import get_member, require, unwrap

logger = logging.getLogger(__name__)

REPORT_FLOW = ("DRAFT", "FINALIZED", "APPROVED")
UPCOMING_HOSTING = ("PLANNED", "CONFIRMED")


# =====================================================
# Reports
# =====================================================
def get_report(db: Session, report_id: int) -> MeetingReport:
    return require(gateways.meeting_reports(db), report_id, "Meeting report")


def list_reports(db: Session, status: str = None) -> list[MeetingReport]:
    return unwrap(gateways.meeting_reports(db).get_by_period(status=status))


def create_report(db: Session, fields: dict, actor: Optional[str] = None) -> MeetingReport:
    if fields.get("host_member_id") is not None:
        get_member(db, fields["host_member_id"])

    obj = unwrap(gateways.meeting_reports(db).create({**fields, "status": "DRAFT", "written_by": actor}))
    logger.info("meeting report %s drafted for %s", obj.report_id, obj.meeting_date)
    return obj


def update_report(db: Session, report_id: int, changes: dict) -> MeetingReport:
    report = get_report(db, report_id)
    if report.status == "APPROVED":
        raise InvalidTransitionError("An approved report can no longer be edited")
    if not changes:
        return report
    return unwrap(gateways.meeting_reports(db).update(report_id, changes))


def advance_report(db: Session, report_id: int, new_status: str) -> MeetingReport:
    """Forward only: DRAFT -> FINALIZED -> APPROVED, one step at a time."""
    report = get_report(db, report_id)
    current = REPORT_FLOW.index(report.status)
    if new_status not in REPORT_FLOW or REPORT_FLOW.index(new_status) != current + 1:
        raise InvalidTransitionError(f"Report cannot move from {report.status} to {new_status}")

    obj = unwrap(gateways.meeting_reports(db).update(report_id, {"status": new_status}))
    logger.info("meeting report %s: %s -> %s", report_id, report.status, new_status)
    return obj


def add_agenda_item(db: Session, report_id: int, fields: dict) -> AgendaItem:
    report = get_report(db, report_id)
    if report.status == "APPROVED":
        raise InvalidTransitionError("An approved report can no longer be edited")

    number = fields.get("item_number") or (max((i.item_number for i in report.agenda_items), default=0) + 1)
    obj = unwrap(gateways.agenda_items(db).create({**fields, "report_id": report_id, "item_number": number}))
    logger.info("agenda item %s.%s added", report_id, number)
    return obj


def add_resolution(db: Session, item_id: int, fields: dict) -> Resolution:
    require(gateways.agenda_items(db), item_id, "Agenda item")
    if fields.get("responsible_member_id") is not None:
        get_member(db, fields["responsible_member_id"])

    obj = unwrap(gateways.resolutions(db).create({**fields, "item_id": item_id, "status": "IN_PROGRESS"}))
    logger.info("resolution %s recorded on agenda item %s", obj.resolution_id, item_id)
    return obj


def update_resolution(db: Session, resolution_id: int, changes: dict) -> Resolution:
    require(gateways.resolutions(db), resolution_id, "Resolution")
    return unwrap(gateways.resolutions(db).update(resolution_id, changes))


# =====================================================
# Hosting calendar
# =====================================================
def list_schedule(db: Session, year: int = None) -> list[HostingSchedule]:
    return unwrap(gateways.hosting_schedule(db).get_by_period(year=year))


def schedule_host(db: Session, fields: dict) -> HostingSchedule:
    get_member(db, fields["host_member_id"])
    if unwrap(gateways.hosting_schedule(db).get_by_period(month=fields["month"], year=fields["year"])):
        raise ConflictError("A host is already scheduled for this month")

    obj = unwrap(gateways.hosting_schedule(db).create({**fields, "status": "PLANNED"}))
    logger.info("member %s hosts %02d/%s", obj.host_member_id, obj.month, obj.year)
    return obj


def update_schedule(db: Session, schedule_id: int, changes: dict) -> HostingSchedule:
    require(gateways.hosting_schedule(db), schedule_id, "Hosting schedule")
    if changes.get("host_member_id") is not None:
        get_member(db, changes["host_member_id"])
    return unwrap(gateways.hosting_schedule(db).update(schedule_id, changes))


def next_meeting(db: Session, today: date) -> Optional[HostingSchedule]:
    upcoming = [
        h for h in list_schedule(db)
        if h.status in UPCOMING_HOSTING and (h.year, h.month) >= (today.year, today.month)
    ]
    if not upcoming:
        return None
    return min(upcoming, key=lambda h: (h.year, h.month))
