from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_actor
from app.services import meeting_service
from app.utils.database import get_db
from app.schemas.meeting_schema import (
    AgendaItemCreate,
    AgendaItemOut,
    ReportCreate,
    ReportOut,
    ReportStatusIn,
    ReportUpdate,
    ResolutionCreate,
    ResolutionOut,
    ResolutionUpdate,
    ScheduleCreate,
    ScheduleOut,
    ScheduleUpdate,
)

router = APIRouter(prefix="/meetings", tags=["Meetings"])


# ===================================================
# HOSTING CALENDAR
# ===================================================
@router.get("/schedule", response_model=list[ScheduleOut])
def list_schedule(year: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return meeting_service.list_schedule(db, year=year)


@router.post("/schedule", response_model=ScheduleOut, status_code=status.HTTP_201_CREATED)
def schedule_host(payload: ScheduleCreate, db: Session = Depends(get_db)):
    return meeting_service.schedule_host(db, payload.model_dump())


@router.patch("/schedule/{schedule_id}", response_model=ScheduleOut)
def update_schedule(schedule_id: int, payload: ScheduleUpdate, db: Session = Depends(get_db)):
    return meeting_service.update_schedule(db, schedule_id, payload.model_dump(exclude_unset=True, exclude_none=True))


# ===================================================
# REPORTS
# ===================================================
@router.get("/reports", response_model=list[ReportOut])
def list_reports(status: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return meeting_service.list_reports(db, status=status)


@router.post("/reports", response_model=ReportOut, status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    db: Session = Depends(get_db),
    actor: Optional[str] = Depends(get_actor),
):
    return meeting_service.create_report(db, payload.model_dump(), actor=actor)


@router.get("/reports/{report_id}", response_model=ReportOut)
def get_report(report_id: int, db: Session = Depends(get_db)):
    return meeting_service.get_report(db, report_id)


@router.patch("/reports/{report_id}", response_model=ReportOut)
def update_report(report_id: int, payload: ReportUpdate, db: Session = Depends(get_db)):
    return meeting_service.update_report(db, report_id, payload.model_dump(exclude_unset=True, exclude_none=True))


@router.post("/reports/{report_id}/status", response_model=ReportOut)
def advance_report(report_id: int, payload: ReportStatusIn, db: Session = Depends(get_db)):
    return meeting_service.advance_report(db, report_id, payload.status)


# --------------------------------------
# AGENDA ITEMS / RESOLUTIONS
# --------------------------------------
@router.post("/reports/{report_id}/items", response_model=AgendaItemOut, status_code=status.HTTP_201_CREATED)
def add_agenda_item(report_id: int, payload: AgendaItemCreate, db: Session = Depends(get_db)):
    return meeting_service.add_agenda_item(db, report_id, payload.model_dump())


@router.post("/items/{item_id}/resolutions", response_model=ResolutionOut, status_code=status.HTTP_201_CREATED)
def add_resolution(item_id: int, payload: ResolutionCreate, db: Session = Depends(get_db)):
    return meeting_service.add_resolution(db, item_id, payload.model_dump())


@router.patch("/resolutions/{resolution_id}", response_model=ResolutionOut)
def update_resolution(resolution_id: int, payload: ResolutionUpdate, db: Session = Depends(get_db)):
    return meeting_service.update_resolution(db, resolution_id, payload.model_dump(exclude_unset=True, exclude_none=True))
