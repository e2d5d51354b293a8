from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.clock import get_today
from app.services import report_service
from app.utils.database import get_db
from app.schemas.report_schema import DashboardOut, WatchListRow

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(db: Session = Depends(get_db), today=Depends(get_today)):
    return report_service.dashboard(db, today)


@router.get("/due-dates", response_model=list[WatchListRow])
def due_date_watch_list(db: Session = Depends(get_db), today=Depends(get_today)):
    """Loans due within 7 days, aids and debts within 30, plus everything overdue."""
    return report_service.watch_list(db, today)
