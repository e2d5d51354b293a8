from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import get_actor
from app.core.clock import get_today
from app.services import sport_service
from app.utils.database import get_db
from app.schemas.sport_schema import (
    AdherentCreate,
    AdherentOut,
    CardCreate,
    CardOut,
    ClubBalanceOut,
    DonationCreate,
    DonationOut,
    ExpenseCreate,
    ExpenseOut,
    MatchCreate,
    MatchOut,
    ScoreIn,
    SessionCancel,
    SessionCreate,
    SessionOut,
)

router = APIRouter(prefix="/sport", tags=["Sport"])


# =====================================================
# 🔹 PHOENIX ADHERENTS
# =====================================================
@router.get("/adherents", response_model=list[AdherentOut])
def list_adherents(status: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return sport_service.list_adherents(db, status=status)


@router.post("/adherents", response_model=AdherentOut, status_code=status.HTTP_201_CREATED)
def create_adherent(payload: AdherentCreate, db: Session = Depends(get_db), today=Depends(get_today)):
    return sport_service.create_adherent(db, payload, today)


@router.post("/adherents/{adherent_id}/pay/{what}", response_model=AdherentOut)
def mark_adherent_paid(
    adherent_id: int,
    what: Literal["membership_fee", "sovereign_fund"],
    db: Session = Depends(get_db),
):
    return sport_service.mark_adherent_paid(db, adherent_id, what)


# =====================================================
# 🔹 TRAINING SESSIONS
# =====================================================
@router.get("/sessions", response_model=list[SessionOut])
def list_sessions(club: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return sport_service.list_sessions(db, club=club)


@router.post("/sessions", response_model=SessionOut, status_code=status.HTTP_201_CREATED)
def create_session(payload: SessionCreate, db: Session = Depends(get_db)):
    return sport_service.create_session(db, payload.model_dump())


@router.post("/sessions/{session_id}/cancel", response_model=SessionOut)
def cancel_session(session_id: int, payload: SessionCancel, db: Session = Depends(get_db)):
    return sport_service.cancel_session(db, session_id, payload.reason)


# =====================================================
# 🔹 MATCHES
# =====================================================
@router.get("/matches", response_model=list[MatchOut])
def list_matches(club: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return sport_service.list_matches(db, club=club)


@router.post("/matches", response_model=MatchOut, status_code=status.HTTP_201_CREATED)
def create_match(payload: MatchCreate, db: Session = Depends(get_db)):
    return sport_service.create_match(db, payload.model_dump())


@router.get("/matches/{match_id}", response_model=MatchOut)
def get_match(match_id: int, db: Session = Depends(get_db)):
    return sport_service.get_match(db, match_id)


@router.post("/matches/{match_id}/score", response_model=MatchOut)
def record_score(match_id: int, payload: ScoreIn, db: Session = Depends(get_db)):
    return sport_service.record_score(db, match_id, payload.team_score, payload.opponent_score)


@router.post("/matches/{match_id}/cards", response_model=CardOut, status_code=status.HTTP_201_CREATED)
def record_card(
    match_id: int,
    payload: CardCreate,
    db: Session = Depends(get_db),
    today=Depends(get_today),
    actor: Optional[str] = Depends(get_actor),
):
    return sport_service.record_card(db, match_id, payload.member_id, payload.color, today, actor=actor)


# =====================================================
# 🔹 EXPENSES / DONATIONS / BALANCE
# =====================================================
@router.get("/expenses", response_model=list[ExpenseOut])
def list_expenses(club: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return sport_service.list_expenses(db, club=club)


@router.post("/expenses", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_expense(
    payload: ExpenseCreate,
    db: Session = Depends(get_db),
    actor: Optional[str] = Depends(get_actor),
):
    return sport_service.create_expense(db, payload.model_dump(), actor=actor)


@router.get("/donations", response_model=list[DonationOut])
def list_donations(club: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return sport_service.list_donations(db, club=club)


@router.post("/donations", response_model=DonationOut, status_code=status.HTTP_201_CREATED)
def create_donation(payload: DonationCreate, db: Session = Depends(get_db)):
    return sport_service.create_donation(db, payload.model_dump())


@router.get("/balance/{club}", response_model=ClubBalanceOut)
def club_balance(club: Literal["E2D", "PHOENIX"], db: Session = Depends(get_db)):
    return sport_service.club_balance(db, club)
