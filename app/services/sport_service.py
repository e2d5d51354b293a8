import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidTransitionError, LedgerError
from app.models.sport_model import Match, MatchCard, PhoenixAdherent, SportDonation, SportExpense, TrainingSession
from app.repositories import gateways
from app.services import configuration_service, sanction_service
from app.services.common import get_active_member, require, unwrap
from app.utils.obligation_status import SanctionCategory

logger = logging.getLogger(__name__)

RED_CARD_TYPE_NAME = "Carton rouge"

DEFAULT_PHOENIX_FEE = 10000
DEFAULT_PHOENIX_SOVEREIGN_FUND = 5000
DEFAULT_PHOENIX_DELAY_DAYS = 30

CLUB_SANCTION_CATEGORY = {
    "E2D": SanctionCategory.SPORT_E2D,
    "PHOENIX": SanctionCategory.SPORT_PHOENIX,
}


def match_result(team_score: int, opponent_score: int) -> str:
    if team_score > opponent_score:
        return "WIN"
    if team_score < opponent_score:
        return "LOSS"
    return "DRAW"


# =====================================================
# Phoenix adherents
# =====================================================
def list_adherents(db: Session, status: str = None) -> list[PhoenixAdherent]:
    return unwrap(gateways.phoenix_adherents(db).get_by_period(status=status))


def create_adherent(db: Session, payload, today: date) -> PhoenixAdherent:
    fields = {
        "phone": payload.phone,
        "email": payload.email,
        "photo_url": payload.photo_url,
    }
    if payload.member_id is not None:
        member = get_active_member(db, payload.member_id)
        fields.update({
            "member_id": member.member_id,
            "last_name": member.last_name,
            "first_name": member.first_name,
            "phone": payload.phone or member.phone,
            "email": payload.email or member.email,
            "photo_url": payload.photo_url or member.photo_url,
        })
    else:
        if not payload.last_name or not payload.first_name:
            raise LedgerError("Last name and first name are required for an external adherent")
        fields.update({"last_name": payload.last_name, "first_name": payload.first_name})

    fee = int(configuration_service.get_value_or(db, "phoenix_membership_fee", DEFAULT_PHOENIX_FEE))
    delay = int(configuration_service.get_value_or(db, "phoenix_payment_delay_days", DEFAULT_PHOENIX_DELAY_DAYS))
    sovereign = 0
    if payload.is_organizing_committee:
        sovereign = int(configuration_service.get_value_or(
            db, "phoenix_sovereign_fund_amount", DEFAULT_PHOENIX_SOVEREIGN_FUND
        ))

    obj = unwrap(gateways.phoenix_adherents(db).create({
        **fields,
        "status": "ACTIVE",
        "join_date": today,
        "membership_fee": fee,
        "membership_fee_paid": False,
        "payment_deadline": today + timedelta(days=delay),
        "sovereign_fund_amount": sovereign,
        "sovereign_fund_paid": False,
        "is_organizing_committee": payload.is_organizing_committee,
    }))
    logger.info("phoenix adherent %s registered (%s %s)", obj.adherent_id, obj.first_name, obj.last_name)
    return obj


def mark_adherent_paid(db: Session, adherent_id: int, what: str) -> PhoenixAdherent:
    """what: 'membership_fee' or 'sovereign_fund'."""
    adherent = require(gateways.phoenix_adherents(db), adherent_id, "Adherent")
    flag = f"{what}_paid"
    if getattr(adherent, flag):
        raise InvalidTransitionError(f"{what.replace('_', ' ').capitalize()} already paid")
    if what == "sovereign_fund" and not adherent.sovereign_fund_amount:
        raise InvalidTransitionError("No sovereign fund is due by this adherent")

    obj = unwrap(gateways.phoenix_adherents(db).update(adherent_id, {flag: True}))
    logger.info("phoenix adherent %s: %s paid", adherent_id, what)
    return obj


# =====================================================
# Training sessions
# =====================================================
def list_sessions(db: Session, club: str = None) -> list[TrainingSession]:
    return unwrap(gateways.training_sessions(db).get_by_period(club=club))


def create_session(db: Session, fields: dict) -> TrainingSession:
    obj = unwrap(gateways.training_sessions(db).create({**fields, "cancelled": False}))
    logger.info("%s training session %s on %s", obj.club, obj.session_id, obj.session_date)
    return obj


def cancel_session(db: Session, session_id: int, reason: Optional[str]) -> TrainingSession:
    s = require(gateways.training_sessions(db), session_id, "Training session")
    if s.cancelled:
        raise InvalidTransitionError("Training session already cancelled")

    obj = unwrap(gateways.training_sessions(db).update(session_id, {
        "cancelled": True,
        "cancellation_reason": reason,
    }))
    logger.info("training session %s cancelled", session_id)
    return obj


# =====================================================
# Matches
# =====================================================
def get_match(db: Session, match_id: int) -> Match:
    return require(gateways.matches(db), match_id, "Match")


def list_matches(db: Session, club: str = None) -> list[Match]:
    return unwrap(gateways.matches(db).get_by_period(club=club))


def create_match(db: Session, fields: dict) -> Match:
    obj = unwrap(gateways.matches(db).create({
        **fields,
        "team_score": 0,
        "opponent_score": 0,
        "result": None,
    }))
    logger.info("%s match %s vs %s on %s", obj.club, obj.match_id, obj.opponent, obj.match_date)
    return obj


def record_score(db: Session, match_id: int, team_score: int, opponent_score: int) -> Match:
    get_match(db, match_id)
    obj = unwrap(gateways.matches(db).update(match_id, {
        "team_score": team_score,
        "opponent_score": opponent_score,
        "result": match_result(team_score, opponent_score),
    }))
    logger.info("match %s: %s-%s (%s)", match_id, team_score, opponent_score, obj.result)
    return obj


def record_card(db: Session, match_id: int, member_id: int, color: str, today: date,
                actor: Optional[str] = None) -> MatchCard:
    """A red card also opens an automatic sanction of the club's red card type, in the same commit."""
    match = get_match(db, match_id)
    get_active_member(db, member_id)

    sanction_id = None
    if color == "RED":
        stype = sanction_service.find_type(db, RED_CARD_TYPE_NAME, CLUB_SANCTION_CATEGORY[match.club])
        if stype is None:
            logger.warning("no active '%s' sanction type for %s, card recorded without sanction",
                           RED_CARD_TYPE_NAME, match.club)
        else:
            sanction = sanction_service.create_sanction(
                db,
                member_id=member_id,
                sanction_type_id=stype.sanction_type_id,
                today=today,
                reason=f"Red card vs {match.opponent} ({match.match_date:%d/%m/%Y})",
                automatic=True,
                actor=actor,
                commit=False,
            )
            sanction_id = sanction.sanction_id

    card = unwrap(gateways.match_cards(db).create({
        "match_id": match.match_id,
        "member_id": member_id,
        "color": color,
        "sanction_id": sanction_id,
    }))
    logger.info("%s card for member %s in match %s", color.lower(), member_id, match_id)
    return card


# =====================================================
# Expenses / donations
# =====================================================
def list_expenses(db: Session, club: str = None) -> list[SportExpense]:
    return unwrap(gateways.sport_expenses(db).get_by_period(club=club))


def create_expense(db: Session, fields: dict, actor: Optional[str] = None) -> SportExpense:
    obj = unwrap(gateways.sport_expenses(db).create({**fields, "approved_by": actor}))
    logger.info("%s sport expense %s: %s (%s)", obj.club, obj.expense_id, obj.amount, obj.category)
    return obj


def list_donations(db: Session, club: str = None) -> list[SportDonation]:
    return unwrap(gateways.sport_donations(db).get_by_period(club=club))


def create_donation(db: Session, fields: dict) -> SportDonation:
    if not fields.get("amount") and not fields.get("in_kind_nature"):
        raise LedgerError("A donation needs either an amount or an in-kind nature")

    obj = unwrap(gateways.sport_donations(db).create(fields))
    logger.info("%s donation %s from %s", obj.club, obj.donation_id, obj.donor_name)
    return obj


def club_balance(db: Session, club: str) -> dict:
    donations = sum(d.amount or 0 for d in list_donations(db, club))
    expenses = sum(e.amount or 0 for e in list_expenses(db, club))
    return {
        "club": club,
        "donations_total": donations,
        "expenses_total": expenses,
        "balance": donations - expenses,
    }
