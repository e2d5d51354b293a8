from sqlalchemy.orm import Session

from app.models import (
    AgendaItem,
    AidType,
    Configuration,
    Cotisation,
    DebtPayment,
    HostingSchedule,
    Loan,
    Match,
    MatchCard,
    MeetingReport,
    Member,
    MemberStatusHistory,
    PhoenixAdherent,
    Resolution,
    SanctionType,
    Sanction,
    SavingsDeposit,
    SocialAid,
    SovereignFundDebt,
    SportDonation,
    SportExpense,
    TrainingSession,
)
from app.repositories.gateway import Gateway


def members(db: Session) -> Gateway:
    return Gateway(db, Member, order_by=(Member.last_name.asc(), Member.first_name.asc()))


def member_status_history(db: Session) -> Gateway:
    return Gateway(db, MemberStatusHistory, member_field="member_id",
                   order_by=MemberStatusHistory.history_id.desc())


def cotisations(db: Session) -> Gateway:
    return Gateway(db, Cotisation, member_field="member_id",
                   order_by=(Cotisation.year.desc(), Cotisation.month.desc(), Cotisation.cotisation_id.desc()))


def loans(db: Session) -> Gateway:
    return Gateway(db, Loan, member_field="borrower_id",
                   order_by=(Loan.grant_date.desc(), Loan.loan_id.desc()))


def sanction_types(db: Session) -> Gateway:
    return Gateway(db, SanctionType, order_by=(SanctionType.category.asc(), SanctionType.name.asc()))


def sanctions(db: Session) -> Gateway:
    return Gateway(db, Sanction, member_field="member_id",
                   order_by=(Sanction.sanction_date.desc(), Sanction.sanction_id.desc()))


def aid_types(db: Session) -> Gateway:
    return Gateway(db, AidType, order_by=AidType.name.asc())


def social_aids(db: Session) -> Gateway:
    return Gateway(db, SocialAid, member_field="beneficiary_id",
                   order_by=(SocialAid.grant_date.desc(), SocialAid.aid_id.desc()))


def debts(db: Session) -> Gateway:
    return Gateway(db, SovereignFundDebt, member_field="member_id",
                   order_by=(SovereignFundDebt.due_date.asc(), SovereignFundDebt.debt_id.asc()))


def debt_payments(db: Session) -> Gateway:
    return Gateway(db, DebtPayment, order_by=DebtPayment.payment_id.asc())


def savings(db: Session) -> Gateway:
    return Gateway(db, SavingsDeposit, member_field="member_id",
                   order_by=(SavingsDeposit.deposit_date.desc(), SavingsDeposit.deposit_id.desc()))


def configurations(db: Session) -> Gateway:
    return Gateway(db, Configuration, order_by=(Configuration.category.asc(), Configuration.key.asc()))


# -------------------------------------------------
# Sport
# -------------------------------------------------
def phoenix_adherents(db: Session) -> Gateway:
    return Gateway(db, PhoenixAdherent, member_field="member_id",
                   order_by=(PhoenixAdherent.last_name.asc(), PhoenixAdherent.first_name.asc()))


def training_sessions(db: Session) -> Gateway:
    return Gateway(db, TrainingSession, order_by=TrainingSession.session_date.desc())


def matches(db: Session) -> Gateway:
    return Gateway(db, Match, order_by=(Match.match_date.desc(), Match.match_id.desc()))


def match_cards(db: Session) -> Gateway:
    return Gateway(db, MatchCard, member_field="member_id", order_by=MatchCard.card_id.asc())


def sport_expenses(db: Session) -> Gateway:
    return Gateway(db, SportExpense, order_by=SportExpense.expense_date.desc())


def sport_donations(db: Session) -> Gateway:
    return Gateway(db, SportDonation, order_by=SportDonation.donation_date.desc())


# -------------------------------------------------
# Meetings
# -------------------------------------------------
def meeting_reports(db: Session) -> Gateway:
    return Gateway(db, MeetingReport, order_by=MeetingReport.meeting_date.desc())


def agenda_items(db: Session) -> Gateway:
    return Gateway(db, AgendaItem, order_by=AgendaItem.item_number.asc())


def resolutions(db: Session) -> Gateway:
    return Gateway(db, Resolution, member_field="responsible_member_id",
                   order_by=Resolution.resolution_id.asc())


def hosting_schedule(db: Session) -> Gateway:
    return Gateway(db, HostingSchedule, member_field="host_member_id",
                   order_by=(HostingSchedule.year.asc(), HostingSchedule.month.asc()))
