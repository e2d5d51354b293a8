from datetime import date

from sqlalchemy.orm import Session

from app.repositories import gateways
from app.services import configuration_service, meeting_service
from app.services.common import unwrap
from app.utils import aggregations
from app.utils.formatting import period_label
from app.utils.ledger_calculations import days_until
from app.utils.obligation_status import (
    AidStatus,
    CotisationStatus,
    DebtStatus,
    LoanStatus,
    MemberStatus,
    SanctionStatus,
    is_due_soon,
    is_loan_due_soon,
    is_overdue,
)

SUSPENSION_THRESHOLD_KEY = "sanction_suspension_threshold"
DEFAULT_SUSPENSION_THRESHOLD = 3


# =====================================================
# Cotisations
# =====================================================
def cotisation_period_summary(db: Session, month: int, year: int) -> dict:
    rows = unwrap(gateways.cotisations(db).get_by_period(month=month, year=year))
    summary = aggregations.summarize_cotisations(rows)
    summary.update({"month": month, "year": year, "label": period_label(month, year)})
    return summary


def cotisation_exercise_summary(db: Session, year: int) -> dict:
    rows = unwrap(gateways.cotisations(db).get_by_period(year=year))
    return aggregations.summarize_cotisations_by_month(rows, year)


# =====================================================
# Obligations
# =====================================================
def loan_stats(db: Session, today: date) -> dict:
    return aggregations.summarize_loans(unwrap(gateways.loans(db).get_all()), today)


def sanction_stats(db: Session) -> dict:
    return aggregations.summarize_sanctions(unwrap(gateways.sanctions(db).get_all()))


def aid_stats(db: Session) -> dict:
    aids = unwrap(gateways.social_aids(db).get_all())
    debts = unwrap(gateways.debts(db).get_all())
    return aggregations.summarize_aids(aids, debts)


def savings_stats(db: Session, exercise: int) -> dict:
    deposits = unwrap(gateways.savings(db).get_by_period(exercise=exercise))
    stats = aggregations.summarize_savings(deposits)
    stats["exercise"] = exercise
    return stats


def suspension_candidates(db: Session) -> dict:
    """Members above the unpaid-sanction threshold. Listing only, nobody is suspended here."""
    threshold = int(configuration_service.get_value_or(db, SUSPENSION_THRESHOLD_KEY, DEFAULT_SUSPENSION_THRESHOLD))
    sanctions = unwrap(gateways.sanctions(db).get_by_period(status=SanctionStatus.UNPAID))

    members = {m.member_id: m for m in unwrap(gateways.members(db).get_all())}
    candidates = []
    for member_id, count in aggregations.suspension_candidates(sanctions, threshold):
        m = members.get(member_id)
        candidates.append({
            "member_id": member_id,
            "full_name": m.full_name if m else None,
            "status": m.status if m else None,
            "unpaid_count": count,
            "unpaid_total": sum(s.amount or 0 for s in sanctions if s.member_id == member_id),
        })
    return {"threshold": threshold, "candidates": candidates}


# =====================================================
# Due dates
# =====================================================
def _watch_row(kind: str, record_id: int, member, due: date, amount: int, today: date, overdue: bool) -> dict:
    return {
        "kind": kind,
        "record_id": record_id,
        "member_id": member.member_id if member else None,
        "full_name": member.full_name if member else None,
        "due_date": due,
        "days_left": days_until(due, today),
        "amount": amount,
        "overdue": overdue,
    }


def watch_list(db: Session, today: date) -> list[dict]:
    """Open obligations that are overdue or entering their due-soon window, soonest first."""
    rows = []

    for l in unwrap(gateways.loans(db).get_all()):
        if l.status not in LoanStatus.OPEN:
            continue
        overdue = is_overdue(l.due_date, l.status, LoanStatus.OPEN, today)
        if overdue or is_loan_due_soon(l.due_date, today):
            rows.append(_watch_row("LOAN", l.loan_id, l.borrower, l.due_date,
                                   (l.principal_amount or 0) + (l.interest_amount or 0), today, overdue))

    for a in unwrap(gateways.social_aids(db).get_all()):
        if a.status not in AidStatus.OPEN or a.repayment_due_date is None:
            continue
        overdue = is_overdue(a.repayment_due_date, a.status, AidStatus.OPEN, today)
        if overdue or is_due_soon(a.repayment_due_date, today):
            rows.append(_watch_row("AID", a.aid_id, a.beneficiary, a.repayment_due_date, a.amount, today, overdue))

    for d in unwrap(gateways.debts(db).get_all()):
        if d.status not in DebtStatus.OPEN or d.due_date is None:
            continue
        overdue = is_overdue(d.due_date, d.status, DebtStatus.OPEN, today)
        if overdue or is_due_soon(d.due_date, today):
            rows.append(_watch_row("DEBT", d.debt_id, d.member, d.due_date, d.remaining_amount, today, overdue))

    rows.sort(key=lambda r: (r["due_date"], r["kind"], r["record_id"]))
    return rows


# =====================================================
# Dashboard
# =====================================================
def dashboard(db: Session, today: date) -> dict:
    members = unwrap(gateways.members(db).get_all())
    month_rows = unwrap(gateways.cotisations(db).get_by_period(month=today.month, year=today.year))
    unpaid = unwrap(gateways.sanctions(db).get_by_period(status=SanctionStatus.UNPAID))
    loans = aggregations.summarize_loans(unwrap(gateways.loans(db).get_all()), today)

    fully_paid = {
        c.member_id for c in month_rows
        if aggregations.derived_cotisation_status(c) == CotisationStatus.PAID
    }

    upcoming = meeting_service.next_meeting(db, today)
    next_meeting = None
    if upcoming is not None:
        next_meeting = {
            "month": upcoming.month,
            "year": upcoming.year,
            "label": period_label(upcoming.month, upcoming.year),
            "host_member_id": upcoming.host_member_id,
            "host_name": upcoming.host.full_name if upcoming.host else None,
            "place": upcoming.place,
            "planned_date": upcoming.planned_date,
            "status": upcoming.status,
        }

    return {
        "as_of": today,
        "association_name": configuration_service.get_value_or(db, "association_name", "E2D"),
        "members_total": len(members),
        "members_active": sum(1 for m in members if m.status == MemberStatus.ACTIVE),
        "members_paid_this_month": len(fully_paid),
        "unpaid_sanctions": len(unpaid),
        "unpaid_sanctions_total": sum(s.amount or 0 for s in unpaid),
        "loans_open": loans["active"] + loans["renewed"] + loans["overdue"],
        "loans_overdue": loans["overdue"],
        "capital_in_progress": loans["capital_in_progress"],
        "next_meeting": next_meeting,
    }
