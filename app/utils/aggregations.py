"""
Read-side rollups over already-loaded records (full in-memory scan).

Each function takes plain sequences of model instances (anything exposing the
same attribute names works) and returns a dict ready for a response schema.
"""
from collections import Counter, defaultdict
from datetime import date
from typing import Iterable, Sequence

from app.utils.ledger_calculations import percentage
from app.utils.obligation_status import (
    OVERDUE,
    AidStatus,
    CotisationStatus,
    DebtStatus,
    LoanStatus,
    SanctionCategory,
    SanctionStatus,
    SavingsStatus,
    cotisation_status,
    loan_display_status,
)


def derived_cotisation_status(c) -> str:
    return cotisation_status(
        c.expected_amount, c.paid_amount, c.oil_paid, c.soap_paid, c.sport_fund_paid
    )


def summarize_cotisations(cotisations: Sequence) -> dict:
    counts = Counter(derived_cotisation_status(c) for c in cotisations)
    expected_total = sum(c.expected_amount or 0 for c in cotisations)
    paid_total = sum(c.paid_amount or 0 for c in cotisations)

    return {
        "total": len(cotisations),
        "paid": counts.get(CotisationStatus.PAID, 0),
        "partial": counts.get(CotisationStatus.PARTIAL, 0),
        "unpaid": counts.get(CotisationStatus.UNPAID, 0),
        "expected_total": expected_total,
        "paid_total": paid_total,
        "recovery_rate": percentage(paid_total, expected_total),
    }


def summarize_cotisations_by_month(cotisations: Sequence, year: int) -> dict:
    by_month = defaultdict(list)
    for c in cotisations:
        if c.year == year:
            by_month[c.month].append(c)

    months = []
    for month in range(1, 13):
        row = summarize_cotisations(by_month.get(month, []))
        row["month"] = month
        months.append(row)

    totals = summarize_cotisations([c for c in cotisations if c.year == year])
    return {"year": year, "months": months, "totals": totals}


def summarize_loans(loans: Sequence, today: date) -> dict:
    counts = Counter(loan_display_status(l.status, l.due_date, today) for l in loans)
    open_loans = [l for l in loans if l.status in LoanStatus.OPEN]

    return {
        "total": len(loans),
        "active": counts.get(LoanStatus.ACTIVE, 0),
        "renewed": counts.get(LoanStatus.RENEWED, 0),
        "repaid": counts.get(LoanStatus.REPAID, 0),
        "overdue": counts.get(OVERDUE, 0),
        "capital_in_progress": sum(l.principal_amount or 0 for l in open_loans),
        "interest_total": sum(l.interest_amount or 0 for l in loans),
    }


def summarize_sanctions(sanctions: Sequence, category_of=None) -> dict:
    """`category_of(sanction)` resolves the type category; defaults to sanction.sanction_type.category."""
    if category_of is None:
        def category_of(s):
            return s.sanction_type.category if s.sanction_type else None

    status_counts = Counter(s.status for s in sanctions)
    category_counts = Counter(category_of(s) for s in sanctions)

    return {
        "total": len(sanctions),
        "unpaid": status_counts.get(SanctionStatus.UNPAID, 0),
        "paid": status_counts.get(SanctionStatus.PAID, 0),
        "cancelled": status_counts.get(SanctionStatus.CANCELLED, 0),
        "unpaid_total": sum(s.amount or 0 for s in sanctions if s.status == SanctionStatus.UNPAID),
        "by_category": {cat: category_counts.get(cat, 0) for cat in SanctionCategory.ALL},
    }


def unpaid_sanction_counts(sanctions: Iterable) -> Counter:
    return Counter(s.member_id for s in sanctions if s.status == SanctionStatus.UNPAID)


def suspension_candidates(sanctions: Iterable, threshold: int) -> list[tuple[int, int]]:
    """(member_id, unpaid_count) for members strictly above the threshold, worst first."""
    counts = unpaid_sanction_counts(sanctions)
    flagged = [(member_id, n) for member_id, n in counts.items() if n > threshold]
    return sorted(flagged, key=lambda x: (-x[1], x[0]))


def summarize_aids(aids: Sequence, debts: Sequence) -> dict:
    granted = [a for a in aids if a.status == AidStatus.GRANTED]
    debts_open = [d for d in debts if d.status == DebtStatus.IN_PROGRESS]

    return {
        "total": len(aids),
        "granted": len(granted),
        "repaid": sum(1 for a in aids if a.status == AidStatus.REPAID),
        "amount_total": sum(a.amount or 0 for a in aids),
        "amount_granted": sum(a.amount or 0 for a in granted),
        "debts_in_progress": len(debts_open),
        "debts_remaining_total": sum(d.remaining_amount or 0 for d in debts_open),
    }


def summarize_savings(deposits: Sequence) -> dict:
    active = [d for d in deposits if d.status == SavingsStatus.ACTIVE]
    return {
        "total": len(deposits),
        "active": len(active),
        "repaid": sum(1 for d in deposits if d.status == SavingsStatus.REPAID),
        "active_total": sum(d.amount or 0 for d in active),
        "interest_distributed": sum(d.interest_received or 0 for d in deposits),
    }


def distribute_interest(deposits: Sequence, interest_pool: int) -> list[dict]:
    """
    Pro-rata split of `interest_pool` over ACTIVE deposits.

    Shares are floored; the leftover FCFA go one by one to the largest
    deposits so the shares always add up to the pool.
    """
    active = [d for d in deposits if d.status == SavingsStatus.ACTIVE and (d.amount or 0) > 0]
    base = sum(d.amount for d in active)
    if base <= 0 or interest_pool <= 0:
        return [{"deposit_id": d.deposit_id, "member_id": d.member_id, "amount": d.amount, "share": 0}
                for d in active]

    rows = []
    for d in active:
        rows.append({
            "deposit_id": d.deposit_id,
            "member_id": d.member_id,
            "amount": d.amount,
            "share": (interest_pool * d.amount) // base,
        })

    leftover = interest_pool - sum(r["share"] for r in rows)
    for r in sorted(rows, key=lambda r: (-r["amount"], r["deposit_id"]))[:leftover]:
        r["share"] += 1

    return rows
