from datetime import date
from types import SimpleNamespace as Row

from app.utils.aggregations import (
    distribute_interest,
    summarize_cotisations,
    summarize_cotisations_by_month,
    summarize_loans,
    summarize_sanctions,
    suspension_candidates,
)


def cot(member_id, paid, expected=10000, flags=True, month=3, year=2025):
    return Row(member_id=member_id, month=month, year=year, expected_amount=expected, paid_amount=paid,
               oil_paid=flags, soap_paid=flags, sport_fund_paid=flags)


def test_cotisation_summary_recovery_rate():
    rows = [cot(1, 10000), cot(2, 10000), cot(3, 10000), cot(4, 0, flags=False)]
    s = summarize_cotisations(rows)
    assert s["total"] == 4
    assert s["paid"] == 3
    assert s["unpaid"] == 1
    assert s["expected_total"] == 40000
    assert s["paid_total"] == 30000
    assert s["recovery_rate"] == 75.0


def test_cotisation_summary_empty_period():
    s = summarize_cotisations([])
    assert s["total"] == 0
    assert s["recovery_rate"] == 0.0


def test_cotisation_summary_by_month():
    rows = [cot(1, 10000, month=1), cot(2, 5000, month=1), cot(1, 10000, month=2), cot(1, 10000, year=2024)]
    s = summarize_cotisations_by_month(rows, 2025)
    assert len(s["months"]) == 12
    assert s["months"][0]["total"] == 2
    assert s["months"][0]["partial"] == 1
    assert s["months"][1]["total"] == 1
    assert s["months"][2]["total"] == 0
    assert s["totals"]["total"] == 3


def test_loan_summary_counts_overdue_separately():
    today = date(2025, 3, 15)
    loans = [
        Row(status="ACTIVE", due_date=date(2025, 5, 1), principal_amount=100000, interest_amount=5000),
        Row(status="ACTIVE", due_date=date(2025, 3, 1), principal_amount=50000, interest_amount=2500),
        Row(status="RENEWED", due_date=date(2025, 4, 1), principal_amount=20000, interest_amount=1000),
        Row(status="REPAID", due_date=date(2025, 1, 1), principal_amount=10000, interest_amount=500),
    ]
    s = summarize_loans(loans, today)
    assert s["active"] == 1
    assert s["overdue"] == 1
    assert s["renewed"] == 1
    assert s["repaid"] == 1
    assert s["capital_in_progress"] == 170000
    assert s["interest_total"] == 9000


def test_sanction_summary_by_category():
    meeting = Row(category="MEETING")
    sport = Row(category="SPORT_E2D")
    rows = [
        Row(member_id=1, status="UNPAID", amount=1000, sanction_type=meeting),
        Row(member_id=1, status="PAID", amount=2000, sanction_type=meeting),
        Row(member_id=2, status="UNPAID", amount=5000, sanction_type=sport),
        Row(member_id=2, status="CANCELLED", amount=5000, sanction_type=sport),
    ]
    s = summarize_sanctions(rows)
    assert s["unpaid"] == 2
    assert s["unpaid_total"] == 6000
    assert s["by_category"]["MEETING"] == 2
    assert s["by_category"]["SPORT_E2D"] == 2
    assert s["by_category"]["DISCIPLINARY"] == 0


def test_suspension_candidates_strictly_above_threshold():
    rows = [Row(member_id=1, status="UNPAID")] * 4 + [Row(member_id=2, status="UNPAID")] * 3 \
        + [Row(member_id=3, status="PAID")] * 9
    assert suspension_candidates(rows, 3) == [(1, 4)]
    assert suspension_candidates(rows, 2) == [(1, 4), (2, 3)]


def test_interest_distribution_adds_up_to_pool():
    deposits = [
        Row(deposit_id=1, member_id=1, amount=100000, status="ACTIVE"),
        Row(deposit_id=2, member_id=2, amount=50000, status="ACTIVE"),
        Row(deposit_id=3, member_id=3, amount=50000, status="ACTIVE"),
        Row(deposit_id=4, member_id=4, amount=80000, status="REPAID"),
    ]
    rows = distribute_interest(deposits, 10001)
    shares = {r["deposit_id"]: r["share"] for r in rows}
    assert set(shares) == {1, 2, 3}
    assert sum(shares.values()) == 10001
    assert shares[1] == 5001
    assert shares[2] == 2500


def test_interest_distribution_without_pool():
    deposits = [Row(deposit_id=1, member_id=1, amount=1000, status="ACTIVE")]
    assert distribute_interest(deposits, 0)[0]["share"] == 0
