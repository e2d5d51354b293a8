from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from app.models.cotisation_model import Cotisation
from app.services import cotisation_service


def _pay(client, member_id, month=3, year=2025, paid=10000, flags=True, **extra):
    payload = {
        "member_id": member_id,
        "month": month,
        "year": year,
        "paid_amount": paid,
        "oil_paid": flags,
        "soap_paid": flags,
        "sport_fund_paid": flags,
    }
    payload.update(extra)
    return client.post("/cotisations/", json=payload)


def test_full_payment_is_paid_and_snapshots_due(client, make_member, auth_headers):
    m = make_member(monthly_due_amount=10000)
    r = client.post(
        "/cotisations/",
        json={"member_id": m["member_id"], "month": 3, "year": 2025, "paid_amount": 10000,
              "oil_paid": True, "soap_paid": True, "sport_fund_paid": True},
        headers=auth_headers,
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["warning"] is None
    c = body["cotisation"]
    assert c["status"] == "PAID"
    assert c["expected_amount"] == 10000
    # seeded monthly_sport_fund_amount
    assert c["sport_fund_amount"] == 2000
    assert c["recorded_by"] == "tresorier@e2d.test"
    assert c["payment_date"] == "2025-03-15"

    # raising the member's due later does not rewrite the recorded cotisation
    client.patch(f"/members/{m['member_id']}", json={"monthly_due_amount": 15000})
    again = client.get(f"/cotisations/{c['cotisation_id']}").json()
    assert again["expected_amount"] == 10000
    assert again["status"] == "PAID"


def test_underpayment_needs_acknowledgement(client, make_member):
    m = make_member(monthly_due_amount=10000)

    r = _pay(client, m["member_id"], paid=5000)
    assert r.status_code == 409
    assert "5 000 FCFA" in r.json()["detail"]
    assert client.get("/cotisations/").json() == []

    r = _pay(client, m["member_id"], paid=5000, acknowledge_underpayment=True)
    assert r.status_code == 201
    assert r.json()["warning"] is not None
    assert r.json()["cotisation"]["status"] == "PARTIAL"


def test_missing_item_makes_partial(client, make_member):
    m = make_member()
    r = _pay(client, m["member_id"], paid=10000, flags=True, soap_paid=False)
    assert r.json()["cotisation"]["status"] == "PARTIAL"


def test_zero_due_member_with_nothing_paid_is_unpaid(client, make_member):
    m = make_member(monthly_due_amount=0)
    r = _pay(client, m["member_id"], paid=0, flags=False)
    assert r.status_code == 201
    assert r.json()["cotisation"]["status"] == "UNPAID"
    assert r.json()["cotisation"]["payment_date"] is None


def test_first_payment_on_update_stamps_date(client, make_member, clock):
    m = make_member(monthly_due_amount=0)
    c = _pay(client, m["member_id"], paid=0, flags=False).json()["cotisation"]

    clock.today = date(2025, 3, 20)
    r = client.patch(f"/cotisations/{c['cotisation_id']}", json={"oil_paid": True})
    assert r.json()["payment_date"] == "2025-03-20"

    clock.today = date(2025, 3, 28)
    r = client.patch(f"/cotisations/{c['cotisation_id']}", json={"soap_paid": True})
    assert r.json()["payment_date"] == "2025-03-20"


def test_one_cotisation_per_member_and_period(client, make_member):
    m = make_member()
    assert _pay(client, m["member_id"]).status_code == 201
    assert _pay(client, m["member_id"]).status_code == 409
    assert _pay(client, m["member_id"], month=4).status_code == 201


def test_period_is_unique_in_the_database(client, make_member, db):
    m = make_member()
    db.add(Cotisation(member_id=m["member_id"], month=3, year=2025, expected_amount=10000))
    db.add(Cotisation(member_id=m["member_id"], month=3, year=2025, expected_amount=10000))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_concurrent_duplicate_is_reported_as_conflict(client, make_member, monkeypatch):
    m = make_member()
    assert _pay(client, m["member_id"]).status_code == 201

    # the other request passed the existence check before this one committed
    real = cotisation_service._period_taken
    calls = []

    def stale_check(*args):
        calls.append(args)
        return False if len(calls) == 1 else real(*args)

    monkeypatch.setattr(cotisation_service, "_period_taken", stale_check)
    r = _pay(client, m["member_id"])
    assert r.status_code == 409
    assert r.json()["detail"] == "A cotisation already exists for this member and period"
    assert len(client.get("/cotisations/", params={"member_id": m["member_id"]}).json()) == 1


def test_invalid_month_and_negative_amount(client, make_member):
    m = make_member()
    assert _pay(client, m["member_id"], month=13).status_code == 422
    assert _pay(client, m["member_id"], paid=-1).status_code == 422


def test_inactive_member_cannot_pay(client, make_member):
    m = make_member()
    client.post(f"/members/{m['member_id']}/status", json={"new_status": "INACTIVE"})
    r = _pay(client, m["member_id"])
    assert r.status_code == 404
    assert r.json()["detail"] == "Member not found / inactive"


def test_update_rederives_status(client, make_member):
    m = make_member()
    r = _pay(client, m["member_id"], paid=10000, flags=False, acknowledge_underpayment=True)
    c = r.json()["cotisation"]
    assert c["status"] == "PARTIAL"

    r = client.patch(f"/cotisations/{c['cotisation_id']}",
                     json={"oil_paid": True, "soap_paid": True, "sport_fund_paid": True})
    assert r.status_code == 200
    assert r.json()["status"] == "PAID"


def test_period_summary_recovery_rate(client, make_member):
    members = [make_member() for _ in range(4)]
    for m in members[:3]:
        _pay(client, m["member_id"])
    _pay(client, members[3]["member_id"], paid=0, flags=False, acknowledge_underpayment=True)

    s = client.get("/cotisations/summary", params={"month": 3, "year": 2025}).json()
    assert s["label"] == "Mars 2025"
    assert s["paid"] == 3
    assert s["unpaid"] == 1
    assert s["recovery_rate"] == 75.0

    year = client.get("/cotisations/summary/2025").json()
    assert year["months"][2]["total"] == 4
    assert year["totals"]["paid_total"] == 30000


def test_filter_by_derived_status(client, make_member):
    a, b = make_member(), make_member()
    _pay(client, a["member_id"])
    _pay(client, b["member_id"], paid=0, flags=False, acknowledge_underpayment=True)
    rows = client.get("/cotisations/", params={"status": "UNPAID"}).json()
    assert [r["member_id"] for r in rows] == [b["member_id"]]
