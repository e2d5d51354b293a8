from datetime import date


def test_due_date_watch_list(client, make_member, aid_type_id, clock):
    m = make_member(last_name="Mballa")
    soon = client.post("/loans/", json={"borrower_id": m["member_id"], "principal_amount": 10000}).json()

    clock.today = date(2025, 1, 2)
    late = client.post("/loans/", json={"borrower_id": m["member_id"], "principal_amount": 20000}).json()
    done = client.post("/loans/", json={"borrower_id": m["member_id"], "principal_amount": 30000}).json()
    client.post(f"/loans/{done['loan_id']}/repay")

    clock.today = date(2025, 2, 20)
    aid = client.post("/aids/", json={"beneficiary_id": m["member_id"], "aid_type_id": aid_type_id("Naissance"),
                                      "amount": 30000}).json()
    # Naissance: 6 months -> due 2025-08-20

    clock.today = date(2025, 5, 10)
    rows = client.get("/reports/due-dates").json()
    loans = {r["record_id"]: r for r in rows if r["kind"] == "LOAN"}

    assert set(loans) == {soon["loan_id"], late["loan_id"]}
    assert loans[late["loan_id"]]["overdue"] is True
    assert loans[soon["loan_id"]]["overdue"] is False
    assert loans[soon["loan_id"]]["days_left"] == 5
    assert loans[soon["loan_id"]]["amount"] == 10500
    assert not [r for r in rows if r["kind"] in ("AID", "DEBT")]

    clock.today = date(2025, 7, 25)
    rows = client.get("/reports/due-dates").json()
    kinds = sorted(r["kind"] for r in rows if r["record_id"] in (aid["aid"]["aid_id"], aid["debt"]["debt_id"])
                   and r["kind"] != "LOAN")
    assert kinds == ["AID", "DEBT"]
    assert rows == sorted(rows, key=lambda r: (r["due_date"], r["kind"], r["record_id"]))


def test_dashboard(client, make_member, sanction_type_id, clock):
    a, b, c = make_member(), make_member(), make_member()
    client.post(f"/members/{c['member_id']}/status", json={"new_status": "INACTIVE"})

    client.post("/cotisations/", json={"member_id": a["member_id"], "month": 3, "year": 2025,
                                       "paid_amount": 10000, "oil_paid": True, "soap_paid": True,
                                       "sport_fund_paid": True})
    client.post("/cotisations/", json={"member_id": b["member_id"], "month": 3, "year": 2025,
                                       "paid_amount": 10000})
    client.post("/sanctions/", json={"member_id": b["member_id"],
                                     "sanction_type_id": sanction_type_id("Retard à la réunion", "MEETING")})
    client.post("/loans/", json={"borrower_id": a["member_id"], "principal_amount": 50000})

    client.post("/meetings/schedule", json={"month": 2, "year": 2025, "host_member_id": a["member_id"]})
    client.post("/meetings/schedule", json={"month": 4, "year": 2025, "host_member_id": b["member_id"],
                                            "place": "Chez Paul"})

    d = client.get("/reports/dashboard").json()
    assert d["association_name"] == "E2D"
    assert d["members_total"] == 3
    assert d["members_active"] == 2
    assert d["members_paid_this_month"] == 1
    assert d["unpaid_sanctions"] == 1
    assert d["unpaid_sanctions_total"] == 1000
    assert d["loans_open"] == 1
    assert d["loans_overdue"] == 0
    assert d["capital_in_progress"] == 50000
    assert d["next_meeting"]["month"] == 4
    assert d["next_meeting"]["label"] == "Avril 2025"
    assert d["next_meeting"]["host_member_id"] == b["member_id"]

    clock.today = date(2025, 6, 1)
    d = client.get("/reports/dashboard").json()
    assert d["loans_overdue"] == 1
    assert d["loans_open"] == 1
    assert d["next_meeting"] is None
