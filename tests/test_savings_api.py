from datetime import date


def _deposit(client, member_id, amount, **extra):
    r = client.post("/savings/", json={"member_id": member_id, "amount": amount, **extra})
    assert r.status_code == 201, r.text
    return r.json()


def test_deposit_defaults(client, make_member):
    m = make_member()
    d = _deposit(client, m["member_id"], 100000)
    assert d["status"] == "ACTIVE"
    assert d["exercise"] == 2025
    assert d["deposit_date"] == "2025-03-15"
    assert d["interest_received"] == 0

    late = _deposit(client, m["member_id"], 5000, deposit_date="2024-12-20")
    assert late["exercise"] == 2024


def test_amount_must_be_positive(client, make_member):
    m = make_member()
    assert client.post("/savings/", json={"member_id": m["member_id"], "amount": 0}).status_code == 422


def test_repay_once(client, make_member, clock):
    m = make_member()
    d = _deposit(client, m["member_id"], 100000)

    clock.today = date(2025, 12, 20)
    r = client.post(f"/savings/{d['deposit_id']}/repay", json={"interest_received": 4500})
    assert r.status_code == 200
    assert r.json()["status"] == "REPAID"
    assert r.json()["repayment_date"] == "2025-12-20"
    assert r.json()["interest_received"] == 4500

    assert client.post(f"/savings/{d['deposit_id']}/repay", json={}).status_code == 409


def test_stats_and_interest_preview(client, make_member):
    a, b = make_member(), make_member()
    _deposit(client, a["member_id"], 150000)
    _deposit(client, b["member_id"], 50000)
    # interest pool for 2025: 5000 + 1000
    client.post("/loans/", json={"borrower_id": a["member_id"], "principal_amount": 100000})
    client.post("/loans/", json={"borrower_id": b["member_id"], "principal_amount": 20000})

    stats = client.get("/savings/stats/2025").json()
    assert stats["total"] == 2
    assert stats["active_total"] == 200000

    preview = client.get("/savings/interest-preview/2025").json()
    assert preview["interest_pool"] == 6000
    assert preview["savings_base"] == 200000
    shares = {s["member_id"]: s["share"] for s in preview["shares"]}
    assert shares == {a["member_id"]: 4500, b["member_id"]: 1500}

    # preview writes nothing
    assert all(d["interest_received"] == 0 for d in client.get("/savings/").json())
