def test_member_adherent_copies_identity(client, make_member):
    m = make_member(last_name="Eto", first_name="Samuel", phone="699111222")
    r = client.post("/sport/adherents", json={"member_id": m["member_id"], "is_organizing_committee": True})
    assert r.status_code == 201, r.text
    a = r.json()
    assert (a["last_name"], a["first_name"], a["phone"]) == ("Eto", "Samuel", "699111222")
    assert a["membership_fee"] == 10000
    assert a["payment_deadline"] == "2025-04-14"
    assert a["sovereign_fund_amount"] == 5000


def test_external_adherent_needs_names(client):
    r = client.post("/sport/adherents", json={"phone": "677000000"})
    assert r.status_code == 400

    r = client.post("/sport/adherents", json={"last_name": "Milla", "first_name": "Roger"})
    assert r.status_code == 201
    assert r.json()["member_id"] is None
    assert r.json()["sovereign_fund_amount"] == 0


def test_adherent_payments(client):
    a = client.post("/sport/adherents", json={"last_name": "Milla", "first_name": "Roger"}).json()
    r = client.post(f"/sport/adherents/{a['adherent_id']}/pay/membership_fee")
    assert r.json()["membership_fee_paid"] is True
    assert client.post(f"/sport/adherents/{a['adherent_id']}/pay/membership_fee").status_code == 409
    # not in the organising committee: nothing due
    assert client.post(f"/sport/adherents/{a['adherent_id']}/pay/sovereign_fund").status_code == 409


def test_training_session_cancel(client):
    s = client.post("/sport/sessions", json={"club": "E2D", "session_date": "2025-03-22",
                                             "start_time": "07:00:00", "place": "Stade annexe"}).json()
    r = client.post(f"/sport/sessions/{s['session_id']}/cancel", json={"reason": "pluie"})
    assert r.json()["cancelled"] is True
    assert r.json()["cancellation_reason"] == "pluie"
    assert client.post(f"/sport/sessions/{s['session_id']}/cancel", json={}).status_code == 409


def test_match_score_sets_result(client):
    m = client.post("/sport/matches", json={"club": "PHOENIX", "match_date": "2025-03-23",
                                            "opponent": "AS Mvog-Ada"}).json()
    assert (m["team_score"], m["opponent_score"], m["result"]) == (0, 0, None)

    assert client.post(f"/sport/matches/{m['match_id']}/score",
                       json={"team_score": 2, "opponent_score": 1}).json()["result"] == "WIN"
    assert client.post(f"/sport/matches/{m['match_id']}/score",
                       json={"team_score": 1, "opponent_score": 1}).json()["result"] == "DRAW"
    assert client.post(f"/sport/matches/{m['match_id']}/score",
                       json={"team_score": 0, "opponent_score": 3}).json()["result"] == "LOSS"


def test_red_card_opens_automatic_sanction(client, make_member):
    player = make_member()
    match = client.post("/sport/matches", json={"club": "E2D", "match_date": "2025-03-16",
                                                "opponent": "Veterans FC"}).json()

    yellow = client.post(f"/sport/matches/{match['match_id']}/cards",
                         json={"member_id": player["member_id"], "color": "YELLOW"}).json()
    assert yellow["sanction_id"] is None

    red = client.post(f"/sport/matches/{match['match_id']}/cards",
                      json={"member_id": player["member_id"], "color": "RED"}).json()
    assert red["sanction_id"] is not None

    s = client.get(f"/sanctions/{red['sanction_id']}").json()
    assert s["automatic"] is True
    assert s["status"] == "UNPAID"
    assert s["amount"] == 5000
    assert s["sanction_type"]["name"] == "Carton rouge"
    assert s["sanction_type"]["category"] == "SPORT_E2D"

    cards = client.get(f"/sport/matches/{match['match_id']}").json()["cards"]
    assert [c["color"] for c in cards] == ["YELLOW", "RED"]


def test_club_balance(client):
    client.post("/sport/donations", json={"club": "E2D", "donor_name": "Mairie", "amount": 100000,
                                          "donation_date": "2025-03-01"})
    client.post("/sport/donations", json={"club": "E2D", "donor_name": "Boutique", "in_kind_nature": "20 maillots",
                                          "donation_date": "2025-03-02"})
    client.post("/sport/expenses", json={"club": "E2D", "label": "Ballons", "amount": 30000,
                                         "expense_date": "2025-03-05", "category": "EQUIPMENT"})
    client.post("/sport/expenses", json={"club": "PHOENIX", "label": "Arbitre", "amount": 10000,
                                         "expense_date": "2025-03-05", "category": "REFEREEING"})

    b = client.get("/sport/balance/E2D").json()
    assert b == {"club": "E2D", "donations_total": 100000, "expenses_total": 30000, "balance": 70000}


def test_donation_needs_amount_or_nature(client):
    r = client.post("/sport/donations", json={"club": "E2D", "donor_name": "X", "donation_date": "2025-03-01"})
    assert r.status_code == 400
