from app.models.member_model import Member, MemberStatusHistory


def test_create_member_defaults(client, make_member):
    m = make_member(email="  Jean.Dupont@E2D.test ", last_name="Dupont", first_name="Jean")
    assert m["status"] == "ACTIVE"
    assert m["email"] == "jean.dupont@e2d.test"
    assert m["full_name"] == "Jean Dupont"
    assert m["join_date"] == "2025-03-15"


def test_duplicate_email_is_refused(client, make_member):
    make_member(email="a@e2d.test")
    r = client.post("/members/", json={"email": "a@e2d.test", "last_name": "X", "first_name": "Y"})
    assert r.status_code == 409


def test_update_profile_ignores_status(client, make_member):
    m = make_member()
    r = client.patch(f"/members/{m['member_id']}", json={"phone": "677112233", "monthly_due_amount": 15000})
    assert r.status_code == 200
    assert r.json()["phone"] == "677112233"
    assert r.json()["monthly_due_amount"] == 15000
    assert r.json()["status"] == "ACTIVE"


def test_update_null_required_fields_are_ignored(client, make_member):
    m = make_member(first_name="Paul")
    r = client.patch(f"/members/{m['member_id']}", json={"first_name": None, "email": None, "phone": None})
    assert r.status_code == 200, r.text
    assert r.json()["first_name"] == "Paul"
    assert r.json()["email"] == m["email"]
    assert r.json()["phone"] is None


def test_update_blank_names_and_email_are_rejected(client, make_member):
    m = make_member()
    for body in ({"last_name": ""}, {"first_name": "   "}, {"email": ""}):
        r = client.patch(f"/members/{m['member_id']}", json=body)
        assert r.status_code == 422, body

    got = client.get(f"/members/{m['member_id']}").json()
    assert got["last_name"] == m["last_name"]
    assert got["email"] == m["email"]


def test_update_to_taken_email_is_refused(client, make_member):
    a, b = make_member(), make_member()
    r = client.patch(f"/members/{b['member_id']}", json={"email": a["email"].upper()})
    assert r.status_code == 409


def test_change_status_writes_history_with_actor(client, make_member, auth_headers):
    m = make_member()
    r = client.post(
        f"/members/{m['member_id']}/status",
        json={"new_status": "SUSPENDED", "reason": "4 sanctions impayées"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["status"] == "SUSPENDED"

    history = client.get(f"/members/{m['member_id']}/status-history").json()
    assert len(history) == 1
    assert history[0]["old_status"] == "ACTIVE"
    assert history[0]["new_status"] == "SUSPENDED"
    assert history[0]["reason"] == "4 sanctions impayées"
    assert history[0]["changed_by"] == "tresorier@e2d.test"


def test_same_status_is_refused_and_nothing_written(client, make_member, db):
    m = make_member()
    r = client.post(f"/members/{m['member_id']}/status", json={"new_status": "ACTIVE"})
    assert r.status_code == 409

    db.expire_all()
    assert db.query(MemberStatusHistory).count() == 0


def test_failed_status_update_leaves_no_history(client, make_member, db, monkeypatch):
    from app.repositories.gateway import Gateway, GatewayResult

    m = make_member()
    real_update = Gateway.update

    def failing_update(self, record_id, partial_fields, commit=True):
        if self.model is Member:
            self.db.rollback()
            return GatewayResult(None, "database is read-only")
        return real_update(self, record_id, partial_fields, commit)

    monkeypatch.setattr(Gateway, "update", failing_update)
    r = client.post(f"/members/{m['member_id']}/status", json={"new_status": "INACTIVE"})
    assert r.status_code == 400
    assert r.json()["detail"] == "database is read-only"

    db.expire_all()
    assert db.query(MemberStatusHistory).count() == 0
    assert db.get(Member, m["member_id"]).status == "ACTIVE"


def test_delete_member_without_records(client, make_member):
    m = make_member()
    assert client.delete(f"/members/{m['member_id']}").status_code == 204
    assert client.get(f"/members/{m['member_id']}").status_code == 404


def test_delete_member_with_records_surfaces_backend_error(client, make_member):
    m = make_member()
    r = client.post("/loans/", json={"borrower_id": m["member_id"], "principal_amount": 10000})
    assert r.status_code == 201

    r = client.delete(f"/members/{m['member_id']}")
    assert r.status_code == 400
    assert "FOREIGN KEY" in r.json()["detail"].upper()


def test_list_members_filters(client, make_member):
    make_member(last_name="Ngono")
    other = make_member(last_name="Atangana")
    client.post(f"/members/{other['member_id']}/status", json={"new_status": "INACTIVE"})

    active = client.get("/members/", params={"status": "ACTIVE"}).json()
    assert [x["last_name"] for x in active] == ["Ngono"]

    found = client.get("/members/", params={"search": "atan"}).json()
    assert len(found) == 1
