def _report(client, **extra):
    payload = {"meeting_date": "2025-03-09", "place": "Domicile du président", "present_count": 18,
               "absent_count": 3}
    payload.update(extra)
    r = client.post("/meetings/reports", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_report_moves_forward_only(client, auth_headers):
    r = client.post("/meetings/reports", json={"meeting_date": "2025-03-09", "place": "Salle"},
                    headers=auth_headers)
    report = r.json()
    assert report["status"] == "DRAFT"
    assert report["written_by"] == "tresorier@e2d.test"

    rid = report["report_id"]
    assert client.post(f"/meetings/reports/{rid}/status", json={"status": "APPROVED"}).status_code == 409
    assert client.post(f"/meetings/reports/{rid}/status", json={"status": "FINALIZED"}).json()["status"] == "FINALIZED"
    assert client.post(f"/meetings/reports/{rid}/status", json={"status": "DRAFT"}).status_code == 409
    assert client.post(f"/meetings/reports/{rid}/status", json={"status": "APPROVED"}).json()["status"] == "APPROVED"

    assert client.patch(f"/meetings/reports/{rid}", json={"present_count": 20}).status_code == 409


def test_agenda_items_and_resolutions(client, make_member):
    m = make_member()
    report = _report(client, host_member_id=m["member_id"])
    rid = report["report_id"]
    assert report["host"]["member_id"] == m["member_id"]

    first = client.post(f"/meetings/reports/{rid}/items", json={"title": "Bilan des cotisations"}).json()
    second = client.post(f"/meetings/reports/{rid}/items",
                         json={"title": "Organisation du gala", "item_type": "DECISION"}).json()
    assert (first["item_number"], second["item_number"]) == (1, 2)

    res = client.post(f"/meetings/items/{second['item_id']}/resolutions",
                      json={"text": "Gala fixé au 12 avril", "resolution_type": "ACTION",
                            "responsible_member_id": m["member_id"], "deadline": "2025-04-12"}).json()
    assert res["status"] == "IN_PROGRESS"

    done = client.patch(f"/meetings/resolutions/{res['resolution_id']}", json={"status": "DONE"}).json()
    assert done["status"] == "DONE"

    full = client.get(f"/meetings/reports/{rid}").json()
    assert [i["title"] for i in full["agenda_items"]] == ["Bilan des cotisations", "Organisation du gala"]
    assert full["agenda_items"][1]["resolutions"][0]["status"] == "DONE"


def test_one_host_per_month(client, make_member):
    a, b = make_member(), make_member()
    r = client.post("/meetings/schedule", json={"month": 5, "year": 2025, "host_member_id": a["member_id"]})
    assert r.status_code == 201
    assert r.json()["status"] == "PLANNED"
    r = client.post("/meetings/schedule", json={"month": 5, "year": 2025, "host_member_id": b["member_id"]})
    assert r.status_code == 409

    sid = client.get("/meetings/schedule", params={"year": 2025}).json()[0]["schedule_id"]
    r = client.patch(f"/meetings/schedule/{sid}", json={"status": "CONFIRMED", "host_member_id": b["member_id"]})
    assert r.json()["status"] == "CONFIRMED"
    assert r.json()["host_member_id"] == b["member_id"]


def test_unknown_host_is_refused(client):
    r = client.post("/meetings/schedule", json={"month": 6, "year": 2025, "host_member_id": 999})
    assert r.status_code == 404
