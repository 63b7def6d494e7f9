def test_missions_ordering_and_reorder(client, seeded):
    r = client.post("/missions", json={"id": "m6", "title": "Write a letter", "type": "kindness"})
    assert r.status_code == 201
    assert r.json()["sort_order"] == 6

    r = client.post("/missions/reorder", json={"mission_ids": ["m6", "m1"]})
    assert r.status_code == 200
    assert [m["id"] for m in r.json()][:2] == ["m6", "m1"]

    assert client.post("/missions/reorder", json={"mission_ids": ["zzz"]}).status_code == 400


def test_inactive_missions_hidden_by_default(client, seeded):
    client.patch("/missions/m2", json={"is_active": False})
    ids = [m["id"] for m in client.get("/missions").json()]
    assert "m2" not in ids
    ids = [m["id"] for m in client.get("/missions", params={"include_inactive": True}).json()]
    assert "m2" in ids
    assert client.delete("/missions/m2").status_code == 204
    assert client.patch("/missions/m2", json={"title": "x"}).status_code == 404


def test_sessions_single_active(client, seeded):
    a = client.post("/sessions", json={
        "name": "Session 1", "start_date": "2025-06-01", "end_date": "2025-06-30", "is_active": True,
    }).json()
    b = client.post("/sessions", json={
        "name": "Session 2", "start_date": "2025-07-01", "end_date": "2025-07-31",
    }).json()
    assert client.get("/sessions/active").json()["id"] == a["id"]

    client.post(f"/sessions/{b['id']}/activate")
    active = [s for s in client.get("/sessions").json() if s["is_active"]]
    assert [s["id"] for s in active] == [b["id"]]

    assert client.patch(f"/sessions/{b['id']}", json={"end_date": "2025-06-01"}).status_code == 400
    assert client.delete(f"/sessions/{a['id']}").status_code == 204


def test_session_dates_validated(client):
    r = client.post("/sessions", json={"name": "Bad", "start_date": "2025-07-10", "end_date": "2025-07-01"})
    assert r.status_code == 422


def test_ranks_crud(client, seeded):
    r = client.post("/ranks", json={
        "rank_name": "Gold", "missions_required": 30, "qualified_days_required": 10, "rank_order": 3,
    })
    assert r.status_code == 201
    rank_id = r.json()["id"]
    assert [x["rank_name"] for x in client.get("/ranks").json()] == ["Bronze", "Silver", "Gold"]

    client.patch(f"/ranks/{rank_id}", json={"is_active": False})
    names = [x["rank_name"] for x in client.get("/ranks", params={"active_only": True}).json()]
    assert names == ["Bronze", "Silver"]

    bad = {"rank_name": "Zero", "missions_required": 0, "qualified_days_required": 1}
    assert client.post("/ranks", json=bad).status_code == 422


def test_weekly_points_upsert(client, seeded):
    body = {"camper_id": "c1", "session_number": 1, "week_number": 2, "missions_completed": 10, "total_points": 40}
    first = client.put("/weekly-points", json=body).json()
    body["total_points"] = 55
    second = client.put("/weekly-points", json=body).json()
    assert first["id"] == second["id"]

    rows = client.get("/weekly-points", params={"camper_id": "c1"}).json()
    assert len(rows) == 1 and rows[0]["total_points"] == 55

    body["camper_id"] = "ghost"
    assert client.put("/weekly-points", json=body).status_code == 400
