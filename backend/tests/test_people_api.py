from campboard.camp_settings import check_admin_password, get_settings


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_bunk_crud_and_delete_guard(client, seeded):
    r = client.post("/bunks", json={"id": "bunk-c", "name": "C", "display_name": "Cedar"})
    assert r.status_code == 201

    r = client.post("/bunks", json={"id": "bunk-c", "name": "C", "display_name": "Cedar"})
    assert r.status_code == 409

    r = client.patch("/bunks/bunk-c", json={"display_name": "Cedar Lodge"})
    assert r.json()["display_name"] == "Cedar Lodge"

    assert client.delete("/bunks/bunk-a").status_code == 400
    assert client.delete("/bunks/bunk-c").status_code == 204
    assert [b["id"] for b in client.get("/bunks").json()] == ["bunk-a", "bunk-b"]


def test_bunk_requires_fields(client):
    r = client.post("/bunks", json={"id": " ", "name": "X", "display_name": "X"})
    assert r.status_code == 422


def test_create_camper_generates_code(client, seeded):
    r = client.post("/campers", json={"id": "c9", "name": "Marie Curie", "bunk_id": "bunk-b"})
    assert r.status_code == 201
    body = r.json()
    assert body["bunk_name"] == "Birch"
    assert body["code"].startswith("MCB")
    assert len(body["code"]) == 6


def test_create_camper_validation(client, seeded):
    assert client.post("/campers", json={"id": "c9", "name": "X", "bunk_id": "nope"}).status_code == 400
    assert client.post("/campers", json={"id": "c1", "name": "Dup", "bunk_id": "bunk-a"}).status_code == 409
    assert client.post("/campers", json={"id": "c9", "name": "", "bunk_id": "bunk-a"}).status_code == 422


def test_list_campers_search_and_bunk(client, seeded):
    names = [c["name"] for c in client.get("/campers", params={"search": "a"}).json()]
    assert names == ["Ada Lovelace", "Alan Turing", "Grace Hopper"]
    names = [c["name"] for c in client.get("/campers", params={"bunk_id": "bunk-b"}).json()]
    assert names == ["Alan Turing"]
    names = [c["name"] for c in client.get("/campers", params={"search": "birch"}).json()]
    assert names == ["Alan Turing"]


def test_update_and_regenerate_code(client, seeded):
    r = client.patch("/campers/c1", json={"name": "Ada King", "bunk_id": "bunk-b", "access_code": "new123"})
    assert r.status_code == 200
    assert r.json()["code"] == "NEW123"
    assert r.json()["bunk_name"] == "Birch"

    r = client.post("/campers/c1/regenerate-code")
    assert r.status_code == 200
    assert r.json()["code"] != "NEW123"


def test_delete_camper_removes_dependents(client, seeded):
    client.put("/campers/c1/working-missions", json={"missions": ["m1"]})
    client.post("/campers/c1/submit", json={"missions": ["m1", "m2", "m3"]})
    assert client.delete("/campers/c1").status_code == 204
    assert client.get("/campers/c1").status_code == 404
    assert client.get("/submissions", params={"camper_id": "c1"}).json() == []


def test_staff_crud(client, seeded):
    r = client.post("/staff", json={"id": "s2", "name": "Pat Lee", "bunk_id": "bunk-b"})
    assert r.status_code == 201
    assert r.json()["bunk_name"] == "Birch"
    assert [s["id"] for s in client.get("/staff").json()] == ["s1", "s2"]
    assert client.delete("/staff/s2").status_code == 204
    assert client.get("/staff/s2").status_code == 404


def test_logins(client, seeded):
    assert client.post("/auth/camper", json={"camper_id": "c1", "access_code": "ada101"}).status_code == 200
    assert client.post("/auth/camper", json={"camper_id": "c1", "access_code": "WRONG1"}).status_code == 401
    r = client.post("/auth/camper/by-code", json={"access_code": "gra202"})
    assert r.json()["id"] == "c2"
    assert client.post("/auth/staff", json={"staff_id": "s1", "access_code": "KIM900"}).status_code == 200
    assert client.post("/auth/admin", json={"password": "admin123"}).json() == {"ok": True}
    assert client.post("/auth/admin", json={"password": "nope"}).status_code == 401


def test_settings_update_and_password_hidden(client, seeded):
    r = client.get("/settings")
    assert "admin_password" not in r.json()
    r = client.patch("/settings", json={"daily_required_missions": 2, "admin_password": "s3cret"})
    assert r.json()["daily_required_missions"] == 2
    assert client.post("/auth/admin", json={"password": "s3cret"}).status_code == 200
    assert client.patch("/settings", json={"timezone": "Mars/Olympus"}).status_code == 422
    assert "today" in client.get("/settings/today").json()


def test_non_ascii_admin_password(client, seeded):
    assert client.patch("/settings", json={"admin_password": "pässwörd"}).status_code == 200
    assert client.post("/auth/admin", json={"password": "pässwörd"}).json() == {"ok": True}
    assert client.post("/auth/admin", json={"password": "café"}).status_code == 401


def test_non_ascii_access_code_is_rejected_not_crashed(client, seeded):
    r = client.post("/auth/camper", json={"camper_id": "c1", "access_code": "ÄDA101"})
    assert r.status_code == 401
    r = client.post("/auth/staff", json={"staff_id": "s1", "access_code": "kïm900"})
    assert r.status_code == 401


def test_access_codes_stay_unique(client, seeded):
    r = client.post("/campers", json={"id": "c9", "name": "Copy Cat", "bunk_id": "bunk-a", "access_code": "ADA101"})
    assert r.status_code == 409
    # staff codes share the same namespace
    r = client.post("/staff", json={"id": "s9", "name": "Copy Cat", "bunk_id": "bunk-a", "access_code": "ada101"})
    assert r.status_code == 409

    assert client.patch("/campers/c2", json={"access_code": "ADA101"}).status_code == 409
    assert client.patch("/staff/s1", json={"access_code": "GRA202"}).status_code == 409
    # keeping one's own code is fine
    assert client.patch("/campers/c1", json={"access_code": "ADA101"}).status_code == 200

    r = client.post("/auth/camper/by-code", json={"access_code": "GRA202"})
    assert r.json()["id"] == "c2"


def test_admin_password_stored_hashed(client, seeded):
    settings = get_settings(seeded)
    assert settings.admin_password_hash != "admin123"
    assert check_admin_password(settings, "admin123")
    assert not check_admin_password(settings, "")

    client.patch("/settings", json={"admin_password": "s3cret"})
    seeded.refresh(settings)
    assert "s3cret" not in settings.admin_password_hash
    assert check_admin_password(settings, "s3cret")
