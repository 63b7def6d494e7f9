from datetime import timedelta

import pytest

from campboard import lifecycle
from campboard.camp_settings import today_for

ALL = {"session_id": "all"}


@pytest.fixture()
def history(seeded):
    """c1 qualifies three days running, c2 falls short today, c3 never submits."""
    db = seeded
    today = today_for(db)
    for back in range(3):
        lifecycle.upsert_submission(db, "c1", today - timedelta(days=back), ["m1", "m2", "m3"], status="approved")
    lifecycle.upsert_submission(db, "c2", today, ["m1", "m2"], status="approved")
    # rejected rows never count
    lifecycle.upsert_submission(db, "c3", today - timedelta(days=1), ["m1", "m2", "m3", "m4"], status="rejected")
    return today


def test_today_status(client, history):
    r = client.get("/reports/today").json()
    assert r["total_campers"] == 3
    assert r["not_submitted"] == 1
    assert r["submitted"] == 2
    assert r["qualified"] == 1
    assert r["campers"][0]["camper_id"] == "c3"
    status = {c["camper_id"]: c["status"] for c in r["campers"]}
    assert status == {"c1": "qualified", "c2": "submitted", "c3": "not_submitted"}


def test_bunk_performance(client, history):
    r = client.get("/reports/bunks").json()
    assert [(b["bunk_name"], b["qualified_percentage"]) for b in r["bunks"]] == [("Aspen", 50), ("Birch", 0)]
    assert r["camp_percentage"] == 33


def test_qualification_report(client, history):
    r = client.get("/reports/qualification", params=ALL).json()
    assert r["start_date"] == (history - timedelta(days=2)).isoformat()
    rows = {c["camper_id"]: c for c in r["campers"]}
    assert [c["camper_id"] for c in r["campers"]] == ["c1", "c3", "c2"]

    assert rows["c1"]["qualified_days"] == 3
    assert rows["c1"]["total_missions"] == 9
    assert rows["c1"]["current_streak"] == 3
    assert rows["c1"]["rank"] == "Bronze"
    assert len(rows["c1"]["days"]) == 3

    assert rows["c2"]["qualified_days"] == 0
    assert rows["c2"]["rank"] == "Unranked"
    assert rows["c3"]["total_missions"] == 0

    by_missions = client.get("/reports/qualification", params={**ALL, "sort_by": "missions"}).json()
    assert [c["camper_id"] for c in by_missions["campers"]] == ["c1", "c2", "c3"]


def test_stats_override_changes_rank(client, history):
    r = client.put("/campers/c2/stats-override", json={"total_missions": 20, "total_qualified_days": 5})
    assert r.status_code == 200
    rows = {c["camper_id"]: c for c in client.get("/reports/qualification", params=ALL).json()["campers"]}
    assert rows["c2"]["rank"] == "Silver"
    assert rows["c2"]["total_missions"] == 20

    assert client.put("/campers/c2/stats-override", json={"session_id": "nope"}).status_code == 400
    assert client.delete("/campers/c2/stats-override").status_code == 204
    rows = {c["camper_id"]: c for c in client.get("/reports/qualification", params=ALL).json()["campers"]}
    assert rows["c2"]["rank"] == "Unranked"


def test_active_session_limits_window(client, history):
    today = history.isoformat()
    client.post("/sessions", json={"name": "Now", "start_date": today, "end_date": today, "is_active": True})
    r = client.get("/reports/qualification").json()
    rows = {c["camper_id"]: c for c in r["campers"]}
    assert r["start_date"] == today
    assert rows["c1"]["qualified_days"] == 1
    assert client.get("/reports/qualification", params={"session_id": "missing"}).status_code == 404


def test_explicit_dates(client, history):
    start = (history - timedelta(days=1)).isoformat()
    r = client.get("/reports/qualification", params={"start_date": start}).json()
    rows = {c["camper_id"]: c for c in r["campers"]}
    assert rows["c1"]["total_missions"] == 6
    bad = {"start_date": history.isoformat(), "end_date": start}
    assert client.get("/reports/qualification", params=bad).status_code == 400


def test_qualification_csv(client, history):
    r = client.get("/reports/qualification.csv", params=ALL)
    lines = r.text.strip("\n").split("\n")
    assert len(lines) == 4
    assert lines[0].startswith('"Camper ID","Name","Bunk"')
    assert lines[1].startswith('"c1","Ada Lovelace","Aspen","3","9"')


def test_leaderboard(client, history):
    board = client.get("/reports/leaderboard", params={**ALL, "limit": 2}).json()
    assert [(e["position"], e["camper_id"]) for e in board] == [(1, "c1"), (2, "c2")]


def test_weekly_grid(client, history):
    r = client.get("/reports/weekly").json()
    assert len(r["days"]) == 7
    assert r["days"][-1] == history.isoformat()
    rows = {c["camper_id"]: c for c in r["campers"]}
    assert rows["c1"]["qualified_days"] == 3
    assert rows["c1"]["counts"][history.isoformat()] == 3
    assert rows["c3"]["qualified_days"] == 0


def test_mission_analytics(client, history):
    rows = {m["mission_id"]: m for m in client.get("/reports/missions", params=ALL).json()}
    assert rows["m1"]["completion_count"] == 2
    assert rows["m1"]["completion_rate"] == 67
    assert rows["m3"]["completion_count"] == 1
    assert rows["m4"]["completion_count"] == 0


def test_camper_history(client, history):
    client.put("/weekly-points", json={"camper_id": "c1", "session_number": 1, "week_number": 1, "total_points": 12})
    client.put("/weekly-points", json={"camper_id": "c1", "session_number": 1, "week_number": 2, "total_points": 8})
    r = client.get("/reports/campers/c1").json()
    assert r["total_submissions"] == 3
    assert r["current_streak"] == 3
    assert r["total_points"] == 20
    assert [s["date"] for s in r["submissions"]][0] == history.isoformat()
    assert client.get("/reports/campers/ghost").status_code == 404


def test_campers_csv(client, history):
    r = client.get("/reports/campers.csv", params=ALL)
    assert r.status_code == 200
    lines = r.text.strip("\n").split("\n")
    assert [line.split(",")[1] for line in lines[1:]] == ['"Ada Lovelace"', '"Alan Turing"', '"Grace Hopper"']


def test_camper_history_uses_stats_override(client, history):
    client.put("/campers/c2/stats-override", json={"total_missions": 20, "total_qualified_days": 5})
    r = client.get("/reports/campers/c2").json()
    assert r["total_missions"] == 20
    assert r["qualified_days"] == 5
    assert r["rank"] == "Silver"

    board = {c["camper_id"]: c for c in client.get("/reports/qualification", params=ALL).json()["campers"]}
    assert board["c2"]["rank"] == r["rank"]
