from datetime import datetime, timedelta, timezone

from timeclock.models import ActiveSession


def _signup(client, name: str = "alice", tz: str | None = None) -> dict:
    response = client.post(
        "/api/auth/signup",
        json={"username": name, "email": f"{name}@example.com", "password": "correct-horse", "timezone": tz},
    )
    assert response.status_code == 201
    return response.json()["user"]


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def test_health(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_requires_authentication(client) -> None:
    assert client.get("/api/sessions/active").status_code == 401
    assert client.post("/api/sessions/clock-in").status_code == 401


def test_first_signup_is_admin_and_login_works(client) -> None:
    first = _signup(client, "alice")
    client.post("/api/auth/logout")
    second = _signup(client, "bob")
    client.post("/api/auth/logout")

    assert first["is_admin"] is True
    assert second["is_admin"] is False
    bad = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "wrong-password"})
    assert bad.status_code == 401
    good = client.post("/api/auth/login", json={"email": "bob@example.com", "password": "correct-horse"})
    assert good.status_code == 200
    assert client.get("/api/auth/me").json()["user"]["username"] == "bob"


def test_clock_cycle_over_http(client, db) -> None:
    user = _signup(client)

    clocked_in = client.post("/api/sessions/clock-in", json={})
    assert clocked_in.status_code == 201
    assert clocked_in.json()["active"]["is_on_break"] is False

    again = client.post("/api/sessions/clock-in")
    assert again.status_code == 409
    assert again.json()["kind"] == "already_clocked_in"

    db.query(ActiveSession).filter(ActiveSession.user_id == user["id"]).update(
        {"clock_in": datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(hours=1)},
        synchronize_session=False,
    )
    db.commit()

    on_break = client.post("/api/sessions/break")
    assert on_break.json()["is_on_break"] is True
    assert on_break.json()["message"] == "Break started"

    out = client.post("/api/sessions/clock-out", json={"notes": "done"})
    assert out.status_code == 200
    session = out.json()["session"]
    assert session["notes"] == "done"
    assert 59 * 60_000 <= session["duration_ms"] <= 60 * 60_000

    twice = client.post("/api/sessions/clock-out")
    assert twice.status_code == 409
    assert twice.json()["kind"] == "not_clocked_in"
    assert client.get("/api/sessions/active").json()["active"] is None


def test_manual_session_validation_over_http(client) -> None:
    _signup(client)
    now = datetime.now(timezone.utc)

    invalid = client.post("/api/sessions", json={"clock_in": _iso(now - timedelta(hours=1)), "clock_out": _iso(now - timedelta(hours=1))})
    assert invalid.status_code == 400
    assert invalid.json()["kind"] == "invalid_range"

    too_long = client.post("/api/sessions", json={"clock_in": _iso(now - timedelta(hours=30)), "clock_out": _iso(now - timedelta(hours=1))})
    assert too_long.json()["kind"] == "duration_too_long"

    created = client.post("/api/sessions", json={"clock_in": _iso(now - timedelta(hours=3)), "clock_out": _iso(now - timedelta(hours=1))})
    assert created.status_code == 201
    session_id = created.json()["session"]["id"]
    assert created.json()["session"]["duration_ms"] == 2 * 60 * 60 * 1000

    updated = client.put(f"/api/sessions/{session_id}", json={"clock_out": _iso(now - timedelta(hours=2))})
    assert updated.status_code == 200
    assert updated.json()["session"]["duration_ms"] == 60 * 60 * 1000

    assert client.put("/api/sessions/9999", json={"notes": "x"}).status_code == 404
    assert client.delete(f"/api/sessions/{session_id}").status_code == 200
    assert client.get("/api/sessions").json()["sessions"] == []


def test_projects_and_settings_over_http(client) -> None:
    _signup(client)

    created = client.post("/api/projects", json={"name": "  Website  "})
    assert created.status_code == 201
    assert created.json()["project"]["name"] == "Website"
    assert client.post("/api/projects", json={"name": "Website"}).status_code == 409
    assert client.post("/api/projects", json={"name": "   "}).status_code == 400

    settings = client.get("/api/settings").json()["settings"]
    assert settings == {"hourly_rate": 0.0, "text_size": "medium"}
    assert client.put("/api/settings", json={"text_size": "huge"}).status_code == 400
    assert client.put("/api/settings", json={"hourly_rate": -1}).status_code == 400
    updated = client.put("/api/settings", json={"hourly_rate": 32.5})
    assert updated.json()["settings"]["hourly_rate"] == 32.5


def test_reports_over_http(client) -> None:
    _signup(client)

    weekly = client.get("/api/reports/weekly").json()
    assert len(weekly["daily_breakdown"]) == 7
    assert weekly["total_ms"] == 0

    breakdown = client.get("/api/reports/projects").json()
    assert breakdown["no_project"]["name"] == "No Project"

    first = client.post("/api/reports/generate-weekly", json={})
    second = client.post("/api/reports/generate-weekly", json={})
    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["report"]["id"] == first.json()["report"]["id"]
    assert len(client.get("/api/reports/past-weeks").json()["reports"]) == 1


def test_signup_with_taken_email_and_username_of_different_users(client) -> None:
    _signup(client, "alice")
    client.post("/api/auth/logout")
    _signup(client, "bob")
    client.post("/api/auth/logout")

    response = client.post(
        "/api/auth/signup",
        json={"username": "bob", "email": "alice@example.com", "password": "correct-horse"},
    )

    assert response.status_code == 409


def test_report_dates_are_local_calendar_days(client) -> None:
    _signup(client, tz="America/New_York")

    weekly = client.get("/api/reports/weekly", params={"date": "2026-03-08"}).json()
    assert weekly["week_id"] == "2026-03-08"
    assert weekly["start"] == "2026-03-08T00:00:00-05:00"

    monthly = client.get("/api/reports/monthly", params={"date": "2026-03-01"}).json()
    assert monthly["start"] == "2026-03-01T00:00:00-05:00"
    assert monthly["end"] == "2026-03-31T23:59:59-04:00"

    generated = client.post("/api/reports/generate-weekly", json={"date": "2026-03-08"})
    assert generated.status_code == 201
    assert generated.json()["report"]["week_id"] == "2026-03-08"


def test_aware_report_dates_keep_their_instant(client) -> None:
    _signup(client, tz="America/New_York")

    # 02:00 UTC on Sunday is still Saturday evening in New York.
    weekly = client.get("/api/reports/weekly", params={"date": "2026-03-08T02:00:00Z"}).json()

    assert weekly["week_id"] == "2026-03-01"


def test_admin_supervision_over_http(client) -> None:
    _signup(client, "boss")
    client.post("/api/auth/logout")
    employee = _signup(client, "worker")
    assert client.post("/api/sessions/clock-in").status_code == 201
    assert client.get("/api/messages/admins").json()["admins"] == []
    assert client.get("/api/messages/pending-count").json()["count"] == 0
    assert client.get("/api/admin/employees").status_code == 403
    client.post("/api/auth/logout")

    client.post("/api/auth/login", json={"email": "boss@example.com", "password": "correct-horse"})
    linked = client.post("/api/admin/employees", json={"email": "worker@example.com"})
    assert linked.status_code == 201

    employees = client.get("/api/admin/employees").json()["employees"]
    assert [row["id"] for row in employees] == [employee["id"]]
    assert employees[0]["active"]["user_id"] == employee["id"]
    assert employees[0]["week_total_ms"] == 0
    client.post("/api/auth/logout")

    client.post("/api/auth/login", json={"email": "worker@example.com", "password": "correct-horse"})
    admins = client.get("/api/messages/admins").json()["admins"]
    assert [row["username"] for row in admins] == ["boss"]
