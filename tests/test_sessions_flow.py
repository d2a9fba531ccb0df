from fastapi.testclient import TestClient
from physiotrack.main import app
import uuid

client = TestClient(app)

def unique_email():
    return f"u_{uuid.uuid4().hex[:10]}@example.com"

def login_token():
    email = unique_email()
    pwd = "StrongPassw0rd!"
    client.post("/auth/register", json={"email": email, "name": "Ok", "password": pwd})
    r = client.post("/auth/login", json={"email": email, "password": pwd})
    assert r.status_code == 200
    return r.json()["access_token"]

def test_start_advance_and_complete_session():
    token = login_token()
    H = {"Authorization": f"Bearer {token}"}

    # start with a catalog exercise and an ad hoc one
    r = client.post("/sessions/active", headers=H,
                    json={"exercises": [{"name": "arm raise"}, {"name": "Wall Push", "description": "Push off the wall"}]})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["cursor"] == 0
    assert body["current_exercise"]["name"] == "Arm Raise"
    assert body["exercises"][0]["description"] == "Raise the arms out to the sides"
    assert body["exercises"][1]["description"] == "Push off the wall"
    assert body["current_completed"] is False
    assert body["all_completed"] is False
    session_id = body["id"]

    # the active session is readable
    r = client.get("/sessions/active", headers=H)
    assert r.status_code == 200
    assert r.json()["id"] == session_id

    # complete first exercise
    r = client.post("/sessions/active/advance", headers=H)
    assert r.status_code == 200
    body = r.json()
    assert body["cursor"] == 1
    assert body["exercises"][0]["completed"] is True
    assert body["current_completed"] is True
    assert body["current_exercise"]["name"] == "Wall Push"

    # complete second, then advancing again is a no-op
    client.post("/sessions/active/advance", headers=H)
    r = client.post("/sessions/active/advance", headers=H)
    body = r.json()
    assert body["cursor"] == 2
    assert body["all_completed"] is True
    assert body["current_exercise"] is None

    # finish
    r = client.post("/sessions/active/complete", headers=H)
    assert r.status_code == 200, r.text
    done = r.json()
    assert done["session_id"] == session_id
    assert done["points_earned"] == 10
    assert done["totals"] == {"sessions": 1, "points": 10}
    assert done["persisted"] is True
    assert "first_session" in [b["id"] for b in done["new_badges"]]

    # nothing active any more
    assert client.get("/sessions/active", headers=H).status_code == 404

    # stored in history and totals
    r = client.get("/sessions", headers=H)
    assert r.status_code == 200
    history = r.json()
    assert len(history) == 1
    assert history[0]["uid"] == session_id
    assert [e["completed"] for e in history[0]["exercises"]] == [True, True]
    me = client.get("/auth/me", headers=H).json()
    assert me["total_sessions"] == 1 and me["total_points"] == 10

def test_complete_with_pending_exercises_still_rewards():
    H = {"Authorization": f"Bearer {login_token()}"}
    client.post("/sessions/active", headers=H, json={"exercises": [{"name": "Knee Bend"}, {"name": "Back Stretch"}]})
    client.post("/sessions/active/advance", headers=H)
    r = client.post("/sessions/active/complete", headers=H)
    assert r.status_code == 200
    body = r.json()
    assert body["points_earned"] == 10
    assert [e["completed"] for e in body["exercises"]] == [True, False]

def test_cancel_discards_session():
    H = {"Authorization": f"Bearer {login_token()}"}
    client.post("/sessions/active", headers=H, json={"exercises": [{"name": "Neck Stretch"}]})
    client.post("/sessions/active/advance", headers=H)
    r = client.delete("/sessions/active", headers=H)
    assert r.status_code == 204
    assert client.get("/sessions/active", headers=H).status_code == 404
    assert client.get("/sessions", headers=H).json() == []
    me = client.get("/auth/me", headers=H).json()
    assert me["total_sessions"] == 0 and me["total_points"] == 0

def test_start_from_template():
    H = {"Authorization": f"Bearer {login_token()}"}
    tpl = client.post("/templates", headers=H,
                      json={"name": "Morning", "exercises": [{"name": "Shoulder Roll"}, {"name": "Hip Movements"}]}).json()
    r = client.post("/sessions/active", headers=H, json={"template_id": tpl["id"]})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["template_id"] == tpl["id"]
    assert body["template_name"] == "Morning"
    assert [e["name"] for e in body["exercises"]] == ["Shoulder Roll", "Hip Movements"]
    assert all(e["completed"] is False for e in body["exercises"])

    client.post("/sessions/active/complete", headers=H)
    stored = client.get("/sessions", headers=H).json()[0]
    assert stored["template_name"] == "Morning"

def test_requires_auth():
    # no token -> 401s
    assert client.get("/sessions").status_code in (401, 403)
    assert client.post("/sessions/active", json={"exercises": [{"name": "x"}]}).status_code in (401, 403)

def test_storage_failure_keeps_completed_session(monkeypatch):
    from sqlalchemy.exc import SQLAlchemyError
    from physiotrack.repositories.session_repo import SessionRepository

    H = {"Authorization": f"Bearer {login_token()}"}
    user_id = client.get("/auth/me", headers=H).json()["id"]
    client.post("/sessions/active", headers=H, json={"exercises": [{"name": "Arm Raise"}]})
    client.post("/sessions/active/advance", headers=H)

    def broken(self, user, session):
        raise SQLAlchemyError("database unavailable")
    monkeypatch.setattr(SessionRepository, "record_completion", broken)

    r = client.post("/sessions/active/complete", headers=H)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["persisted"] is False
    assert body["totals"] == {"sessions": 1, "points": 10}
    assert body["new_badges"] == []

    # in-memory transition stands
    assert client.get("/sessions/active", headers=H).status_code == 404
    ctrl = app.state.controllers.get(user_id)
    assert [s.id for s in ctrl.history] == [body["session_id"]]
    assert ctrl.user_totals.sessions == 1
