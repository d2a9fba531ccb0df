from fastapi.testclient import TestClient
from physiotrack.main import app
import uuid

client = TestClient(app)
PWD = "StrongPassw0rd!"

def auth():
    e = f"{uuid.uuid4().hex[:10]}@ex.com"
    client.post("/auth/register", json={"email": e, "name": "V", "password": PWD})
    tok = client.post("/auth/login", json={"email": e, "password": PWD}).json()["access_token"]
    h = {"Authorization": f"Bearer {tok}"}
    return h, client.get("/auth/me", headers=h).json()["id"]

def test_goals_defaults_and_update():
    h, _ = auth()
    assert client.get("/users/me/goals", headers=h).json() == {"daily_session_target": 1, "daily_point_target": 10}
    r = client.put("/users/me/goals", headers=h, json={"daily_session_target": 3, "daily_point_target": 30})
    assert r.json()["daily_session_target"] == 3
    assert client.put("/users/me/goals", headers=h, json={"daily_session_target": -1, "daily_point_target": 30}).status_code == 422

def test_voice_settings_reach_live_controller():
    h, user_id = auth()
    assert client.get("/users/me/voice", headers=h).json() == {"enabled": True, "announce_start": True, "announce_complete": True}

    # builds the controller with voice on
    client.post("/sessions/active", headers=h, json={"exercises": [{"name": "Arm Raise"}]})
    ctrl = app.state.controllers.get(user_id)
    assert len(ctrl.announcer.recent) == 1

    r = client.put("/users/me/voice", headers=h, json={"enabled": False, "announce_start": True, "announce_complete": True})
    assert r.status_code == 200
    assert client.get("/users/me/voice", headers=h).json()["enabled"] is False

    client.post("/sessions/active/advance", headers=h)
    client.post("/sessions/active/complete", headers=h)
    assert len(ctrl.announcer.recent) == 1

def test_controller_seeded_from_storage():
    h, user_id = auth()
    client.post("/sessions/active", headers=h, json={"exercises": [{"name": "Arm Raise"}]})
    client.post("/sessions/active/complete", headers=h)

    # a restart loses in-memory controllers, not history
    app.state.controllers.drop(user_id)
    client.post("/sessions/active", headers=h, json={"exercises": [{"name": "Knee Bend"}]})
    done = client.post("/sessions/active/complete", headers=h).json()
    assert done["totals"] == {"sessions": 2, "points": 20}
    assert len(app.state.controllers.get(user_id).history) == 2

def test_live_announcer_speaks_catalog_instruction():
    h, user_id = auth()
    client.post("/sessions/active", headers=h, json={"exercises": [{"name": "Neck Stretch"}]})
    spoken = app.state.controllers.get(user_id).announcer.recent[-1]
    assert "Turn your head slowly" in spoken
