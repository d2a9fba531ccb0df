from fastapi.testclient import TestClient
from physiotrack.main import app
import uuid

client = TestClient(app)
def email(): return f"{uuid.uuid4().hex[:10]}@ex.com"
PWD = "StrongPassw0rd!"

def token(e=None):
    e = e or email()
    client.post("/auth/register", json={"email": e, "name": "U", "password": PWD})
    return client.post("/auth/login", json={"email": e, "password": PWD}).json()["access_token"]

def test_start_with_empty_selection_422():
    h = {"Authorization": f"Bearer {token()}"}
    r = client.post("/sessions/active", headers=h, json={"exercises": []})
    assert r.status_code == 422
    assert client.get("/sessions/active", headers=h).status_code == 404

def test_start_needs_exactly_one_source():
    h = {"Authorization": f"Bearer {token()}"}
    assert client.post("/sessions/active", headers=h, json={}).status_code == 422
    r = client.post("/sessions/active", headers=h, json={"exercises": [{"name": "Arm Raise"}], "template_id": 1})
    assert r.status_code == 422

def test_second_start_409_keeps_first():
    h = {"Authorization": f"Bearer {token()}"}
    first = client.post("/sessions/active", headers=h, json={"exercises": [{"name": "Arm Raise"}]}).json()
    r = client.post("/sessions/active", headers=h, json={"exercises": [{"name": "Knee Bend"}]})
    assert r.status_code == 409
    assert client.get("/sessions/active", headers=h).json()["id"] == first["id"]

def test_start_from_missing_template_404():
    h = {"Authorization": f"Bearer {token()}"}
    r = client.post("/sessions/active", headers=h, json={"template_id": 999999})
    assert r.status_code == 404

def test_start_from_someone_elses_template_404():
    owner = {"Authorization": f"Bearer {token()}"}
    tpl = client.post("/templates", headers=owner, json={"name": "Mine", "exercises": [{"name": "Arm Raise"}]}).json()
    other = {"Authorization": f"Bearer {token()}"}
    assert client.post("/sessions/active", headers=other, json={"template_id": tpl["id"]}).status_code == 404

def test_idle_operations_404():
    h = {"Authorization": f"Bearer {token()}"}
    assert client.post("/sessions/active/advance", headers=h).status_code == 404
    assert client.post("/sessions/active/complete", headers=h).status_code == 404
    assert client.delete("/sessions/active", headers=h).status_code == 404
    me = client.get("/auth/me", headers=h).json()
    assert me["total_sessions"] == 0

def test_sessions_are_per_user():
    a = {"Authorization": f"Bearer {token()}"}
    b = {"Authorization": f"Bearer {token()}"}
    client.post("/sessions/active", headers=a, json={"exercises": [{"name": "Arm Raise"}]})
    assert client.get("/sessions/active", headers=b).status_code == 404
    assert client.post("/sessions/active", headers=b, json={"exercises": [{"name": "Knee Bend"}]}).status_code == 201
