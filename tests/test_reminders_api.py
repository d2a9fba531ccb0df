from fastapi.testclient import TestClient
from physiotrack.main import app
import uuid

client = TestClient(app)
PWD = "StrongPassw0rd!"

def auth():
    e = f"{uuid.uuid4().hex[:10]}@ex.com"
    client.post("/auth/register", json={"email": e, "name": "R", "password": PWD})
    tok = client.post("/auth/login", json={"email": e, "password": PWD}).json()["access_token"]
    return {"Authorization": f"Bearer {tok}"}

def test_reminder_crud():
    h = auth()
    r = client.post("/reminders", headers=h, json={"title": "Stretch", "time": "08:30", "days_of_week": [5, 1, 3]})
    assert r.status_code == 201, r.text
    rem = r.json()
    assert rem["days_of_week"] == [1, 3, 5]
    assert rem["is_enabled"] is True
    assert rem["reminder_type"] == "exercise"

    r = client.patch(f"/reminders/{rem['id']}", headers=h, json={"is_enabled": False, "time": "19:05"})
    assert r.status_code == 200
    assert r.json()["is_enabled"] is False and r.json()["time"] == "19:05"

    client.post("/reminders", headers=h, json={"title": "Log pain", "time": "07:00", "days_of_week": [7], "reminder_type": "pain_log"})
    assert [x["title"] for x in client.get("/reminders", headers=h).json()] == ["Log pain", "Stretch"]

    assert client.delete(f"/reminders/{rem['id']}", headers=h).status_code == 204
    assert client.patch(f"/reminders/{rem['id']}", headers=h, json={"title": "x"}).status_code == 404

def test_reminder_validation():
    h = auth()
    bad = [
        {"title": "A", "time": "24:00", "days_of_week": [1]},
        {"title": "A", "time": "8:30", "days_of_week": [1]},
        {"title": "A", "time": "08:30", "days_of_week": []},
        {"title": "A", "time": "08:30", "days_of_week": [1, 1]},
        {"title": "A", "time": "08:30", "days_of_week": [8]},
    ]
    for body in bad:
        assert client.post("/reminders", headers=h, json=body).status_code == 422, body

def test_patch_rejects_null_fields():
    h = auth()
    rem = client.post("/reminders", headers=h, json={"title": "Walk", "time": "10:00", "days_of_week": [2]}).json()
    for field in ("title", "time", "days_of_week", "is_enabled", "reminder_type", "message"):
        r = client.patch(f"/reminders/{rem['id']}", headers=h, json={field: None})
        assert r.status_code == 422, field
    assert client.get("/reminders", headers=h).json()[0]["title"] == "Walk"
