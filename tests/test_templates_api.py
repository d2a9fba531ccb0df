from fastapi.testclient import TestClient
from physiotrack.main import app
import uuid

client = TestClient(app)
PWD = "StrongPassw0rd!"

def auth():
    e = f"{uuid.uuid4().hex[:10]}@ex.com"
    client.post("/auth/register", json={"email": e, "name": "T", "password": PWD})
    tok = client.post("/auth/login", json={"email": e, "password": PWD}).json()["access_token"]
    return {"Authorization": f"Bearer {tok}"}

def test_create_list_get_delete_template():
    h = auth()
    r = client.post("/templates", headers=h, json={
        "name": "  Back Care ",
        "exercises": [{"name": "lower back stretch"}, {"name": "Cat Camel", "description": "On all fours"}, {"name": "Back Stretch"}],
    })
    assert r.status_code == 201, r.text
    tpl = r.json()
    assert tpl["name"] == "Back Care"
    assert tpl["estimated_duration"] == "15 min"
    assert tpl["is_ai_generated"] is False
    assert [e["name"] for e in tpl["exercises"]] == ["Lower Back Stretch", "Cat Camel", "Back Stretch"]
    assert [e["position"] for e in tpl["exercises"]] == [0, 1, 2]

    assert [t["id"] for t in client.get("/templates", headers=h).json()] == [tpl["id"]]
    assert client.get(f"/templates/{tpl['id']}", headers=h).json()["name"] == "Back Care"

    assert client.delete(f"/templates/{tpl['id']}", headers=h).status_code == 204
    assert client.get(f"/templates/{tpl['id']}", headers=h).status_code == 404

def test_template_validation():
    h = auth()
    assert client.post("/templates", headers=h, json={"name": "Empty", "exercises": []}).status_code == 422
    assert client.post("/templates", headers=h, json={"name": " ", "exercises": [{"name": "Arm Raise"}]}).status_code == 422

def test_templates_are_private():
    owner, other = auth(), auth()
    tpl = client.post("/templates", headers=owner, json={"name": "Mine", "exercises": [{"name": "Arm Raise"}]}).json()
    assert client.get(f"/templates/{tpl['id']}", headers=other).status_code == 404
    assert client.delete(f"/templates/{tpl['id']}", headers=other).status_code == 404
    assert client.get("/templates", headers=other).json() == []

def test_exercise_catalog():
    r = client.get("/exercises")
    assert r.status_code == 200
    names = [e["name"] for e in r.json()]
    assert "Arm Raise" in names and len(names) == 8
    assert all(e["instruction"] for e in r.json())
