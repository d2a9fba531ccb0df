from fastapi.testclient import TestClient
from physiotrack.main import app
import uuid

client = TestClient(app)
PWD = "StrongPassw0rd!"

def auth():
    e = f"{uuid.uuid4().hex[:10]}@ex.com"
    client.post("/auth/register", json={"email": e, "name": "P", "password": PWD})
    tok = client.post("/auth/login", json={"email": e, "password": PWD}).json()["access_token"]
    return {"Authorization": f"Bearer {tok}"}

def test_pain_entry_crud():
    h = auth()
    r = client.post("/pain-entries", headers=h, json={"pain_level": 6, "body_part": "knee", "mood": "bad", "notes": "after stairs"})
    assert r.status_code == 201, r.text
    entry = r.json()
    assert entry["pain_level"] == 6 and entry["body_part"] == "knee"

    r = client.patch(f"/pain-entries/{entry['id']}", headers=h, json={"pain_level": 3})
    assert r.status_code == 200
    assert r.json()["pain_level"] == 3
    assert r.json()["notes"] == "after stairs"

    assert [e["id"] for e in client.get("/pain-entries", headers=h).json()] == [entry["id"]]
    assert client.delete(f"/pain-entries/{entry['id']}", headers=h).status_code == 204
    assert client.get(f"/pain-entries/{entry['id']}", headers=h).status_code == 404

def test_pain_entry_validation():
    h = auth()
    assert client.post("/pain-entries", headers=h, json={"pain_level": 11, "body_part": "knee"}).status_code == 422
    assert client.post("/pain-entries", headers=h, json={"pain_level": 2, "body_part": "tail"}).status_code == 422

def test_pain_entries_are_private():
    owner, other = auth(), auth()
    entry = client.post("/pain-entries", headers=owner, json={"pain_level": 1, "body_part": "neck"}).json()
    assert client.get(f"/pain-entries/{entry['id']}", headers=other).status_code == 404
    assert client.patch(f"/pain-entries/{entry['id']}", headers=other, json={"pain_level": 5}).status_code == 404

def test_pain_tracker_badge_after_ten_entries():
    h = auth()
    for level in range(10):
        client.post("/pain-entries", headers=h, json={"pain_level": level, "body_part": "back"})
    mine = [b["id"] for b in client.get("/badges/me", headers=h).json()]
    assert mine == ["pain_tracker"]

def test_badge_catalog_is_public():
    r = client.get("/badges")
    assert r.status_code == 200
    assert "first_session" in [b["id"] for b in r.json()]

def test_patch_rejects_null_for_required_fields():
    h = auth()
    entry = client.post("/pain-entries", headers=h, json={"pain_level": 5, "body_part": "hip", "notes": "x"}).json()
    assert client.patch(f"/pain-entries/{entry['id']}", headers=h, json={"pain_level": None}).status_code == 422
    assert client.patch(f"/pain-entries/{entry['id']}", headers=h, json={"body_part": None}).status_code == 422

    # optional columns can still be cleared
    r = client.patch(f"/pain-entries/{entry['id']}", headers=h, json={"notes": None})
    assert r.status_code == 200
    assert r.json()["notes"] is None and r.json()["pain_level"] == 5

def test_badges_carry_display_glyph():
    by_id = {b["id"]: b for b in client.get("/badges").json()}
    assert by_id["streak_7"]["glyph"] == "🔥"
    assert by_id["first_session"]["glyph"] == "🏆"
