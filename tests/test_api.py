from sqlalchemy import func, select

from app.main import RateLimiter
from app.models.mod import Mod
from app.models.rating import Rating

MOD_BODY = {
    "title": "Foo",
    "description": "Adds **foo** blocks.",
    "icon_url": "https://example.com/foo.png",
    "size": "10MB",
    "screenshots": ["https://example.com/1.png", "https://example.com/2.png"],
}


def _mod_count(db) -> int:
    return db.scalar(select(func.count()).select_from(Mod))


def test_end_to_end_flow(admin_client, make_user, login_as):
    create_resp = admin_client.post("/api/mods", json=MOD_BODY)
    assert create_resp.status_code == 200, create_resp.text
    mod_id = create_resp.json()["id"]

    list_resp = admin_client.get("/api/mods")
    assert list_resp.status_code == 200
    listed = list_resp.json()
    assert [mod["id"] for mod in listed] == [mod_id]
    assert listed[0]["screenshots"] == MOD_BODY["screenshots"]
    assert listed[0]["rating"] == 0
    assert listed[0]["author_name"] is None

    update_resp = admin_client.put(f"/api/mods/{mod_id}", json={**MOD_BODY, "title": "Foo 2", "screenshots": []})
    assert update_resp.status_code == 200
    assert update_resp.json() == {"success": True}

    detail = admin_client.get(f"/api/mods/{mod_id}").json()
    assert detail["title"] == "Foo 2"
    assert detail["screenshots"] == []

    first = make_user("google-1", "Alex")
    login_as(admin_client, first)
    assert admin_client.post(f"/api/mods/{mod_id}/rate", json={"score": 5}).json() == {"success": True, "newRating": 5.0}
    assert admin_client.post(f"/api/mods/{mod_id}/rate", json={"score": 3}).json()["newRating"] == 3.0

    second = make_user("google-2", "Steve")
    login_as(admin_client, second)
    assert admin_client.post(f"/api/mods/{mod_id}/rate", json={"score": 1}).json()["newRating"] == 2.0
    assert admin_client.get(f"/api/mods/{mod_id}").json()["rating"] == 2.0

    delete_resp = admin_client.delete(f"/api/mods/{mod_id}")
    assert delete_resp.status_code == 200
    assert admin_client.get(f"/api/mods/{mod_id}").status_code == 404


def test_author_is_logged_in_admin(admin_client, make_user, login_as):
    user = make_user("google-7", "Jeb")
    login_as(admin_client, user)
    mod_id = admin_client.post("/api/mods", json=MOD_BODY).json()["id"]

    detail = admin_client.get(f"/api/mods/{mod_id}").json()
    assert detail["author_id"] == user.id
    assert detail["author_name"] == "Jeb"


def test_admin_operations_require_admin_session(client, db, make_user, login_as):
    login_as(client, make_user())

    create_resp = client.post("/api/mods", json=MOD_BODY)
    assert create_resp.status_code == 403
    assert create_resp.json() == {"error": "Unauthorized. Admin password required."}
    assert _mod_count(db) == 0

    assert client.put("/api/mods/1", json=MOD_BODY).status_code == 403
    assert client.delete("/api/mods/1").status_code == 403


def test_admin_rejections_do_not_change_existing_mod(admin_client, db):
    mod_id = admin_client.post("/api/mods", json=MOD_BODY).json()["id"]
    admin_client.post("/api/auth/logout")

    assert admin_client.put(f"/api/mods/{mod_id}", json={**MOD_BODY, "title": "Hacked"}).status_code == 403
    assert admin_client.delete(f"/api/mods/{mod_id}").status_code == 403

    detail = admin_client.get(f"/api/mods/{mod_id}").json()
    assert detail["title"] == "Foo"
    assert detail["screenshots"] == MOD_BODY["screenshots"]


def test_rate_requires_login(admin_client, db):
    mod_id = admin_client.post("/api/mods", json=MOD_BODY).json()["id"]

    resp = admin_client.post(f"/api/mods/{mod_id}/rate", json={"score": 4})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Login required to rate"}
    assert db.scalar(select(func.count()).select_from(Rating)) == 0
    assert admin_client.get(f"/api/mods/{mod_id}").json()["rating"] == 0


def test_forged_user_cookie_is_rejected(admin_client):
    mod_id = admin_client.post("/api/mods", json=MOD_BODY).json()["id"]
    admin_client.cookies.set("user_id", "1")

    assert admin_client.post(f"/api/mods/{mod_id}/rate", json={"score": 4}).status_code == 401


def test_rate_validation(admin_client, make_user, login_as):
    mod_id = admin_client.post("/api/mods", json=MOD_BODY).json()["id"]
    login_as(admin_client, make_user())

    for bad in (0, 6, "5", 4.5, None):
        resp = admin_client.post(f"/api/mods/{mod_id}/rate", json={"score": bad})
        assert resp.status_code == 400, bad
        assert resp.json()["error"] == "Invalid request"

    assert admin_client.post("/api/mods/999/rate", json={"score": 3}).status_code == 404


def test_create_mod_validation(admin_client, db):
    assert admin_client.post("/api/mods", json={**MOD_BODY, "title": ""}).status_code == 400
    assert admin_client.post("/api/mods", json={**MOD_BODY, "title": "   "}).status_code == 400
    assert admin_client.post("/api/mods", json={"description": "no title"}).status_code == 400
    assert admin_client.post("/api/mods", json={**MOD_BODY, "screenshots": [""]}).status_code == 400
    assert _mod_count(db) == 0


def test_unknown_mod_returns_404(admin_client):
    resp = admin_client.get("/api/mods/12345")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Mod not found"}
    assert admin_client.put("/api/mods/12345", json=MOD_BODY).status_code == 404
    assert admin_client.delete("/api/mods/12345").status_code == 404


def test_health_and_index(client):
    assert client.get("/health").json() == {"status": "ok"}
    index = client.get("/")
    assert index.status_code == 200
    assert "MineMods" in index.text


def test_rate_limiter_blocks_within_window():
    now = [1000.0]
    limiter = RateLimiter(2, clock=lambda: now[0])

    assert limiter.hit("10.0.0.1") is True
    assert limiter.hit("10.0.0.1") is True
    assert limiter.hit("10.0.0.1") is False
    assert limiter.hit("10.0.0.2") is True

    now[0] += 61
    assert limiter.hit("10.0.0.1") is True


def test_rate_limiter_forgets_idle_clients():
    now = [1000.0]
    limiter = RateLimiter(5, clock=lambda: now[0])
    for idx in range(50):
        limiter.hit(f"10.0.0.{idx}")
    assert len(limiter._hits) == 50

    now[0] += 61
    limiter.hit("10.0.1.1")
    assert list(limiter._hits) == ["10.0.1.1"]
