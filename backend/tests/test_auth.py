from tests.conftest import auth_headers


def test_login_success(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "Admin@Example.com"})
    assert resp.status_code == 200
    data = resp.json()
    assert "access_token" in data
    assert data["user"]["role"] == "admin"


def test_login_unknown_email(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "nobody@example.com"})
    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_me_authenticated(client, seed_users):
    headers = auth_headers(client, "rajesh.kumar@example.com")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Rajesh Kumar"


def test_me_unauthenticated(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "error": "Missing authorization header"}


def test_bad_token_rejected(client, seed_users):
    resp = client.get("/api/admin/profiles", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_member_cannot_use_admin_endpoints(client, seed_users, rajesh_profile):
    member = auth_headers(client, "priya.sharma@example.com")
    uid = rajesh_profile.user_id
    for method, path in (
        ("get", "/api/admin/profiles"),
        ("get", "/api/admin/profiles/stats"),
        ("post", f"/api/admin/profiles/{uid}/approve"),
        ("post", f"/api/admin/profiles/{uid}/reject"),
        ("get", "/api/admin/update-requests"),
    ):
        resp = getattr(client, method)(path, headers=member)
        assert resp.status_code == 403, path
        assert resp.json() == {"success": False, "error": "Unauthorized - Admin access required"}


def test_admin_endpoints_require_login(client, rajesh_profile):
    assert client.get("/api/admin/profiles").status_code == 401
    assert client.post(f"/api/admin/profiles/{rajesh_profile.user_id}/approve").status_code == 401


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_logout(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200
