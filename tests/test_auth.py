from fastapi.testclient import TestClient

from conftest import ADMIN_PASSWORD, login, login_admin, make_settings
from tour_service.app.main import create_app
from tour_service.app.storage.memory_storage import MemoryStorage

COOKIE_NAME = "marrakech.session"


def test_login_sets_session_cookie_and_returns_permissions(client, storage):
    response = login_admin(client)

    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["username"] == "ahmed"
    assert body["user"]["role"] == "admin"
    assert "manage_bookings" in body["user"]["permissions"]

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{COOKIE_NAME}=")
    assert "httponly" in set_cookie.lower()
    assert "samesite=lax" in set_cookie.lower()

    actions = [log.action for log in storage.list_audit_logs()]
    assert "User ahmed logged in" in actions


def test_current_user(client):
    assert client.get("/api/auth/user").status_code == 401
    assert client.get("/api/auth/user").json() == {
        "message": "Not authenticated", "error": "Authentication Required"}

    login_admin(client)
    response = client.get("/api/auth/user")
    assert response.status_code == 200
    assert response.json()["username"] == "ahmed"
    assert "view_audit_log" not in response.json()["permissions"]


def test_wrong_password_is_401_without_cookie(client, storage):
    response = login(client, "ahmed", "wrong-password")

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}
    assert "set-cookie" not in response.headers
    assert not storage.sessions


def test_unknown_user_is_401(client):
    response = login(client, "nobody", ADMIN_PASSWORD)
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid credentials"}


def test_admin_routes_need_a_session(client):
    for path in ("/api/admin/bookings", "/api/admin/activities", "/api/admin/reviews",
                 "/api/admin/audit-logs", "/api/admin/analytics/earnings"):
        response = client.get(path)
        assert response.status_code == 401, path
        assert response.json()["error"] == "Authentication Required"


def test_admin_is_forbidden_from_superadmin_routes(admin_client):
    for path in ("/api/admin/audit-logs", "/api/admin/analytics/earnings",
                 "/api/admin/system-health"):
        response = admin_client.get(path)
        assert response.status_code == 403, path
        assert response.json()["error"] == "Insufficient Privileges"


def test_admin_responses_are_not_cached(admin_client):
    response = admin_client.get("/api/admin/bookings")
    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store, no-cache, must-revalidate, private"
    assert response.headers["pragma"] == "no-cache"
    assert response.headers["expires"] == "0"


def test_logout_revokes_the_session(client):
    login_admin(client)
    token = client.cookies.get(COOKIE_NAME)
    assert token

    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}
    assert client.get("/api/auth/user").status_code == 401

    # replaying the old cookie does not bring the session back
    client.cookies.set(COOKIE_NAME, token)
    assert client.get("/api/auth/user").status_code == 401


def test_tampered_cookie_is_rejected(client):
    client.cookies.set(COOKIE_NAME, "not-a-token")
    assert client.get("/api/auth/user").status_code == 401


def test_sixth_login_attempt_is_rate_limited(client):
    for _ in range(5):
        assert login(client, "ahmed", "wrong-password").status_code == 401

    response = login(client, "ahmed", ADMIN_PASSWORD)

    assert response.status_code == 429
    assert response.json()["error"] == "Too Many Requests"
    assert int(response.headers["retry-after"]) > 0


def test_rate_limits_are_skipped_in_development():
    app = create_app(make_settings(APP_ENV="development"), MemoryStorage())
    with TestClient(app) as client:
        for _ in range(7):
            assert login(client, "ahmed", "wrong-password").status_code == 401



def test_forwarded_header_does_not_reset_login_limit(client):
    for i in range(5):
        response = login(client, "ahmed", "wrong-password",
                         headers={"X-Forwarded-For": f"10.0.0.{i}"})
        assert response.status_code == 401

    response = login(client, "ahmed", ADMIN_PASSWORD, headers={"X-Forwarded-For": "10.0.0.99"})

    assert response.status_code == 429


def test_trusted_proxy_limits_each_forwarded_client():
    app = create_app(make_settings(TRUST_PROXY=True), MemoryStorage())
    with TestClient(app) as client:
        for _ in range(5):
            response = login(client, "ahmed", "wrong-password",
                             headers={"X-Forwarded-For": "203.0.113.7"})
            assert response.status_code == 401

        blocked = login(client, "ahmed", ADMIN_PASSWORD,
                        headers={"X-Forwarded-For": "203.0.113.7"})
        other = login(client, "ahmed", ADMIN_PASSWORD,
                      headers={"X-Forwarded-For": "203.0.113.8"})

    assert blocked.status_code == 429
    assert other.status_code == 200


def test_admin_routes_allow_100_requests_per_minute(admin_client):
    for _ in range(100):
        response = admin_client.get("/api/admin/bookings")
        assert response.status_code == 200

    response = admin_client.get("/api/admin/bookings")

    assert response.status_code == 429
    assert response.json()["error"] == "Too Many Requests"
    assert response.headers["ratelimit-limit"] == "100"


def test_public_routes_allow_200_requests_per_minute(client):
    for _ in range(200):
        assert client.get("/api/activities").status_code == 200

    response = client.get("/api/activities")

    assert response.status_code == 429
    assert response.headers["ratelimit-limit"] == "200"
    assert response.headers["ratelimit-remaining"] == "0"
