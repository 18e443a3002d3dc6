from fastapi.testclient import TestClient

from conftest import make_settings
from tour_service.app.main import create_app
from tour_service.app.storage.memory_storage import MemoryStorage


class BrokenStorage(MemoryStorage):
    def ping(self) -> bool:
        return False


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["storage"] == "memory"
    assert body["activities"] == 5
    assert body["environment"] == "test"


def test_health_reports_unreachable_storage():
    with TestClient(create_app(make_settings(), BrokenStorage())) as client:
        response = client.get("/api/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert response.json()["error"] == "Database connection failed"


def test_system_health_for_superadmin(superadmin_client):
    response = superadmin_client.get("/api/admin/system-health")

    assert response.status_code == 200
    body = response.json()
    assert body["storage"]["kind"] == "memory"
    assert body["storage"]["isConnected"] is True
    assert body["server"]["uptimeSeconds"] >= 0
    assert body["server"]["pythonVersion"]


def test_audit_log_is_newest_first_for_superadmin(superadmin_client):
    logs = superadmin_client.get("/api/admin/audit-logs").json()
    assert logs[0]["action"] == "User nadia logged in"
    assert logs[0]["details"].startswith("Login from IP:")


def test_whatsapp_contacts_for_admin(admin_client):
    response = admin_client.get("/api/admin/whatsapp-contacts")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Ahmed", "Yahia", "Nadia"]


def test_security_headers_and_request_id(client):
    response = client.get("/api/activities", headers={"X-Request-Id": "req-42"})

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Request-Id"] == "req-42"
    assert "Strict-Transport-Security" not in response.headers


def test_production_requires_https_except_health():
    settings = make_settings(APP_ENV="production")
    with TestClient(create_app(settings, MemoryStorage())) as client:
        plain = client.get("/api/activities")
        proxied = client.get("/api/activities", headers={"X-Forwarded-Proto": "https"})
        health = client.get("/api/health")

    assert plain.status_code == 400
    assert plain.json()["error"] == "HTTPS Required"
    assert proxied.status_code == 200
    assert "Strict-Transport-Security" in proxied.headers
    assert health.status_code == 200
