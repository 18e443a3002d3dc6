import pytest
from fastapi.testclient import TestClient

from shared.core.config import Settings
from tour_service.app.main import create_app
from tour_service.app.storage.memory_storage import MemoryStorage

ADMIN_PASSWORD = "admin-pass-123"
SUPERADMIN_PASSWORD = "super-pass-123"


def make_settings(**overrides) -> Settings:
    values = dict(
        APP_ENV="test",
        DATABASE_URL=None,
        SESSION_SECRET="test-session-secret",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        SUPERADMIN_PASSWORD=SUPERADMIN_PASSWORD,
        BCRYPT_ROUNDS=4,
    )
    values.update(overrides)
    return Settings(**values)


def login(client: TestClient, username: str, password: str, headers: dict = None):
    return client.post("/api/auth/login", json={"username": username, "password": password},
                       headers=headers)


def login_admin(client: TestClient):
    response = login(client, "ahmed", ADMIN_PASSWORD)
    assert response.status_code == 200
    return response


def login_superadmin(client: TestClient):
    response = login(client, "nadia", SUPERADMIN_PASSWORD)
    assert response.status_code == 200
    return response


def find_activity(client: TestClient, name: str) -> dict:
    activities = client.get("/api/activities").json()
    return next(a for a in activities if a["name"] == name)


def booking_payload(activity_id: str, **overrides) -> dict:
    payload = {
        "customerName": "Marie",
        "customerPhone": "+33612345678",
        "activityId": activity_id,
        "numberOfPeople": 2,
        "preferredDate": "2025-07-15T00:00:00.000Z",
        "participantNames": ["Marie", "Paul"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(settings, storage):
    with TestClient(create_app(settings, storage)) as c:
        yield c


@pytest.fixture
def admin_client(client):
    login_admin(client)
    return client


@pytest.fixture
def superadmin_client(client):
    login_superadmin(client)
    return client
