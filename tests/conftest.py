import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

from fastapi.testclient import TestClient

from music_progress.config import Settings
from music_progress.infrastructure.registry import build_registry
from music_progress.infrastructure.security import TokenService
from music_progress.main import create_app

TEST_SECRET = "test-secret"


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings():
    """Настройки для тестов: без rate limiting, пароли без bcrypt"""
    return Settings(
        JWT_SECRET=TEST_SECRET,
        PASSWORD_SCHEMES=["plaintext"],
        RATE_LIMIT_ENABLED=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def tokens(clock):
    return TokenService(secret=TEST_SECRET, clock=clock)


@pytest.fixture
def registry(settings, clock):
    return build_registry(settings, clock=clock)


@pytest.fixture
def client(settings, registry):
    """Фикстура для тестового клиента (новые хранилища на каждый тест)"""
    app = create_app(settings=settings, registry=registry)
    yield TestClient(app)


def register(client, kind, name, email, password):
    return client.post(f"/{kind}/register", json={"name": name, "email": email, "password": password})


def login_token(client, kind, email, password) -> str:
    response = client.post(f"/{kind}/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def instructor_token(client):
    register(client, "instructors", "Ana", "i@example.com", "pw1")
    return login_token(client, "instructors", "i@example.com", "pw1")


@pytest.fixture
def student_token(client):
    register(client, "students", "Bruno", "s@example.com", "pw2")
    return login_token(client, "students", "s@example.com", "pw2")
