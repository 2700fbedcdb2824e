from datetime import datetime, timezone

from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from conftest import TEST_SECRET, auth, login_token, register
from music_progress.application.use_cases import register_account
from music_progress.config import Settings
from music_progress.infrastructure.registry import build_registry
from music_progress.interfaces.http.schemas import ProgressCreate, ProgressOut
from music_progress.main import create_app


def run_scenario(client):
    assert register(client, "instructors", "Ana", "i@example.com", "pw1").status_code == 201
    instructor = login_token(client, "instructors", "i@example.com", "pw1")

    lesson = client.post("/lessons", json={"title": "Scales", "description": "C major"}, headers=auth(instructor))
    assert lesson.status_code == 201
    lesson_id = lesson.json()["id"]

    student_resp = register(client, "students", "Bruno", "s@example.com", "pw2")
    assert student_resp.status_code == 201
    student_id = student_resp.json()["id"]
    student = login_token(client, "students", "s@example.com", "pw2")

    created = client.post(
        "/progress", json={"studentId": student_id, "lessonId": lesson_id}, headers=auth(instructor)
    )
    assert created.status_code == 201

    progress = client.get(f"/students/progress/{student_id}", headers=auth(student))
    assert progress.status_code == 200
    entries = progress.json()
    assert len(entries) == 1
    assert entries[0]["lessonId"] == lesson_id
    assert entries[0]["studentId"] == student_id


def test_full_flow_memory(client):
    """Интеграционный тест полного сценария"""
    run_scenario(client)


def test_full_flow_sql_backend(tmp_path, clock):
    """Тот же сценарий на SQLAlchemy-бэкенде с паролями через bcrypt"""
    settings = Settings(
        JWT_SECRET=TEST_SECRET,
        STORAGE_BACKEND="sql",
        DATABASE_URL=f"sqlite:///{tmp_path / 'flow.db'}",
        RATE_LIMIT_ENABLED=False,
        LOG_LEVEL="WARNING",
    )
    registry = build_registry(settings, clock=clock)
    client = TestClient(create_app(settings=settings, registry=registry))
    run_scenario(client)

    stored = registry.instructors.find_by_email("i@example.com")
    assert stored.password != "pw1"
    assert registry.progress.get_all()[0].completed_at == clock()


def test_default_app_serves_health():
    from music_progress.main import app
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_and_metrics(client, instructor_token):
    assert client.get("/").status_code == 200
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "http_requests_total" in response.text
    assert "logins_total" in response.text


def limited_settings(enabled: bool) -> Settings:
    return Settings(
        JWT_SECRET=TEST_SECRET,
        PASSWORD_SCHEMES=["plaintext"],
        RATE_LIMIT_ENABLED=enabled,
        LOGIN_RATE_LIMIT_PER_MINUTE=10,
        LOG_LEVEL="WARNING",
    )


def failed_logins(client, times):
    return [
        client.post("/students/login", json={"email": "x@example.com", "password": "p"}).status_code
        for _ in range(times)
    ]


def test_login_rate_limited():
    """После 10 попыток логина в минуту -> 429"""
    client = TestClient(create_app(settings=limited_settings(True)))
    statuses = failed_logins(client, 11)
    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429
    assert client.post("/students/login", json={"email": "x@example.com", "password": "p"}).json() == {
        "detail": "Too many requests"
    }


def test_rate_limit_is_per_app():
    """Лимитер у каждого приложения свой: настройки и счётчики не пересекаются"""
    unlimited = TestClient(create_app(settings=limited_settings(False)))
    limited = TestClient(create_app(settings=limited_settings(True)))

    assert failed_logins(unlimited, 12) == [401] * 12
    assert failed_logins(limited, 11)[-1] == 429
    assert failed_logins(unlimited, 2) == [401, 401]

    other = TestClient(create_app(settings=limited_settings(True)))
    assert failed_logins(other, 1) == [401]


def test_register_rate_limit_scope_is_separate_from_login():
    client = TestClient(create_app(settings=limited_settings(True)))
    assert failed_logins(client, 11)[-1] == 429
    response = client.post("/students/register", json={"name": "B", "email": "b@example.com", "password": "p"})
    assert response.status_code == 201


def test_latest_log_level_applies_to_used_loggers():
    """Логгер, уже писавший при DEBUG, подчиняется новому LOG_LEVEL"""
    create_app(settings=Settings(JWT_SECRET=TEST_SECRET, LOG_LEVEL="DEBUG"))
    register_account.logger.info("warmup")

    create_app(settings=Settings(JWT_SECRET=TEST_SECRET, LOG_LEVEL="ERROR"))
    with capture_logs() as captured:
        register_account.logger.info("dropped")
        register_account.logger.error("kept")
    assert [entry["event"] for entry in captured] == ["kept"]


def test_progress_schemas_accept_alias_and_field_name():
    by_alias = ProgressCreate.model_validate({"studentId": 1, "lessonId": 2})
    by_name = ProgressCreate.model_validate({"student_id": 1, "lesson_id": 2})
    assert by_alias == by_name

    out = ProgressOut(student_id=1, lesson_id=2, completed_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
    assert set(out.model_dump(by_alias=True)) == {"studentId", "lessonId", "completedAt"}
