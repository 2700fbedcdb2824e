import pytest
from pydantic import ValidationError

from music_progress.config import DEV_FALLBACK_SECRET, Settings


def test_fallback_secret_outside_production():
    settings = Settings(ENVIRONMENT="development", JWT_SECRET=None)
    assert settings.uses_fallback_secret
    assert settings.signing_secret == DEV_FALLBACK_SECRET


def test_production_requires_secret():
    with pytest.raises(ValidationError):
        Settings(ENVIRONMENT="production", JWT_SECRET=None)


def test_production_with_secret():
    settings = Settings(ENVIRONMENT="production", JWT_SECRET="s3cret")
    assert settings.signing_secret == "s3cret"
    assert not settings.uses_fallback_secret


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("JWT_SECRET", "from-env")
    settings = Settings()
    assert settings.PORT == 8080
    assert settings.signing_secret == "from-env"
