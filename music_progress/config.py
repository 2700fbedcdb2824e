from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings

# Используется только вне production, при старте пишется предупреждение
DEV_FALLBACK_SECRET = "dev-secret-music-progress"


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_SECONDS: int = 3600
    PASSWORD_SCHEMES: list[str] = ["bcrypt_sha256"]
    STORAGE_BACKEND: Literal["memory", "sql"] = "memory"
    DATABASE_URL: str = "sqlite:///./music_progress.db"
    LOG_LEVEL: str = "INFO"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    LOGIN_RATE_LIMIT_PER_MINUTE: int = 10
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @model_validator(mode="after")
    def _require_secret_in_production(self):
        if self.is_production and not self.JWT_SECRET:
            raise ValueError("JWT_SECRET must be set when ENVIRONMENT=production")
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def uses_fallback_secret(self) -> bool:
        return not self.JWT_SECRET

    @property
    def signing_secret(self) -> str:
        return self.JWT_SECRET or DEV_FALLBACK_SECRET


settings = Settings()
