"""Application configuration loaded from environment and .env file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


def find_project_root() -> Path:
    """Return the nearest ancestor directory that contains a .env file.

    Starts at the directory of this file and walks up to the filesystem root.
    Falls back to two levels above this file if no .env is found.
    """
    current_dir = Path(__file__).parent
    while current_dir != current_dir.parent:
        if (current_dir / ".env").exists():
            return current_dir
        current_dir = current_dir.parent
    return Path(__file__).parent.parent.parent


PROJECT_ROOT: Path = find_project_root()
load_dotenv(PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    """Strongly-typed application settings loaded from environment and .env."""

    # Application
    APP_NAME: str = "SaveBite API"
    ENVIRONMENT: str = "dev"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = ""

    # Database
    DATABASE_URL: str = "sqlite:///./savebite.sqlite"

    # JWT
    SECRET_KEY: str | None = None
    ALGORITHM: str = "HS256"
    TOKEN_ISSUER: str = "savebite"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24

    # Login (single account)
    AUTH_USERNAME: str | None = None
    AUTH_PASSWORD: str | None = None

    # Recipe provider
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    RECIPE_PROVIDER_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins for the current environment.

        Production allows only the origins listed in ``CORS_ORIGINS``.
        """
        extra = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        if self.ENVIRONMENT.lower() == "prod":
            return extra
        return ["http://localhost", "http://localhost:3000", "http://127.0.0.1:3000", *extra]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
