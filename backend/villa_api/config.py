"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in deployments)
    - get_settings() is cached (lru_cache): one instance per process
    - engine_options() is the only place pool sizing is decided

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - strict_conflict_status off by default: existing clients expect 200 for a duplicate villa number
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Database
    database_url: str = "postgresql+asyncpg://villa:villa@db:5432/villa"
    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_echo: bool = False

    # Identity: tokens are issued elsewhere and only verified here
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    # Authorization
    privileged_role: str = "admin"

    # Duplicate villa number on create: False → 200 + envelope error, True → 409
    strict_conflict_status: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but the engine is async."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("privileged_role")
    @classmethod
    def role_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("privileged_role must not be blank")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for create_async_engine."""
        options: dict[str, Any] = {"pool_pre_ping": True, "echo": self.database_echo}
        if not self.is_sqlite:
            options.update(
                pool_size=self.database_pool_size,
                max_overflow=self.database_max_overflow,
                pool_recycle=3600,
            )
        return options


@lru_cache
def get_settings() -> Settings:
    return Settings()
