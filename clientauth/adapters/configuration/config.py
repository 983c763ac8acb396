# clientauth/adapters/configuration/config.py

from typing import Optional
from logging import getLevelName
from pydantic import Field, PostgresDsn, field_validator, ConfigDict
from pydantic_settings import BaseSettings

SQLITE_FALLBACK_URL = "sqlite+aiosqlite:///./clientauth.db"


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Debug flag
    DEBUG: bool = False

    # Database
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = Field(None, validate_default=True)
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    # Resource scoping
    DEFAULT_NAMESPACE: str = ""

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        """
        An explicit DATABASE_URL wins. Otherwise a postgresql+asyncpg DSN is
        built from the POSTGRES_* variables, or a local SQLite file is used.
        """
        if value:
            return value

        data = info.data
        if not data.get("POSTGRES_HOST"):
            return SQLITE_FALLBACK_URL

        return str(PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=data.get("POSTGRES_USER"),
            password=data.get("POSTGRES_PASSWORD"),
            host=data["POSTGRES_HOST"],
            port=data.get("POSTGRES_PORT"),
            path=data.get("POSTGRES_DB") or "",
        ))

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Ensure the value is a valid logging level."""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    model_config = ConfigDict(env_file=".env", extra="ignore")


settings = Settings()
