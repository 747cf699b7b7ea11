# schooldir/config.py
from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class ConfigError(RuntimeError):
    """Неполная или некорректная конфигурация приложения."""


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _as_list(value: Optional[str], default: List[str]) -> List[str]:
    if value is None or not value.strip():
        return list(default)
    return [s.strip() for s in value.split(",") if s.strip()]


def normalize_database_url(url: str) -> str:
    # Heroku / Render / Supabase отдают postgres://, SQLAlchemy 2 понимает только postgresql://
    url = url.strip()
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


class Settings(BaseModel):
    database_url: Optional[str] = None
    database_sslmode: Optional[str] = None
    create_schema: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        url = env.get("DATABASE_URL")
        return cls(
            database_url=normalize_database_url(url) if url and url.strip() else None,
            database_sslmode=(env.get("DATABASE_SSLMODE") or "").strip() or None,
            create_schema=_as_bool(env.get("SCHOOLDIR_CREATE_SCHEMA"), True),
            cors_origins=_as_list(env.get("SCHOOLDIR_CORS_ORIGINS"), ["*"]),
            log_level=(env.get("SCHOOLDIR_LOG_LEVEL") or "INFO").strip().upper(),
            host=(env.get("HOST") or "127.0.0.1").strip(),
            port=int(env.get("PORT") or 8000),
        )

    def require_database_url(self) -> str:
        if not self.database_url:
            raise ConfigError("DATABASE_URL is not set (expected a PostgreSQL/PostGIS connection string)")
        return self.database_url


@lru_cache
def get_settings() -> Settings:
    # .env из текущего каталога; уже выставленные переменные окружения не перетираем
    load_dotenv(override=False)
    return Settings.from_env()
