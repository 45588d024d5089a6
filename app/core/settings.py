from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configurația aplicației (ENV + .env).

    Se construiește o singură dată la pornire și se pasează explicit în
    `create_app()`; componentele (engine, TokenIssuer, verificatorul de
    credențiale) o primesc prin constructor.
    """

    # App
    APP_ENV: str = Field("dev")
    APP_TITLE: str = Field("product-catalog-api")
    APP_VERSION: str = Field("0.1.0")
    ROOT_PATH: str = Field("")
    DISABLE_DOCS: bool = False
    HOST: str = Field("0.0.0.0")
    PORT: int = Field(8000, ge=1, le=65535)

    # Logging
    LOG_LEVEL: str = Field("INFO")
    LOG_FILE: Optional[str] = Field(None, description="ex: logs/app.log (rotire zilnică)")

    # DB
    DATABASE_URL: str = Field("sqlite:///./products.db", description="postgresql+psycopg://user:<PASS>@db:5432/appdb")
    DB_ECHO: bool = False
    DB_CREATE_ALL: bool = True
    DB_SEARCH_PATH: str = ""
    DB_STATEMENT_TIMEOUT_MS: Optional[int] = Field(None, ge=1)
    DB_SQLITE_TIMEOUT_S: float = Field(5.0, gt=0)
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 1800  # sec
    DB_POOL_TIMEOUT: int = 30    # sec

    # JWT
    JWT_KEY: str = Field(..., min_length=32, description="Cheie simetrică HS256")
    JWT_ISSUER: str = Field("product-catalog-api")
    JWT_AUDIENCE: str = Field("product-catalog-clients")
    JWT_EXPIRE_MINUTES: int = Field(30, ge=1)
    JWT_LEEWAY_SECONDS: int = Field(0, ge=0)

    # Login static (dev)
    AUTH_USERNAME: str = Field("admin")
    AUTH_PASSWORD: str = Field("pswadmin")

    # HTTP
    CORS_ORIGINS: str = Field("", description="http://localhost:3000,https://example.com")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _log_level_upper(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @field_validator("DATABASE_URL")
    @classmethod
    def _db_url_nonempty(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("DATABASE_URL must not be empty")
        return v

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Settings din mediu, cache-uite per proces (folosite de entrypoint-ul ASGI)."""
    return Settings()
