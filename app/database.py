# app/database.py
from __future__ import annotations

import re
from typing import Generator, List

from fastapi import Request
from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from app.core.settings import Settings

# -----------------------------
# Helpers
# -----------------------------
def mask_url(url: str) -> str:
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" not in rest or ":" not in rest.split("@", 1)[0]:
        return url
    creds, tail = rest.split("@", 1)
    user = creds.split(":", 1)[0]
    return f"{scheme}://{user}:***@{tail}"

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

def _sanitize_search_path(raw: str) -> str:
    """
    Acceptă doar identificatori ne-citați separați prin virgulă.
    Ex. 'app,public'. Dacă nu trece validarea, întoarce "" (nu setăm nimic).
    """
    parts = [p.strip() for p in (raw or "").split(",") if p.strip()]
    if not parts or not all(_IDENT_RE.fullmatch(p) for p in parts):
        return ""
    # elimină duplicate păstrând ordinea
    uniq: List[str] = []
    for p in parts:
        if p not in uniq:
            uniq.append(p)
    return ",".join(uniq)

_SQLITE_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"}

# -----------------------------
# Naming convention (constrângeri cu nume stabile)
# -----------------------------
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
Base = declarative_base(metadata=metadata)

# -----------------------------
# Engine factory
# -----------------------------
def _build_engine_kwargs(settings: Settings) -> dict:
    kwargs: dict = {"echo": settings.DB_ECHO, "pool_pre_ping": True}

    if settings.is_sqlite:
        # SQLite: single-thread în driver → dezactivează check_same_thread;
        # `timeout` limitează cât așteaptă un apel pe lock-ul fișierului
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.DB_SQLITE_TIMEOUT_S,
        }
        # In-memory → StaticPool (altfel fiecare conexiune are DB separat)
        if settings.DATABASE_URL in _SQLITE_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
        else:
            kwargs["poolclass"] = NullPool
        return kwargs

    # Postgres / MySQL
    kwargs.update(
        {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_use_lifo": True,
        }
    )

    if settings.DATABASE_URL.startswith("postgresql"):
        # ---- Postgres: libpq options (NU ca statements) ----
        pg_options = []
        search_path = _sanitize_search_path(settings.DB_SEARCH_PATH)
        if search_path:
            pg_options.append(f"-c search_path={search_path}")
        if settings.DB_STATEMENT_TIMEOUT_MS:
            pg_options.append(f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}")
        if pg_options:
            kwargs["connect_args"] = {"options": " ".join(pg_options)}

    return kwargs


def build_engine(settings: Settings) -> Engine:
    return create_engine(settings.DATABASE_URL, **_build_engine_kwargs(settings))


def build_session_factory(engine: Engine) -> sessionmaker:
    # expire_on_commit=False → obiectele rămân utilizabile după commit (evită re-load imediat)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Creează tabelele din modele (idempotent). Fără migrații: schema e cea din ORM."""
    from app.models import product  # noqa: F401
    Base.metadata.create_all(bind=engine)

# -----------------------------
# Sessions
# -----------------------------
def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency pentru o sesiune SQLAlchemy închisă garantat.
    Factory-ul vine din `app.state` (setat în lifespan), nu dintr-un singleton global.
    Face rollback automat dacă apare o excepție în request handler.
    """
    db: Session = request.app.state.session_factory()
    try:
        yield db
        # commit-ul e responsabilitatea serviciului
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "init_db",
    "get_db",
    "mask_url",
]
