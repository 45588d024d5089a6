# tests/conftest.py
from __future__ import annotations

import os

# --- Env ÎNAINTE de importul aplicației (app.main construiește `app` la import) ---
TEST_JWT_KEY = "test-signing-key-0123456789abcdef-0123456789"
os.environ.setdefault("JWT_KEY", TEST_JWT_KEY)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DB_CREATE_ALL", "1")

from typing import Dict, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.settings import Settings
from app.database import build_engine, build_session_factory, init_db
from app.main import create_app
from app.services.product_service import ProductService


@pytest.fixture
def settings() -> Settings:
    """Settings izolate per test: SQLite in-memory, credențialele implicite admin/pswadmin."""
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_KEY=TEST_JWT_KEY,
        JWT_ISSUER="test-issuer",
        JWT_AUDIENCE="test-audience",
        AUTH_USERNAME="admin",
        AUTH_PASSWORD="pswadmin",
        LOG_LEVEL="WARNING",
        _env_file=None,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Client in-process; `with` rulează lifespan-ul (create_all + dispose)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client: TestClient) -> Dict[str, str]:
    r = client.post("/auth/login", json={"username": "admin", "password": "pswadmin"})
    assert r.status_code == 200, r.text
    token = r.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def db_session(settings: Settings) -> Iterator[Session]:
    """Sesiune pe un store propriu, fără HTTP (pentru testele de serviciu)."""
    engine = build_engine(settings)
    init_db(engine)
    factory = build_session_factory(engine)
    db = factory()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def service(db_session: Session) -> ProductService:
    return ProductService(db_session)
