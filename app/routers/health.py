# app/routers/health.py
from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core import responses
from app.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/")
def root(request: Request):
    s = request.app.state.settings
    return {"name": s.APP_TITLE, "version": s.APP_VERSION}


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/health/uptime")
def health_uptime(request: Request):
    started = request.app.state.started_mono
    return {"uptime_seconds": round(time.monotonic() - started, 3)}


@router.get("/health/db")
def health_db(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("DB health check failed: %s", e)
        return responses.envelope_response(status.HTTP_503_SERVICE_UNAVAILABLE, error="DB not ready")
    return {"status": "ok", "db": "up", "dialect": db.get_bind().dialect.name}
