# app/main.py
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth.credentials import StaticCredentialVerifier
from app.auth.tokens import TokenIssuer
from app.core import responses
from app.core.errors import AppError, NotFoundError, UnauthorizedError
from app.core.logging import setup_logging
from app.core.settings import Settings, get_settings
from app.database import mask_url, build_engine, build_session_factory, init_db
from app.routers.auth import router as auth_router
from app.routers.health import router as health_router
from app.routers.product import router as products_router

logger = logging.getLogger("product-catalog-api")

tags_metadata = [
    {"name": "health", "description": "Liveness/Readiness checks"},
    {"name": "auth", "description": "Login & bearer tokens"},
    {"name": "products", "description": "Product CRUD (bearer token required)"},
]


# --- Utilitare ---
def _get_req_id(request: Request) -> str:
    # Prefer id-ul setat de middleware, apoi X-Request-ID / X-Correlation-ID; altfel generează unul.
    rid = getattr(request.state, "request_id", None)
    return (
        rid
        or request.headers.get("x-request-id")
        or request.headers.get("x-correlation-id")
        or uuid.uuid4().hex[:12]
    )


# --- Middleware func (registered after app is created) ---
async def request_context_mw(request: Request, call_next):
    """
    - Generează/propagă X-Request-ID
    - Aplică headers de securitate
    - Server-Timing / X-Process-Time
    """
    req_id = _get_req_id(request)
    request.state.request_id = req_id

    start = time.perf_counter()
    response: Response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    response.headers.setdefault("X-Request-ID", req_id)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    response.headers.setdefault("Cache-Control", "no-store")
    response.headers.setdefault("Server-Timing", f"app;dur={duration_ms:.1f}")
    response.headers.setdefault("X-Process-Time", f"{duration_ms:.1f}ms")
    logger.debug(
        "%s %s -> %s (%.1fms) rid=%s",
        request.method, request.url.path, response.status_code, duration_ms, req_id,
    )
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine = app.state.engine

    # Startup: tabele (dacă e cerut) + sanity check DB
    if settings.DB_CREATE_ALL:
        init_db(engine)
    try:
        with app.state.session_factory() as db:
            db.execute(text("SELECT 1"))
        logger.info("DB startup check OK (url=%s)", mask_url(settings.DATABASE_URL))
    except Exception:
        logger.exception("DB startup check FAILED (url=%s)", mask_url(settings.DATABASE_URL))

    # Ready to serve
    yield

    # Shutdown: eliberează pool-ul de conexiuni al acestei instanțe
    engine.dispose()
    logger.info("Engine disposed")


# --- Exception handlers (maparea taxonomie → status + plic, într-un singur loc) ---
async def _app_error_handler(request: Request, exc: AppError):
    headers = {"X-Request-ID": _get_req_id(request)}
    if isinstance(exc, UnauthorizedError):
        headers["WWW-Authenticate"] = "Bearer"
    if isinstance(exc, NotFoundError):
        logger.debug("Not found: %s %s", request.url.path, exc.message)
    else:
        logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return responses.envelope_response(
        exc.status_code, error=exc.message, details=exc.details, headers=headers
    )


async def _validation_handler(request: Request, exc: RequestValidationError):
    # fără "input": valoarea brută poate fi inf/nan (ne-serializabil) sau o parolă
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    return responses.bad_request(
        "Validation failed",
        details=jsonable_encoder(errors),
        headers={"X-Request-ID": _get_req_id(request)},
    )


# Prinde 404/405 Starlette (și HTTPException FastAPI) și răspunde în plicul unitar
async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
    headers = dict(exc.headers or {})
    headers.setdefault("X-Request-ID", _get_req_id(request))
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Not Found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method Not Allowed"
    return responses.envelope_response(exc.status_code, error=message, headers=headers)


async def _unhandled_exc_handler(request: Request, exc: Exception):
    # detaliile rămân în log; clientul primește doar mesajul generic
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return responses.internal_error(headers={"X-Request-ID": _get_req_id(request)})


def _install_openapi(app: FastAPI, settings: Settings) -> None:
    def _custom_openapi():
        """
        Generează schema OpenAPI on-demand și o cache-uiește.
        Adaugă ROOT_PATH ca server → ajută tooling-ul din spatele unui reverse proxy.
        """
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=settings.APP_TITLE,
            version=settings.APP_VERSION,
            routes=app.routes,
            tags=tags_metadata,
        )
        rp = settings.ROOT_PATH
        if rp and rp != "/":
            schema["servers"] = [{"url": rp}]
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = _custom_openapi  # type: ignore[assignment]


# --- App factory ---
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Construiește aplicația cu tot ce ține de ea (engine, sesiuni, emitent JWT,
    verificator de credențiale) atașat la `app.state`. Fără singletons globale:
    două aplicații create în același proces au store-uri separate.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(
        title=settings.APP_TITLE,
        version=settings.APP_VERSION,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
        root_path=settings.ROOT_PATH,
        docs_url=None if settings.DISABLE_DOCS else "/docs",
        redoc_url=None if settings.DISABLE_DOCS else "/redoc",
        openapi_url=None if settings.DISABLE_DOCS else "/openapi.json",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_issuer = TokenIssuer(settings)
    app.state.credential_verifier = StaticCredentialVerifier.from_settings(settings)
    app.state.started_mono = time.monotonic()

    # Register middleware now that app exists
    app.middleware("http")(request_context_mw)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Total-Count", "X-Request-ID", "Server-Timing", "X-Process-Time", "Location"],
        )

    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exc_handler)
    app.add_exception_handler(Exception, _unhandled_exc_handler)

    _install_openapi(app, settings)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(products_router)
    return app


app = create_app()
