"""
Mediblues directory API.

``create_application`` builds the FastAPI app: logging, request-id and
security-header middleware, CORS, the error envelope handlers and the
``/api/v1`` router. The module-level ``app`` is what uvicorn serves::

    uvicorn src.mediblues.main:app --reload
"""
from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .api.v1 import router as v1_router
from .core.config import Settings, get_settings
from .core.exceptions import AppException, InternalServerError, ValidationError
from .core.responses import ErrorResponse
from .db.session import DatabaseManager

_DOCS_PATHS = frozenset({"/docs", "/redoc", "/openapi.json"})

# Swagger UI and ReDoc load their assets from a CDN
_DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "img-src 'self' data: https://fastapi.tiangolo.com; "
    "frame-ancestors 'none'"
)
_API_CSP = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"

_TAGS = [
    {"name": "Health", "description": "Liveness, readiness and database status."},
    {"name": "Authentication", "description": "Admin login; returns a bearer token."},
    {"name": "Locations", "description": "Hospital branches with their doctors and departments."},
    {"name": "Departments", "description": "Clinical departments, their content and branch links."},
    {"name": "Doctors", "description": "Doctor profiles, search by name or specialization."},
    {"name": "Appointments", "description": "Public booking and admin appointment management."},
    {"name": "Packages", "description": "Health-check packages and their tests."},
    {"name": "Banners", "description": "Homepage hero and carousel banners."},
    {"name": "Contact", "description": "Published contact details and the contact form."},
    {"name": "Admin - Locations", "description": "Create, update and delete branches."},
    {"name": "Admin - Departments", "description": "Department content and branch assignment."},
    {"name": "Admin - Packages", "description": "Package and test maintenance."},
    {"name": "Admin - Banners", "description": "Banner maintenance."},
    {"name": "Admin - Statistics", "description": "Dashboard counts for the admin console."},
]


def configure_logging(settings: Settings | None = None) -> None:
    """Set up structlog for application events and match stdlib logging to its level.

    Development gets the coloured console renderer; every other
    environment emits one JSON object per line.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.LOG_LEVEL)
    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.is_development
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    # Repositories and SQLAlchemy log through the standard library
    logging.basicConfig(
        stream=sys.stdout,
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Hardening headers on every response; docs pages get a looser CSP outside production."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        serving_docs = (
            request.url.path in _DOCS_PATHS and not request.app.state.settings.is_production
        )
        response.headers.update({
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "Strict-Transport-Security": "max-age=63072000; includeSubDomains",
            "Content-Security-Policy": _DOCS_CSP if serving_docs else _API_CSP,
        })
        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's ``X-Request-ID`` or mint one.

    The id is bound into the structlog context, so log lines and the
    ``meta.request_id`` of the response body carry it, and it is echoed
    back in the response header.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the connection pool for the life of the process.

    Tables are never created here; ``scripts/migrate.py`` owns the schema.
    """
    settings: Settings = app.state.settings
    db_manager: DatabaseManager = app.state.db_manager
    log = structlog.get_logger()

    configure_logging(settings)
    log.info("startup", service=settings.APP_NAME, version=settings.APP_VERSION, env=settings.APP_ENV)

    db_manager.open()
    log.info("database_check", **await db_manager.health_check())
    try:
        yield
    finally:
        await db_manager.close()
        log.info("shutdown_complete")


def create_application(settings: Settings | None = None) -> FastAPI:
    """Build the app for ``settings`` (the cached environment settings by default)."""
    settings = settings or get_settings()
    show_docs = settings.is_development

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=(
            "REST API behind the Mediblues hospital website and its admin console: "
            "branches, departments, doctors, appointment booking, health-check "
            "packages, banners and contact details. Writes and admin listings need "
            "a bearer token from `/api/v1/auth/admin/login`."
        ),
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        openapi_url="/openapi.json" if show_docs else None,
        openapi_tags=_TAGS,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = DatabaseManager(settings)

    # Last added runs first: CORS, then request id, then security headers
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.cors_methods_list,
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    app.include_router(v1_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        index = {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "health": "/api/v1/health",
        }
        if show_docs:
            index["docs"] = "/docs"
        return index

    return app


def _error_json(exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse.from_exception(exc).model_dump(mode="json"),
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Map every failure onto the ``{"success": false, "error": ...}`` envelope."""
    log = structlog.get_logger()

    @app.exception_handler(AppException)
    async def _app_exc(request: Request, exc: AppException) -> JSONResponse:
        log.warning(
            "request_failed",
            code=exc.error_code,
            status=exc.status_code,
            message=exc.message,
            path=request.url.path,
        )
        return _error_json(exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(request: Request, exc: RequestValidationError) -> JSONResponse:
        problems = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        log.warning("request_invalid", path=request.url.path, errors=problems)
        error = ValidationError(
            message="Request validation failed",
            details={"validation_errors": problems},
        )
        error.status_code = 422
        return _error_json(error)

    @app.exception_handler(Exception)
    async def _unhandled_exc(request: Request, exc: Exception) -> JSONResponse:
        log.exception("request_crashed", path=request.url.path)
        # Exception text only leaves the process in debug mode
        message = str(exc) if request.app.state.settings.DEBUG else None
        return _error_json(InternalServerError(message=message))


app = create_application()
