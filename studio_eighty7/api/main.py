import logging
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from studio_eighty7.api.deps import build_mailer, get_client_ip, load_rules_at, load_settings
from studio_eighty7.app_shell.config import ConfigurationError, Settings, validate_ops_rules
from studio_eighty7.app_shell.rate_limit import RateLimiter, RateLimitStore
from studio_eighty7.components.contact import ContactMailerPort
from studio_eighty7.core.ports.time import TimePort
from studio_eighty7.domain.errors import GENERIC_FAILURE_MESSAGE, RateLimitError, StudioError
from studio_eighty7.rules.models import Rules
from studio_eighty7.shell.http.health import create_health_router

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; style-src 'self' 'unsafe-inline'; "
        "script-src 'self'; img-src 'self' data: https:"
    ),
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-XSS-Protection": "0",
}


def log_startup_banner(settings: Settings, rules: Rules) -> None:
    limits = rules.rate_limits
    logger.info("Studio Eighty7 backend running on port %s", settings.port)
    logger.info("Environment: %s", settings.environment)
    logger.info("CORS origin: %s", settings.frontend_url)
    logger.info(
        "Rate limits: generate %d/%ds, contact %d/%ds per IP",
        limits.generate.max_requests,
        limits.generate.window_seconds,
        limits.contact.max_requests,
        limits.contact.window_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    rules: Rules = app.state.rules

    # Missing credentials are fatal; checked against the settings this app serves with
    try:
        validate_ops_rules(rules, settings.environ)
    except ConfigurationError as e:
        logger.critical("FATAL: %s", e)
        sys.exit(1)

    log_startup_banner(settings, rules)

    yield

    client = getattr(app.state, "http_client", None)
    if client is not None:
        await client.aclose()


# --- Exception Handlers ---


async def studio_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StudioError)
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.error)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.error)

    headers = None
    if isinstance(exc, RateLimitError):
        headers = {"Retry-After": str(exc.retry_after_seconds)}
    return JSONResponse(exc.to_payload(), status_code=exc.status_code, headers=headers)


async def http_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    if exc.status_code == 404:
        payload = {"error": "Not found", "message": "The requested endpoint does not exist"}
    elif exc.status_code == 405:
        payload = {"error": "Method not allowed", "message": "The requested method is not supported"}
    else:
        payload = {"error": str(exc.detail), "message": str(exc.detail)}
    return JSONResponse(payload, status_code=exc.status_code, headers=exc.headers)


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    errors = exc.errors()
    field = str(errors[0]["loc"][-1]) if errors and errors[0].get("loc") else "body"
    return JSONResponse(
        {"error": "Validation error", "field": field, "message": "Invalid request"},
        status_code=400,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        {"error": "Internal server error", "message": GENERIC_FAILURE_MESSAGE},
        status_code=500,
    )


# --- App Factory ---


def create_app(
    settings: Settings | None = None,
    *,
    rules: Rules | None = None,
    rate_limiter: RateLimiter | None = None,
    mailer: ContactMailerPort | None = None,
    time_port: TimePort | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    rules = rules or load_rules_at(settings.rules_path)

    app = FastAPI(
        title="Studio Eighty7 API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
    )

    # Per-instance state; nothing is shared between apps
    app.state.settings = settings
    app.state.rules = rules
    app.state.rate_limiter = rate_limiter or RateLimiter(
        rules.rate_limits, store=RateLimitStore(), time_port=time_port
    )
    app.state.mailer = mailer or build_mailer()

    # --- Routers ---
    from studio_eighty7.api.routes import contact, content, generate

    app.include_router(create_health_router(rules.project.service_name, time_port))
    app.include_router(generate.router, prefix="/api", tags=["Generate"])
    app.include_router(contact.router, prefix="/api", tags=["Contact"])
    app.include_router(content.router, prefix="/api/content", tags=["Content"])

    # --- Errors ---
    app.add_exception_handler(StudioError, studio_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # --- Middleware ---
    @app.middleware("http")
    async def security_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info("%s %s - IP: %s", request.method, request.url.path, get_client_ip(request))
        return await call_next(request)

    # CORS (Allow Frontend)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
        max_age=86400,
    )

    return app
