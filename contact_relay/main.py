from contextlib import asynccontextmanager
from typing import Callable

import sentry_sdk
import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from contact_relay.api.v1 import contact
from contact_relay.core.config import settings
from contact_relay.core.exceptions import ContactError
from contact_relay.core.logging_config import configure_logging
from contact_relay.middleware.trace_middleware import TraceMiddleware

configure_logging(settings)

logger = structlog.get_logger()

# Initialize Sentry (skipped if SENTRY_DSN is empty)
if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info(
        "starting_application",
        version=settings.api_version,
        mail_backend=settings.mail_backend,
        contact_path=settings.contact_path,
        response_style=settings.response_style,
    )
    yield
    logger.info("shutting_down_application")


_is_production = settings.environment == "production"

app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url=None if _is_production else "/docs",
    redoc_url=None,
    openapi_url=None if _is_production else "/openapi.json",
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if _is_production:
            response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(TraceMiddleware)


@app.get("/health")
async def health() -> JSONResponse:
    """Health check endpoint"""
    return JSONResponse({"status": "ok", "version": settings.api_version})


app.include_router(contact.router, tags=["Contact"])


# Exception handlers
@app.exception_handler(ContactError)
async def contact_error_handler(request: Request, exc: ContactError):
    """Turn a contact error into its plain-text response"""
    return PlainTextResponse(
        exc.message, status_code=exc.status_code, headers=exc.headers or None
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework errors (unknown route, unrouted method) as plain text"""
    return PlainTextResponse(
        str(exc.detail), status_code=exc.status_code, headers=exc.headers
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.error(
        "unhandled_exception", error=str(exc), path=request.url.path, exc_info=exc
    )
    return PlainTextResponse(
        "Internal Server Error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
