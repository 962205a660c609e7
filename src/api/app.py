import asyncio
import logging
import os
import signal
import time
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from src.api.responses import error_body
from src.api.utils.rate_limit import FixedWindowRateLimiter, client_ip
from src.depends import (
    build_email_sender,
    build_identity_provider,
    build_image_store,
    create_tables,
)
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)

# Substrings of driver messages (SQLite and PostgreSQL) -> field named in the 409
_UNIQUE_FIELDS = (
    ("users.email", "email"),
    ("(email)", "email"),
    ("users.mobile_no", "mobile number"),
    ("(mobile_no)", "mobile number"),
    ("company_profiles.company_name", "company name"),
    ("(company_name)", "company name"),
    ("company_profiles.owner_id", "company profile"),
    ("(owner_id)", "company profile"),
)


def _is_development(request: Request) -> bool:
    return request.app.state.config.APP_ENV == "development"


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.base_error.message, code=exc.base_error.code),
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    message = exc.base_error.message if _is_development(request) else "Internal server error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(message, code=exc.base_error.code),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or str(error["loc"][0]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation failed on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", code="VALIDATION_ERROR", errors=errors),
    )


async def handle_integrity_error(request: Request, exc: IntegrityError):
    detail = str(exc.orig)
    logger.warning(f"Integrity error: {detail}")

    lowered = detail.lower()
    if "unique" in lowered or "duplicate" in lowered:
        field = next((name for marker, name in _UNIQUE_FIELDS if marker in detail), "record")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_body(f"{field.capitalize()} already exists", code="DUPLICATE_ENTRY"),
        )
    if "foreign key" in lowered:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Invalid reference", code="INVALID_REFERENCE"),
        )
    if "not null" in lowered or "not-null" in lowered:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Required field is missing", code="MISSING_FIELD"),
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", code="DATABASE_ERROR"),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = error_body("Internal server error", code="INTERNAL_ERROR")
    if _is_development(request):
        body["message"] = str(exc)
        body["errors"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def _handle_loop_exception(loop, context):
    logger.critical(
        f"Unhandled exception in event loop: {context.get('message')}",
        exc_info=context.get("exception"),
    )
    os.kill(os.getpid(), signal.SIGTERM)


@asynccontextmanager
async def lifespan(app: FastAPI):
    asyncio.get_running_loop().set_exception_handler(_handle_loop_exception)
    await create_tables()

    providers = (app.state.identity_provider, app.state.image_store)
    for provider in providers:
        await provider.startup()
    logger.info("Providers started")

    yield

    for provider in reversed(providers):
        try:
            await provider.shutdown()
        except Exception as exc:
            logger.warning(f"Provider shutdown failed: {exc}")
    logger.info("Providers stopped")


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Jobpilot API", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.identity_provider = build_identity_provider(ApplicationConfig)
    app.state.image_store = build_image_store(ApplicationConfig)
    app.state.email_sender = build_email_sender(ApplicationConfig)

    app.state.rate_limiter = None
    app.state.login_rate_limiter = None
    if ApplicationConfig.RATE_LIMIT_ENABLED:
        app.state.rate_limiter = FixedWindowRateLimiter(
            ApplicationConfig.RATE_LIMIT_MAX_REQUESTS, ApplicationConfig.RATE_LIMIT_WINDOW_SECONDS
        )
        app.state.login_rate_limiter = FixedWindowRateLimiter(
            ApplicationConfig.LOGIN_RATE_LIMIT_MAX_ATTEMPTS,
            ApplicationConfig.RATE_LIMIT_WINDOW_SECONDS,
        )

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        limiter = request.app.state.rate_limiter
        if limiter is not None and request.url.path.startswith(ApplicationConfig.API_PREFIX):
            if not limiter.hit(client_ip(request)):
                logger.warning(f"Rate limit exceeded for {client_ip(request)}")
                return JSONResponse(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    content=error_body(
                        "Too many requests, please try again later", code="RATE_LIMITED"
                    ),
                )
        return await call_next(request)

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms"
            )
            return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, company, health_check

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, prefix=prefix, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(company.router, prefix=prefix, tags=["Company"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
