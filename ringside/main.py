import logging
from contextlib import asynccontextmanager
from typing import NamedTuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import (
    DatabaseError,
    DBAPIError,
    IntegrityError,
    OperationalError,
)
from sqlalchemy.exc import (
    TimeoutError as SQLAlchemyTimeoutError,
)

from .api import events, managers, referees, stables, tag_teams, titles, venues, wrestlers
from .db.connection import dispose_engine, get_database_type, get_database_url, get_engine
from .exceptions import BusinessRuleError, StatusTransitionError
from .schemas.error import ErrorType, ValidationErrorDetail
from .settings import AppSettings, get_settings
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
)
from .utils.request_context import (
    clear_request_id,
    get_request_id,
    new_request_id,
    set_request_id,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment(active_settings: AppSettings | None = None) -> None:
    """Log a warning for every optional setting left unset."""

    warnings = (active_settings or get_settings()).optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
        logger.warning("=" * 60)


def _sanitize_database_url(url: str) -> str:
    """Hide the password of a database URL before it is logged."""
    if "://" not in url:
        return url

    scheme, rest = url.split("://", 1)
    if "@" in rest:
        auth, host_db = rest.split("@", 1)
        if ":" in auth:
            user, _ = auth.split(":", 1)
            return f"{scheme}://{user}:***@{host_db}"
        return f"{scheme}://{auth}@{host_db}"
    return url


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration, log the database target and warm connections."""
    validate_environment()

    logger.info("=" * 60)
    logger.info("Ringside API - Database Preflight Check")
    logger.info("=" * 60)
    logger.info("Database Type: %s", get_database_type().upper())
    logger.info("Database URL: %s", _sanitize_database_url(get_database_url()))
    logger.info("Ensure migrations are up to date (run: alembic upgrade head)")
    logger.info("=" * 60)

    from ringside.warmup import warmup_all

    await warmup_all(resolve_db_type=get_database_type, resolve_engine=get_engine)

    yield

    from ringside.cache import close_redis

    logger.info("Shutting down Ringside API")
    await close_redis()
    await dispose_engine()


app = FastAPI(
    title="Ringside API",
    version="0.1.0",
    description="Roster, booking and championship management for a wrestling promotion.",
    lifespan=lifespan,
    redirect_slashes=False,
)


def _default_origins() -> list[str]:
    ports = list(range(3000, 3011)) + [5173]
    origins = []
    for host in ("localhost", "127.0.0.1"):
        origins.extend([f"http://{host}:{port}" for port in ports])
    return origins


def _combine_origins(*origin_groups: list[str]) -> list[str]:
    """Merge origins preserving order and removing duplicates."""
    seen: set[str] = set()
    combined: list[str] = []
    for group in origin_groups:
        for origin in group:
            normalized = origin.rstrip("/")
            if normalized and normalized not in seen:
                seen.add(normalized)
                combined.append(normalized)
    return combined


allow_origins = _combine_origins(_default_origins(), settings.cors_allow_origins)
cors_origin_regex = settings.cors_allow_origin_regex or None

logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))
if cors_origin_regex:
    logger.info("Configured CORS allow_origin_regex: %s", cors_origin_regex)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_origin_regex=cors_origin_regex,
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag each request with an id, reusing one supplied by the caller."""
    request_id = request.headers.get("X-Request-ID") or new_request_id()
    token = set_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        clear_request_id(token)
    response.headers["X-Request-ID"] = request_id
    return response


def _validation_details(errors) -> list[ValidationErrorDetail]:
    return [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in errors
    ]


def _validation_response(request: Request, message: str, errors) -> JSONResponse:
    details = _validation_details(errors)
    error_response = build_validation_error_response(
        message=message,
        detail=f"{len(details)} validation error(s)",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        path=str(request.url.path),
        errors=details,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(exc.errors()),
    )
    return _validation_response(request, "Request validation failed", exc.errors())


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised while building responses."""
    logger.warning(
        "Pydantic validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        exc.error_count(),
    )
    return _validation_response(request, "Data validation failed", exc.errors())


@app.exception_handler(BusinessRuleError)
async def business_rule_exception_handler(request: Request, exc: BusinessRuleError):
    """Rejected status transitions are conflicts; other rule breaks are 422."""
    if isinstance(exc, StatusTransitionError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    logger.info(
        "Business rule rejected request %s to %s: %s",
        get_request_id(),
        request.url.path,
        exc.message,
    )

    error_response = build_error_response(
        error_type=ErrorType.BUSINESS_RULE_ERROR,
        message=exc.message,
        detail=type(exc).__name__,
        status_code=status_code,
        path=str(request.url.path),
        reason=exc.reason,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class _DatabaseFailure(NamedTuple):
    error_type: ErrorType
    message: str
    detail: str
    status_code: int
    retry_after: int | None = None


_CONNECTION_FAILED = _DatabaseFailure(
    ErrorType.DATABASE_ERROR,
    "Database connection failed",
    "Unable to connect to the database. Please try again later.",
    status.HTTP_503_SERVICE_UNAVAILABLE,
    retry_after=5,
)

# Handlers resolve along the exception MRO; the most specific class wins.
_DATABASE_FAILURES: dict[type[Exception], _DatabaseFailure] = {
    OperationalError: _CONNECTION_FAILED,
    DBAPIError: _CONNECTION_FAILED,
    SQLAlchemyTimeoutError: _DatabaseFailure(
        ErrorType.TIMEOUT_ERROR,
        "Database query timeout",
        "The database query took too long to complete. Please try again.",
        status.HTTP_504_GATEWAY_TIMEOUT,
        retry_after=3,
    ),
    IntegrityError: _DatabaseFailure(
        ErrorType.CONFLICT,
        "Data integrity constraint violation",
        "The operation would violate a database constraint.",
        status.HTTP_409_CONFLICT,
    ),
    DatabaseError: _DatabaseFailure(
        ErrorType.DATABASE_ERROR,
        "Database operation failed",
        "An error occurred while accessing the database. Please try again.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        retry_after=3,
    ),
}


async def database_exception_handler(request: Request, exc: Exception):
    """Translate SQLAlchemy failures into the structured error payload."""
    failure = next(
        _DATABASE_FAILURES[cls] for cls in type(exc).__mro__ if cls in _DATABASE_FAILURES
    )
    logger.error(
        "%s for request %s to %s: %s",
        type(exc).__name__,
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=failure.error_type,
        message=failure.message,
        detail=failure.detail,
        status_code=failure.status_code,
        path=str(request.url.path),
        retry_after=failure.retry_after,
    )
    return JSONResponse(
        status_code=failure.status_code,
        content=error_response.model_dump(mode="json"),
    )


for _exc_class in _DATABASE_FAILURES:
    app.add_exception_handler(_exc_class, database_exception_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        detail=f"An unexpected error occurred: {type(exc).__name__}",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
        retry_after=5,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(wrestlers.router, prefix="/wrestlers", tags=["wrestlers"])
app.include_router(tag_teams.router, prefix="/tag-teams", tags=["tag-teams"])
app.include_router(managers.router, prefix="/managers", tags=["managers"])
app.include_router(referees.router, prefix="/referees", tags=["referees"])
app.include_router(stables.router, prefix="/stables", tags=["stables"])
app.include_router(titles.router, prefix="/titles", tags=["titles"])
app.include_router(venues.router, prefix="/venues", tags=["venues"])
app.include_router(events.router, prefix="/events", tags=["events"])
