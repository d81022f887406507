import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from mortydex.db.connection import dispose_engine, get_database_type, init_db
from mortydex.errors import InvalidFilter, InvalidPage, StoreError, UpstreamError
from mortydex.services.directory_source import build_directory_client
from mortydex.settings import AppSettings, get_settings

from .api import characters, favorites
from .schemas.error import ErrorType, ValidationErrorDetail
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
)
from .utils.request_context import (
    REQUEST_ID_HEADER,
    get_request_id,
    resolve_request_id,
    set_request_id,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment(active_settings: AppSettings | None = None) -> None:
    """Log warnings for optional configuration that has been left unset."""

    warnings = (active_settings or get_settings()).optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning("  • %s", warning)
        logger.warning("=" * 60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create shared clients on startup and release them on shutdown."""
    validate_environment()

    current = get_settings()
    logger.info("Directory API: %s", current.directory_api_url)
    logger.info("Favorites store: %s", get_database_type().upper())

    if get_database_type() == "sqlite":
        await init_db()

    app.state.directory_client = build_directory_client(current)

    yield

    logger.info("Shutting down Mortydex API")
    await app.state.directory_client.aclose()
    await dispose_engine()


app = FastAPI(
    title="Mortydex API",
    version="0.1.0",
    description=(
        "Validated gateway to the Rick and Morty character directory plus a"
        " per-user favorites store."
    ),
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
logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag each request with an ID, reusing the caller's when one is supplied."""
    request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
    set_request_id(request_id)
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def _json(payload, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


@app.exception_handler(InvalidPage)
async def invalid_page_exception_handler(request: Request, exc: InvalidPage):
    """Reject out-of-range or non-numeric pages before contacting the upstream."""
    logger.warning(
        "Invalid page for request %s to %s: %r",
        get_request_id(),
        request.url.path,
        exc.value,
    )

    error_response = build_validation_error_response(
        message=exc.message,
        detail="page must be an integer between 1 and 1000",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        errors=[
            ValidationErrorDetail(field="page", message=exc.message, value=exc.value)
        ],
    )
    return _json(error_response, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(InvalidFilter)
async def invalid_filter_exception_handler(request: Request, exc: InvalidFilter):
    """Return every field-level filter error in one response."""
    logger.warning(
        "Invalid filter for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(exc.errors),
    )

    error_response = build_validation_error_response(
        message=exc.message,
        detail=f"{len(exc.errors)} validation error(s)",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        errors=exc.errors,
    )
    return _json(error_response, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(UpstreamError)
async def upstream_exception_handler(request: Request, exc: UpstreamError):
    """Surface directory failures with the upstream's own message."""
    logger.error(
        "Upstream error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        exc.message,
    )

    error_response = build_error_response(
        error_type=ErrorType.UPSTREAM_ERROR,
        message=exc.message,
        detail=(
            f"Upstream status {exc.status_code}" if exc.status_code is not None else None
        ),
        status_code=status.HTTP_502_BAD_GATEWAY,
        path=str(request.url.path),
    )
    return _json(error_response, status.HTTP_502_BAD_GATEWAY)


@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError):
    """Favorites store failures are transient from the caller's perspective."""
    logger.error(
        "Favorites store error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.STORE_ERROR,
        message="Favorites store unavailable",
        detail=str(exc),
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        path=str(request.url.path),
        retry_after=1,
    )
    return _json(error_response, status.HTTP_503_SERVICE_UNAVAILABLE)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    errors = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Request validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        path=str(request.url.path),
        errors=errors,
    )
    return _json(error_response, status.HTTP_422_UNPROCESSABLE_ENTITY)


@app.exception_handler(IntegrityError)
async def database_integrity_exception_handler(request: Request, exc: IntegrityError):
    """Handle database integrity constraint errors."""
    logger.error(
        "Database integrity error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.CONFLICT,
        message="Data integrity constraint violation",
        detail="The operation would violate a database constraint.",
        status_code=status.HTTP_409_CONFLICT,
        path=str(request.url.path),
    )
    return _json(error_response, status.HTTP_409_CONFLICT)


@app.exception_handler(OperationalError)
@app.exception_handler(DBAPIError)
async def database_connection_exception_handler(request: Request, exc: Exception):
    """Handle database connection errors."""
    logger.error(
        "Database connection error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.DATABASE_ERROR,
        message="Database connection failed",
        detail="Unable to connect to the database. Please try again later.",
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        path=str(request.url.path),
        retry_after=5,
    )
    return _json(error_response, status.HTTP_503_SERVICE_UNAVAILABLE)


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(characters.router, prefix="/characters", tags=["characters"])
app.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
