"""
Power Plant Service - Main Application.

Wires configuration, logging, persistence and the power plant router, and
maps service exceptions onto HTTP responses:

- field validation failure -> 400 validation problem with per-field errors
- malformed payload / query -> 400 problem with a generic hint
- unknown id -> 404 with an empty body
- anything else -> 500 problem without internal detail
"""

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import settings
from .database import close_db, get_session_factory, init_db
from .dependencies import get_backend_capabilities
from .domain.exceptions import (
    PowerPlantNotFoundException,
    PowerPlantValidationException,
    RequestCancelledException,
)
from .logging_config import configure_logging
from .repositories.sqlalchemy_repository import SqlAlchemyPowerPlantRepository
from .routers import power_plant_router
from .routers.schemas import (
    PROBLEM_CONTENT_TYPE,
    SERVER_ERROR_TYPE,
    ProblemDetails,
    ValidationProblemDetails,
)
from .search.owner_search import select_owner_strategy
from .seed import seed_demo_data

configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

logger = structlog.get_logger(__name__)

# nginx's "client closed request"; only ever seen in logs
CLIENT_CLOSED_REQUEST = 499

INVALID_PAYLOAD_HINT = "Check field types and formats (e.g., dates as yyyy-MM-dd)."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info(
        "Starting Power Plant Service",
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
    )

    if settings.DATABASE_AUTO_CREATE:
        await init_db()
        logger.info(
            "Owner search strategy selected",
            strategy=select_owner_strategy(get_backend_capabilities()).value,
        )

    if settings.SEED_DEMO_DATA:
        async with get_session_factory()() as session:
            await seed_demo_data(
                SqlAlchemyPowerPlantRepository(session, get_backend_capabilities())
            )

    logger.info("Power Plant Service started")

    yield

    # Shutdown
    logger.info("Shutting down Power Plant Service")
    await close_db()
    logger.info("Power Plant Service stopped")


app = FastAPI(
    title="Power Plant API",
    description="Create power plant records and list them with paging and owner search",
    version=settings.SERVICE_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Location", "X-Request-ID"],
)


# Request ID middleware
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Bind a request ID into the log context and echo it back."""
    request_id = request.headers.get("X-Request-ID") or f"req-{uuid.uuid4().hex}"
    # Unhandled errors are answered outside this middleware
    request.state.request_id = request_id

    structlog.contextvars.bind_contextvars(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(power_plant_router.router)


def problem_response(status_code: int, body) -> JSONResponse:
    """Serialize a problem model as application/problem+json."""
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        media_type=PROBLEM_CONTENT_TYPE,
    )


@app.exception_handler(PowerPlantValidationException)
async def validation_exception_handler(
    request: Request, exc: PowerPlantValidationException
):
    """Field validation failure: every field error in one response."""
    logger.info(
        "Power plant rejected",
        path=request.url.path,
        fields=list(exc.errors.keys()),
    )
    return problem_response(400, ValidationProblemDetails(errors=exc.errors.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    """Body or query that could not be parsed into the expected types."""
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.info("Malformed request", path=request.url.path, detail=detail)
    return problem_response(
        400,
        ProblemDetails(
            title="Invalid request payload",
            status=400,
            detail=detail,
            hint=INVALID_PAYLOAD_HINT,
        ),
    )


@app.exception_handler(PowerPlantNotFoundException)
async def not_found_exception_handler(
    request: Request, exc: PowerPlantNotFoundException
):
    """Unknown id: 404 with an empty body."""
    logger.info("Power plant not found", plant_id=exc.details.get("id"))
    return Response(status_code=404)


@app.exception_handler(RequestCancelledException)
async def cancelled_exception_handler(
    request: Request, exc: RequestCancelledException
):
    """Client went away; nobody reads this response."""
    return Response(status_code=CLIENT_CLOSED_REQUEST)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "Unhandled exception",
        request_id=request_id,
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )
    response = problem_response(
        500,
        ProblemDetails(type=SERVER_ERROR_TYPE, title="Unexpected error", status=500),
    )
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response
