"""FastAPI application entry point."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from careerstudio.api.auth import router as auth_router
from careerstudio.api.routes import router as api_router
from careerstudio.api.uploads import router as uploads_router
from careerstudio.api.views import router as views_router
from careerstudio.core.config import get_settings
from careerstudio.core.exceptions import CareerStudioError
from careerstudio.core.logging import get_logger, log_request, request_trace, setup_logging
from careerstudio.db import Base, engine

# Setup logging
setup_logging()
logger = get_logger(__name__)

TRACE_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager."""
    # Startup
    settings = get_settings()
    logger.info("CareerStudio starting up")
    logger.info(f"Storage bucket: {settings.s3_bucket}")
    logger.info(f"Public base URL: {settings.public_base_url}")

    if settings.database_url.startswith("sqlite"):
        # Local development database; other databases are migrated with alembic
        Base.metadata.create_all(bind=engine)

    yield

    # Shutdown
    logger.info("CareerStudio shutting down")


# Create app
app = FastAPI(
    title="CareerStudio",
    description="Careers page builder for recruiters",
    version="1.0.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(auth_router)
app.include_router(api_router)
app.include_router(uploads_router)
app.include_router(views_router)


@app.middleware("http")
async def trace_requests(request: Request, call_next):
    """Tag every log line of a request with its trace ID and log the response."""
    started = time.perf_counter()
    with request_trace(request.headers.get(TRACE_HEADER)) as trace_id:
        response = await call_next(request)
        log_request(request.method, request.url.path, response.status_code, started)
    response.headers[TRACE_HEADER] = trace_id
    return response


@app.exception_handler(CareerStudioError)
async def careerstudio_exception_handler(request: Request, exc: CareerStudioError):
    """Handle CareerStudio exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"CareerStudioError: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.code,
            "message": exc.message,
        },
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
