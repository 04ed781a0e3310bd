"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from post_api.api.routes.health import router as health_router
from post_api.api.routes.posts import router as posts_router
from post_api.core.errors import normalize_unknown_error, normalize_validation_error
from post_api.core.logging import setup_logging
from post_api.core.settings import settings
from post_api.db.engine import init_db
from post_api.db.migrations import run_migrations

setup_logging(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("app_start")
    logger.info("config_loaded: %s", settings.safe_dump())
    init_db()
    run_migrations()
    logger.info("Post API ready")
    yield
    logger.info("Post API shutting down")


app = FastAPI(
    title="Post API",
    version="0.1.0",
    description="CRUD endpoint for posts with hypermedia links.",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed payloads and path ids as 400."""
    messages = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    error = normalize_validation_error(messages)
    return JSONResponse(
        status_code=error.http_status,
        content={"detail": error.user_message},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler: log details, return a safe generic message."""
    error = normalize_unknown_error(exc, operation=f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=error.http_status,
        content={"detail": error.user_message},
    )


app.include_router(health_router, tags=["health"])
app.include_router(posts_router, tags=["posts"])


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "post_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
