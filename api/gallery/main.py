"""FastAPI application entrypoint, error mapping, and health reporting.

Invariants:
- GalleryError subclasses render as `{status, message}` with their own status code.
- Malformed query, path, and body input renders as a 400 `{status, message}`.
- Internal failures never leak storage detail to the caller.
"""

import logging
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.api.deps import get_db
from gallery.api.router import api_router
from gallery.core.config import settings
from gallery.core.errors import GalleryError, ValidationError, describe_errors
from gallery.db.session import create_tables

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"

logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
logger = logging.getLogger("gallery.main")

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.api_prefix)


@app.on_event("startup")
async def _create_tables() -> None:
    """Create missing tables when running without migrations."""
    if settings.auto_create_tables:
        await create_tables()


@app.exception_handler(GalleryError)
async def _gallery_error_handler(request: Request, exc: GalleryError) -> JSONResponse:
    """Map typed gallery errors onto their HTTP status and payload."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed query, path, and body input like any other validation error."""
    error = ValidationError(f"Invalid request: {describe_errors(exc.errors())}")
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


@app.get("/health", tags=["internal"])
@app.get(f"{settings.api_prefix}/health", tags=["internal"])
async def health(session: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    """Return service status, degraded when the database cannot be reached."""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check database probe failed")
        return {"status": "degraded", "database": "unreachable"}
    return {"status": "ok", "database": "ok"}
