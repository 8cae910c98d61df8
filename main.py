"""FastAPI entry point for the classroom dashboard service."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import get_settings
from errors import NotFoundError, RecordValidationError, StoreError
from models.errors import ErrorCode, error_payload, format_error
from services.record_store import get_record_store

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start/stop the shared record store connection pool."""
    store = get_record_store()
    await store.start()
    yield
    await store.close()


app = FastAPI(
    title="Classroom Dashboard",
    description="Classes, rosters, gradebook, attendance and lesson planning",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error mapping ───────────────────────────────────────────
# Handlers resolve along the exception MRO: NotFoundError wins over StoreError.

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info(format_error(ErrorCode.NOT_FOUND, exc.detail))
    return JSONResponse(
        status_code=404,
        content=error_payload(ErrorCode.NOT_FOUND, exc.detail, retryable=False),
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.warning(format_error(ErrorCode.STORE_UNAVAILABLE, str(exc)))
    return JSONResponse(
        status_code=502,
        content=error_payload(ErrorCode.STORE_UNAVAILABLE, exc.detail, retryable=exc.retryable),
    )


@app.exception_handler(RecordValidationError)
async def validation_error_handler(request: Request, exc: RecordValidationError):
    return JSONResponse(
        status_code=422,
        content=error_payload(ErrorCode.INVALID_REQUEST, str(exc)),
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_payload(ErrorCode.INTERNAL_ERROR, "Internal server error"),
    )


# ── Register routers ────────────────────────────────────────
from api.health import router as health_router  # noqa: E402
from api.dashboard import router as dashboard_router  # noqa: E402
from api.gradebook import router as gradebook_router  # noqa: E402
from api.calendar import router as calendar_router  # noqa: E402
from api.records import router as records_router  # noqa: E402

app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(gradebook_router)
app.include_router(calendar_router)
app.include_router(records_router)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.service_port,
        reload=settings.debug,
    )
