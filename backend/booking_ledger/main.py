"""
Booking Ledger API - Main Application Entry Point

A single-user booking ledger:
- Create, edit, delete and search bookings
- Payment totals (revenue, paid, remaining)
- JSON backup export and import
- Collection persisted to one storage slot (file or Redis key)
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from booking_ledger.core.config import get_settings
from booking_ledger.core.errors import LedgerError
from booking_ledger.core.logging import setup_logging, get_logger
from booking_ledger.core.metrics import metrics_endpoint
from booking_ledger.api.router import api_router
from booking_ledger.api.middleware import RequestLoggingMiddleware
from booking_ledger.infrastructure.redis_client import RedisClient
from booking_ledger.services.booking_store import BookingStore
from booking_ledger.services.storage_factory import get_storage

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Load the collection once; every request shares this store
    app.state.store = BookingStore(get_storage(settings))

    yield

    RedisClient.close()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Single-user booking ledger with JSON backup and restore",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    """ValidationError -> 422, FormatError -> 400, shown to the user as a notification."""
    logger.warning("request_rejected", error_type=type(exc).__name__, detail=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint for Docker and load balancers."""
    store = getattr(request.app.state, "store", None)
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "storage": settings.STORAGE_BACKEND,
        "bookings": len(store) if store is not None else 0,
    }


@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
