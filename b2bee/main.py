"""
B2Bee Backend - FastAPI Application
Main entry point with all routes configured.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from b2bee.config import settings
from b2bee.core.exceptions import B2BeeException, ValidationError
from b2bee.core.logging import configure_logging
from b2bee.database import init_db, dispose_engine
from b2bee.schemas.common import HealthResponse

# Import all API routers
from b2bee.api import (
    leads, bookings, webhooks, cron, bees, testimonials,
    abm_pages, abm_marinas, boat_fund, dashboard
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    configure_logging(settings.LOG_LEVEL)
    if settings.AUTO_CREATE_TABLES:
        await init_db()
    logger.info("B2Bee API started (dev mode: %s)", settings.DEV_MODE)
    yield
    # Shutdown
    await dispose_engine()


app = FastAPI(
    title="B2Bee API",
    description="Lead capture, Cal.com bookings and reminders for the B2Bee site",
    version=VERSION,
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(B2BeeException)
async def b2bee_exception_handler(request: Request, exc: B2BeeException):
    if isinstance(exc, ValidationError):
        logger.info("Validation error on %s %s: %s", request.method, request.url.path, exc.issues)
    elif exc.status_code >= 500:
        logger.error("%s on %s %s", exc.message, request.method, request.url.path)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render FastAPI body/query validation failures like our own ValidationError."""
    return await b2bee_exception_handler(request, ValidationError.from_pydantic(exc.errors()))


# Include all routers
app.include_router(leads.router)
app.include_router(bookings.router)
app.include_router(webhooks.router)
app.include_router(cron.router)
app.include_router(bees.router)
app.include_router(testimonials.router)
app.include_router(abm_pages.router)
app.include_router(abm_marinas.router)
app.include_router(boat_fund.router)
app.include_router(dashboard.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "message": "B2Bee API is running",
        "version": VERSION,
        "docs": "/docs"
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Detailed health check."""
    return HealthResponse(version=VERSION)
