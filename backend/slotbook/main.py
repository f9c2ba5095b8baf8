# backend/slotbook/main.py
"""
FastAPI application for the booking slot engine.

Run locally with:
    uvicorn slotbook.main:app --reload
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .core.config import settings
from .core.constants import BRAND_NAME
from .core.exceptions import DomainException
from .routes import prometheus
from .routes.v1 import availability as availability_v1, bookings as bookings_v1

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} availability API starting up...")
    logger.info(f"Environment: {settings.environment}")
    yield
    logger.info(f"{BRAND_NAME} availability API shutting down...")


app = FastAPI(
    lifespan=app_lifespan,
    title=f"{BRAND_NAME} Availability API",
    description="Bookable slots, weekly hours, closures and checkout holds",
    version=__version__,
)

app.add_middleware(GZipMiddleware, minimum_size=500)


@app.exception_handler(DomainException)
async def handle_domain_exception(request: Request, exc: DomainException) -> JSONResponse:
    """Fallback for domain errors a route did not translate itself."""
    http_exc = exc.to_http_exception()
    if http_exc.status_code >= 500:
        logger.error(f"Unhandled domain error on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"detail": http_exc.detail},
        headers=getattr(http_exc, "headers", None),
    )


# Create API v1 router
api_v1 = APIRouter(prefix="/api/v1")

# Mount v1 routes
api_v1.include_router(availability_v1.router, prefix="/businesses/{business_id}/availability")
api_v1.include_router(bookings_v1.router, prefix="/bookings")

app.include_router(api_v1)
app.include_router(prometheus.router)


@app.get("/health")
def health_check() -> dict:
    return {"status": "healthy", "service": BRAND_NAME.lower(), "environment": settings.environment}

