# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the NutriFit delivery API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.config import settings
from app.exceptions import (
    NutriFitException,
    nutrifit_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import eta, health, macros, pauses, schedule

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Headers browser clients (supabase-js included) send on preflight
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Handlers are stateless, so there is nothing to open or close; this only
    logs the configuration the process started with.
    """
    logger.info(f"Starting NutriFit API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list if settings.is_production else ['*']}")
    logger.info(f"ETA average speed: {settings.DEFAULT_AVG_SPEED_KMPH} km/h")

    yield

    logger.info("Shutting down NutriFit API")


# Create FastAPI application
app = FastAPI(
    title="NutriFit Delivery API",
    description="""
## Meal-subscription delivery handlers

| Endpoint | Purpose |
|----------|---------|
| `POST /api/v1/compute-macros-range` | Per-day macro report for a client and date range |
| `POST /api/v1/eta` | Driver ETA to a client address |
| `POST /api/v1/request-pause` | Pause a subscription and skip its deliveries |
| `POST /api/v1/schedule-today` | Materialize today's menu and deliveries (service role only) |

All dates are `YYYY-MM-DD`; "today" is the Asia/Kolkata calendar date.
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Macros", "description": "Nutrition reporting"},
        {"name": "Delivery", "description": "Driver ETA"},
        {"name": "Pauses", "description": "Subscription pauses"},
        {"name": "Scheduler", "description": "Daily menu and delivery materialization"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(NutriFitException, nutrifit_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

app.include_router(macros.router, prefix="/api/v1", tags=["Macros"])
app.include_router(eta.router, prefix="/api/v1", tags=["Delivery"])
app.include_router(pauses.router, prefix="/api/v1", tags=["Pauses"])
app.include_router(schedule.router, prefix="/api/v1", tags=["Scheduler"])
app.include_router(health.router, prefix="/api/v1", tags=["Health"])


# =============================================================================
# Root Endpoints
# =============================================================================

@app.options("/{path:path}", include_in_schema=False)
async def preflight(path: str):
    """
    Answer OPTIONS on any path.

    Real CORS preflights are answered by CORSMiddleware first; this covers
    bare OPTIONS requests without Origin headers.
    """
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "NutriFit Delivery API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
