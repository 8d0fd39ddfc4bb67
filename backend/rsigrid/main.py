"""
RSIGrid Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rsigrid.core.config import settings
from rsigrid.core.logging_config import setup_logging
from rsigrid.api.v1 import router as api_v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    # Initialize Redis cache
    from rsigrid.services.cache.redis_client import init_redis, close_redis
    redis_client = await init_redis()
    if redis_client:
        logger.info("Redis cache connected")
    else:
        logger.info("Redis unavailable - using in-memory cache")

    # Start grid poller (periodic indicator refresh)
    from rsigrid.services.grid.poller import start_grid_poller, stop_grid_poller
    if settings.enable_poller:
        poller = await start_grid_poller()
    else:
        poller = None
        logger.info("Grid poller disabled (enable_poller=false)")

    yield

    # Shutdown
    logger.info("Shutting down...")
    if poller:
        await stop_grid_poller()

    from rsigrid.services.data_ingestion.binance_adapter import close_binance_client
    await close_binance_client()
    await close_redis()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    RSIGrid Live Indicator API

    ## Architecture
    - **Candle Source**: Fetches klines from the Binance public REST API
    - **Indicator Engine**: RSI (Wilder) and SMA-of-RSI (pure Python/NumPy)
    - **Grid Service**: Concurrent per-symbol fetch + compute
    - **Grid Poller**: Refreshes the configured grid every 60 seconds

    ## Core Principles
    - Every indicator point carries its source candle's open time
    - A failed symbol is an empty snapshot, never an error for the grid
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow both frontend ports
cors_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "RSIGrid Backend API",
        "docs": "/docs",
        "health": "/health",
    }
