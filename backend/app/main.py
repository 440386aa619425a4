"""
Nifty Confluence Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.api.v1 import router as api_v1_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Symbol: {settings.yahoo_symbol} ({settings.yahoo_interval}/{settings.yahoo_range})")

    yield

    # Shutdown
    logger.info("Shutting down...")
    from app.services.data_ingestion import get_data_ingestion_service
    await get_data_ingestion_service().close()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Nifty 50 Intraday Confluence API

    ## Architecture
    - **Data Ingestion**: Fetches one-minute bars from Yahoo Finance
    - **Indicator Engine**: Opening range, S/R levels, Wilder RSI (pure Python/NumPy)
    - **Confluence Detector**: Price at a level AND RSI beyond threshold

    ## Core Principles
    - Deterministic: same bars and settings, same output
    - Stateless: every request recomputes from a full batch
    - Fail-soft: bad bars are dropped, bad settings fall back to defaults
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow both frontend ports
cors_origins = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
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
        "message": "Nifty Confluence Backend API",
        "docs": "/docs",
        "health": "/health",
        "intraday": "/api/v1/intraday",
    }
