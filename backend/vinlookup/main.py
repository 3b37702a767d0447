"""
VIN Lookup FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vinlookup.api.routes import recalls, vin
from vinlookup.config import settings

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("Starting VIN Lookup API...")
    logger.info(f"Decode upstream: {settings.decode_api_url}")
    logger.info(f"Recall upstream: {settings.recall_by_vin_url} / {settings.recall_by_vehicle_url}")

    yield

    logger.info("Shutting down VIN Lookup API...")


# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS middleware for the browser frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(vin.router)
app.include_router(recalls.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "VIN Lookup API",
        "version": settings.api_version,
        "endpoints": {
            "decode": "/vin/decode?vin=...",
            "resolve": "/vin/resolve?vin=...",
            "batch": "POST /vin/batch",
            "recalls": "/api/recalls?vin=... or ?make=&model=&year=",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"ok": True}
