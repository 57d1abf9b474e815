"""
FastAPI application initialization
"""

from fastapi import FastAPI
from api import __version__
from api.routes import health, runs
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.logging import setup_logging
import logging

setup_logging()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="REST Archiver API",
    description="Trigger archive runs and check service health",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(runs.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting REST Archiver API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Default config file: {settings.CONFIG_PATH}")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "REST Archiver API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "runs": "/runs"
        }
    }
