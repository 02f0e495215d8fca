"""
Main FastAPI application entry point for flow-monitor.
Dynamic Prometheus scrape and alert configuration.
"""

import logging

from fastapi import Depends, FastAPI

from . import __version__
from .api.routes import get_monitoring_service, router
from .monitoring_service import MonitoringService

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="flow-monitor",
    description="Dynamic Prometheus scrape and alert configuration",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": "flow-monitor",
        "version": __version__,
        "status": "running",
        "docs": "/docs"
    }


@app.get("/health")
def health(monitoring_service: MonitoringService = Depends(get_monitoring_service)):
    """Health check endpoint, including whether Prometheus answers."""
    return {
        "status": "healthy",
        "prometheus": "healthy" if monitoring_service.prom.is_healthy() else "unreachable",
    }


app.include_router(router)
