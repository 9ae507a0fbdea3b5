"""
Routes registration for the FastAPI application.

Centralizes all router registrations for clean application setup.
"""

from fastapi import FastAPI

from simpleca.api.v1.download.router import router as download_router
from simpleca.api.v1.health.router import router as health_router
from simpleca.api.v1.leaf.router import router as leaf_router
from simpleca.api.v1.root_ca.router import router as root_ca_router


def register_routes(app: FastAPI) -> None:
    """
    Register all application routers.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix)
    app.include_router(health_router)

    # Root CA endpoints, including the legacy /api/ca/status alias
    app.include_router(root_ca_router)

    # Leaf certificate endpoints
    app.include_router(leaf_router)

    # Leaf artifact downloads
    app.include_router(download_router)
