"""
Application lifecycle management.

Handles startup and shutdown events for the FastAPI application.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from simpleca.config import get_settings
from simpleca.infrastructure import InfrastructureFactory


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Creates the storage directory on startup and reports whether a
    root CA is already present.

    Args:
        app: FastAPI application instance
    """
    # Startup
    logger.info(" Starting SimpleCA...")
    logger.info(f"Application version: {app.version}")

    factory = InfrastructureFactory.from_settings(get_settings())
    storage = factory.ensure_storage()
    logger.info(f"Storage directory: {storage.resolve()}")

    if await factory.get_root_ca_repository().exists():
        logger.info("Root CA present")
    else:
        logger.warning("No root CA present; generate or upload one before issuing")

    yield

    # Shutdown
    logger.info(" Shutting down SimpleCA...")
