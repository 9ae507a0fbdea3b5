"""
Dependency injection container for SimpleCA.

This module provides centralized dependency injection using FastAPI's Depends
with typing.Annotated for clean type hints throughout the application.
"""

from typing import Annotated

from fastapi import Depends

from simpleca.config import Settings, get_settings
from simpleca.infrastructure import InfrastructureFactory
from simpleca.services import DeletionCoordinator, LeafIssuer, RootCAStore

# ============================================================================
# Settings Dependencies
# ============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings)]
"""Injected Settings instance (cached via lru_cache)."""


# ============================================================================
# Infrastructure Dependencies
# ============================================================================


def get_infrastructure_factory(
    settings: SettingsDep,
) -> InfrastructureFactory:
    """
    Get infrastructure factory from settings.

    Args:
        settings: Application settings (injected)

    Returns:
        Configured infrastructure factory
    """
    return InfrastructureFactory.from_settings(settings)


InfrastructureFactoryDep = Annotated[
    InfrastructureFactory, Depends(get_infrastructure_factory)
]
"""Injected InfrastructureFactory instance."""


# ============================================================================
# Certificate Authority Dependencies
# ============================================================================


def get_root_ca_store(
    factory: InfrastructureFactoryDep,
    settings: SettingsDep,
) -> RootCAStore:
    """
    Get Root CA store service.

    Args:
        factory: Infrastructure factory (injected)
        settings: Application settings (injected)

    Returns:
        Root CA store service
    """
    return RootCAStore(factory, settings)


RootCAStoreDep = Annotated[RootCAStore, Depends(get_root_ca_store)]
"""Injected RootCAStore service."""


def get_leaf_issuer(
    factory: InfrastructureFactoryDep,
    root_ca: RootCAStoreDep,
    settings: SettingsDep,
) -> LeafIssuer:
    """
    Get Leaf issuer service.

    Args:
        factory: Infrastructure factory (injected)
        root_ca: Root CA store (injected)
        settings: Application settings (injected)

    Returns:
        Leaf issuer service
    """
    return LeafIssuer(factory, root_ca=root_ca, settings=settings)


LeafIssuerDep = Annotated[LeafIssuer, Depends(get_leaf_issuer)]
"""Injected LeafIssuer service."""


def get_deletion_coordinator(
    factory: InfrastructureFactoryDep,
) -> DeletionCoordinator:
    """Get deletion coordinator service."""
    return DeletionCoordinator(factory)


DeletionCoordinatorDep = Annotated[
    DeletionCoordinator, Depends(get_deletion_coordinator)
]
"""Injected DeletionCoordinator service."""
