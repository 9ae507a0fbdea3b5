"""Local file-based infrastructure implementations."""

from simpleca.infrastructure.implementations.local.artifact_repository import (
    LocalArtifactRepository,
)
from simpleca.infrastructure.implementations.local.registry_repository import (
    LocalRegistryRepository,
)
from simpleca.infrastructure.implementations.local.root_ca_repository import (
    LocalRootCARepository,
)

__all__ = [
    "LocalArtifactRepository",
    "LocalRegistryRepository",
    "LocalRootCARepository",
]
