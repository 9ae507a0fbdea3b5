"""Abstract repository interfaces for infrastructure operations."""

from simpleca.infrastructure.repositories.artifact_repository import (
    ArtifactRepository,
    LeafFileNames,
    UnsafePathError,
)
from simpleca.infrastructure.repositories.registry_repository import (
    CertificateRegistry,
    LeafCertificateEntry,
    RegistryRepository,
)
from simpleca.infrastructure.repositories.root_ca_repository import (
    CertificateFormat,
    RootCARepository,
)

__all__ = [
    "ArtifactRepository",
    "CertificateFormat",
    "CertificateRegistry",
    "LeafCertificateEntry",
    "LeafFileNames",
    "RegistryRepository",
    "RootCARepository",
    "UnsafePathError",
]
