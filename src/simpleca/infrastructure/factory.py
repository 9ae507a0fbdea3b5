"""
Infrastructure factory for provider selection.

Selects repository implementations based on configuration. Only the
``local`` provider (files in the managed storage directory) exists.

Usage:
    from simpleca.infrastructure import InfrastructureFactory
    from simpleca.config import get_settings

    # Option 1: From settings
    factory = InfrastructureFactory.from_settings(get_settings())

    # Option 2: Manual configuration
    factory = InfrastructureFactory(provider="local", base_dir="/tmp/ca")

    root_ca_repo = factory.get_root_ca_repository()
    registry_repo = factory.get_registry_repository()
    artifact_repo = factory.get_artifact_repository()
"""

from pathlib import Path
from typing import TYPE_CHECKING, Literal

from loguru import logger

from simpleca.infrastructure.repositories import (
    ArtifactRepository,
    RegistryRepository,
    RootCARepository,
)

if TYPE_CHECKING:
    from simpleca.config import Settings

InfrastructureProvider = Literal["local"]

DEFAULT_BASE_DIR = "./data"


class InfrastructureFactory:
    """
    Factory for creating infrastructure repository instances.

    All repositories created by one factory share the same storage
    directory.
    """

    def __init__(self, provider: InfrastructureProvider | None = None, **config):
        """
        Initialize infrastructure factory.

        Args:
            provider: Infrastructure provider. If None, uses "local".
            **config: Provider-specific options (base_dir, root_key_file,
                      root_cert_file, root_cert_der_file, registry_file)

        Raises:
            ValueError: If provider is not supported
        """
        if provider is None:
            provider = "local"
        if provider != "local":
            raise ValueError(f"Unsupported provider: {provider}")

        self.provider = provider
        self.config = config

        logger.debug(f"Initialized InfrastructureFactory with provider: {provider}")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "InfrastructureFactory":
        """
        Create factory from Settings object.

        Args:
            settings: Application settings from config.py

        Returns:
            InfrastructureFactory configured from settings
        """
        config = {
            "base_dir": settings.storage_dir,
            "root_key_file": settings.root_key_file,
            "root_cert_file": settings.root_cert_file,
            "root_cert_der_file": settings.root_cert_der_file,
            "registry_file": settings.registry_file,
        }

        return cls(provider=settings.infrastructure_provider, **config)

    @property
    def base_dir(self) -> str:
        return str(self.config.get("base_dir", DEFAULT_BASE_DIR))

    def ensure_storage(self) -> Path:
        """Create the storage directory (owner-only) if it does not exist."""
        path = Path(self.base_dir)
        if not path.exists():
            path.mkdir(mode=0o700, parents=True)
            logger.info(f"Created storage directory {path}")
        return path

    def get_root_ca_repository(self) -> RootCARepository:
        """
        Get root CA repository for configured provider.

        Returns:
            RootCARepository implementation
        """
        from simpleca.infrastructure.implementations.local import (
            LocalRootCARepository,
        )

        return LocalRootCARepository(
            base_dir=self.base_dir,
            key_file=self.config.get("root_key_file", "root-key.pem"),
            cert_file=self.config.get("root_cert_file", "root-crt.pem"),
            der_file=self.config.get("root_cert_der_file", "root-crt.der"),
        )

    def get_registry_repository(self) -> RegistryRepository:
        """
        Get registry repository for configured provider.

        Returns:
            RegistryRepository implementation
        """
        from simpleca.infrastructure.implementations.local import (
            LocalRegistryRepository,
        )

        return LocalRegistryRepository(
            base_dir=self.base_dir,
            registry_file=self.config.get("registry_file", "certs.json"),
        )

    def get_artifact_repository(self) -> ArtifactRepository:
        """
        Get artifact repository for configured provider.

        Returns:
            ArtifactRepository implementation
        """
        from simpleca.infrastructure.implementations.local import (
            LocalArtifactRepository,
        )

        return LocalArtifactRepository(base_dir=self.base_dir)
